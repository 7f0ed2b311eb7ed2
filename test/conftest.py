"""Shared fixtures: isolated config and a fake print service."""

from __future__ import annotations

import asyncio
import socket
from dataclasses import dataclass, field
from typing import Any
from unittest.mock import patch

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer


@pytest.fixture(autouse=True)
def mock_config():
    """Pin builder defaults so tests don't depend on the local .env."""
    with patch("printer.config") as mock_cfg:
        mock_cfg.PRINTER_NAME = ""
        mock_cfg.PRINTER_KEY = None
        mock_cfg.PRINTER_TEXT_SPECIAL = False
        mock_cfg.PRINTER_TEXT_ASIAN = False
        mock_cfg.PRINT_SERVICE_URL = "http://localhost:8000"
        mock_cfg.PRINT_SERVICE_TIMEOUT = None
        yield mock_cfg


@dataclass
class FakePrintService:
    """Stands in for the print service; records every /print body."""

    url: str = ""
    print_status: int = 200
    printers_status: int = 200
    printers: Any = field(default_factory=list)
    printers_raw: str | None = None
    error_body: bytes | None = None
    delay: float = 0.0
    requests: list[dict[str, Any]] = field(default_factory=list)

    async def handle_print(self, request: web.Request) -> web.Response:
        self.requests.append(await request.json())
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.print_status >= 300 and self.error_body is not None:
            return web.Response(status=self.print_status, body=self.error_body, content_type="text/plain", charset="utf-8")
        return web.Response(status=self.print_status, text="ok" if self.print_status < 300 else "bad printer")

    async def handle_printers(self, request: web.Request) -> web.Response:
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.printers_status >= 300 and self.error_body is not None:
            return web.Response(status=self.printers_status, body=self.error_body, content_type="text/plain", charset="utf-8")
        if self.printers_status >= 300:
            return web.Response(status=self.printers_status, text="service down")
        if self.printers_raw is not None:
            return web.Response(text=self.printers_raw)
        return web.json_response(self.printers)


@pytest_asyncio.fixture
async def service():
    """Run a FakePrintService on a random local port."""
    fake = FakePrintService()
    app = web.Application()
    app.router.add_post("/print", fake.handle_print)
    app.router.add_get("/printers", fake.handle_printers)
    server = TestServer(app)
    await server.start_server()
    fake.url = str(server.make_url("/")).rstrip("/")
    yield fake
    await server.close()


@pytest.fixture
def dead_url() -> str:
    """URL of a local port nothing listens on (connection refused)."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"http://127.0.0.1:{port}"
