"""Async client that builds a printer action queue and sends it to the print service.

The ``Printer`` never talks to the device. It records one ``PrintAction`` per
call, in call order, and ``print()`` posts the whole queue as one JSON body
to the local print service, which drives the hardware.
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

import aiohttp

import config
from imaging import image_file_to_base64
from print_actions import (
    ActionKind,
    BarcodeMode,
    ImageMode,
    JustifyMode,
    PrintAction,
    PrintMode,
    QR_DEFAULT_SIZE,
    QrCode,
    QrModel,
)

logger = logging.getLogger(__name__)


class PrintServiceError(Exception):
    """The print service could not be reached or did not accept the request.

    Transport failures and non-success responses raise this same error. For a
    rejection, ``status`` and ``body`` hold what the service answered.
    """

    def __init__(self, message: str, status: int | None = None, body: str | None = None) -> None:
        super().__init__(message)
        self.status = status
        self.body = body


def _is_success(status: int) -> bool:
    return 200 <= status < 300


class Printer:
    """Ordered, append-only transcript of printer operations for one print job."""

    def __init__(
        self,
        printer_name: str | None = None,
        *,
        text_asian: bool | None = None,
        text_special: bool | None = None,
        key: str | None = None,
        service_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.printer_name: str = config.PRINTER_NAME if printer_name is None else printer_name
        self.text_asian: bool = config.PRINTER_TEXT_ASIAN if text_asian is None else text_asian
        self.text_special: bool = config.PRINTER_TEXT_SPECIAL if text_special is None else text_special
        self.key: str | None = config.PRINTER_KEY if key is None else key
        self.service_url: str = (service_url or config.PRINT_SERVICE_URL).rstrip("/")
        # None falls back to config; 0 or less turns the timeout off
        if timeout is None:
            timeout = config.PRINT_SERVICE_TIMEOUT
        elif timeout <= 0:
            timeout = None
        self.timeout: float | None = timeout
        self._actions: list[PrintAction] = []

    @property
    def actions(self) -> tuple[PrintAction, ...]:
        """Snapshot of queued actions in call order."""
        return tuple(self._actions)

    def _append(self, action: PrintAction) -> None:
        self._actions.append(action)
        logger.debug("Queued %s (#%d)", action.kind.value, len(self._actions))

    # --- Configuration ---

    def set_printer_name(self, printer_name: str) -> None:
        self.printer_name = printer_name

    def set_key(self, key: str | None) -> None:
        """Set the unlock key (e.g. to remove the service watermark)."""
        self.key = key

    def set_printer_text_asian(self, value: bool) -> None:
        """Queue later ``text()`` calls as textAsian for better CJK support."""
        self.text_asian = value

    def set_printer_text_special(self, value: bool) -> None:
        """Ask the service to render this job's text as unicode."""
        self.text_special = value

    # --- Actions ---

    def select_print_mode(self, mode: PrintMode | str | None = None) -> None:
        self._append(PrintAction(ActionKind.SELECT_PRINT_MODE, payload=mode))

    def justify(self, mode: JustifyMode | str) -> None:
        self._append(PrintAction(ActionKind.JUSTIFY, payload=mode))

    def print_base64_image(self, image_base64: str, image_mode: ImageMode | str | None = None) -> None:
        """Queue an image given as Base64 text; it is forwarded undecoded."""
        self._append(
            PrintAction(
                ActionKind.PRINT_BASE64_IMAGE,
                payload=image_base64,
                extra_data=ImageMode.IMG_DEFAULT if image_mode is None else image_mode,
            )
        )

    def print_image_file(self, path: str | Path, image_mode: ImageMode | str | None = None) -> None:
        """Convert a local image to Base64 and queue it like ``print_base64_image``."""
        self.print_base64_image(image_file_to_base64(path), image_mode)

    def text(self, text: str) -> None:
        # Kind is fixed now; toggling text_asian later does not touch this record.
        kind = ActionKind.TEXT_ASIAN if self.text_asian else ActionKind.TEXT
        self._append(PrintAction(kind, payload=text))

    def barcode(self, value: str, mode: BarcodeMode | str | None = None) -> None:
        """Queue a barcode; without ``mode`` the service picks the symbology."""
        self._append(PrintAction(ActionKind.BARCODE, payload=value, extra_data=mode))

    def qr_code(self, value: str, size: int | None = None, model: QrModel | str | None = None) -> None:
        """Queue a QR code.

        Args:
            value: content to encode
            size: module size, 1-16 (default 3); out-of-range values are sent as-is
            model: QR model (default QR_MODEL_2)
        """
        descriptor = QrCode(
            content=value,
            size=QR_DEFAULT_SIZE if size is None else size,
            model=QrModel.QR_MODEL_2 if model is None else model,
        )
        self._append(PrintAction(ActionKind.QR_CODE, payload=descriptor))

    def feed(self, value: int | None = None) -> None:
        """Feed ``value`` lines; without a value the service default applies."""
        self._append(PrintAction(ActionKind.FEED, payload=value))

    def set_emphasis(self, value: bool) -> None:
        self._append(PrintAction(ActionKind.SET_EMPHASIS, payload=value))

    def commands(self, data: str) -> None:
        """Queue raw printer commands, forwarded verbatim."""
        self._append(PrintAction(ActionKind.COMMANDS, payload=data))

    def pulse(self) -> None:
        """Kick the cash drawer."""
        self._append(PrintAction(ActionKind.PULSE))

    def cut(self) -> None:
        self._append(PrintAction(ActionKind.CUT))

    def close(self) -> None:
        self._append(PrintAction(ActionKind.CLOSE))

    # --- Service calls ---

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON body sent by ``print()``."""
        body: dict[str, Any] = {}
        if self.key is not None:
            body["key"] = self.key
        body["printer"] = self.printer_name
        body["payload"] = [action.to_dict() for action in self._actions]
        body["textSpecial"] = self.text_special
        return body

    def _client_timeout(self) -> aiohttp.ClientTimeout:
        # total=None disables aiohttp's built-in default
        return aiohttp.ClientTimeout(total=self.timeout)

    async def print(self) -> dict[str, bool]:
        """Send the whole queue to the print service.

        The queue is kept afterwards, so calling again resends every action.

        Raises:
            PrintServiceError: on transport failure or a non-success status
        """
        url = f"{self.service_url}/print"
        body = self.to_payload()
        logger.info("Sending %d action(s) to printer %r", len(body["payload"]), self.printer_name)
        try:
            async with aiohttp.ClientSession(timeout=self._client_timeout()) as session:
                async with session.post(url, json=body) as response:
                    if not _is_success(response.status):
                        detail = await response.text(errors="replace")
                        logger.error("Print rejected by service: HTTP %d %s", response.status, detail[:200])
                        raise PrintServiceError("Failed to print", status=response.status, body=detail)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error("Print request to %s failed: %s", url, e)
            raise PrintServiceError("Failed to print") from e
        logger.info("Printed on %r", self.printer_name)
        return {"success": True}

    async def get_printers(self) -> list[str]:
        """Return printer names known to the print service, unmodified.

        Raises:
            PrintServiceError: on transport failure, a non-success status or a non-JSON
                (including empty) body
        """
        url = f"{self.service_url}/printers"
        try:
            async with aiohttp.ClientSession(timeout=self._client_timeout()) as session:
                async with session.get(url) as response:
                    if not _is_success(response.status):
                        detail = await response.text(errors="replace")
                        logger.error("Printer list rejected by service: HTTP %d %s", response.status, detail[:200])
                        raise PrintServiceError(
                            "Failed getting printer list", status=response.status, body=detail
                        )
                    printers = json.loads(await response.read())
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.error("Printer list request to %s failed: %s", url, e)
            raise PrintServiceError("Failed getting printer list") from e
        logger.info("Print service printers: %s", printers)
        return printers
