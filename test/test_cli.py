"""Tests for the command-line client."""

import json
from unittest.mock import AsyncMock, patch

import pytest

from cli import build_arg_parser, build_job, main, run
from printer import Printer, PrintServiceError


def parse(*argv):
    return build_arg_parser().parse_args(list(argv))


def test_build_job_queues_lines_then_feed_and_cut():
    job = build_job(parse("text", "Hello", "World", "--printer", "POS-80"))
    assert job.printer_name == "POS-80"
    assert job.to_payload()["payload"] == [
        {"type": "text", "payload": "Hello\n"},
        {"type": "text", "payload": "World\n"},
        {"type": "feed"},
        {"type": "cut"},
    ]


def test_build_job_with_extras():
    args = parse(
        "text", "Hi", "--justify", "center", "--qr", "https://example.com", "--qr-size", "6",
        "--barcode", "123", "--barcode-mode", "BARCODE_CODE39", "--feed", "3", "--no-cut", "--asian",
    )
    payload = build_job(args).to_payload()["payload"]
    assert payload == [
        {"type": "justify", "payload": "justifyCenter"},
        {"type": "textAsian", "payload": "Hi\n"},
        {"type": "qrCode", "payload": {"content": "https://example.com", "size": 6, "model": "QR_MODEL_2"}},
        {"type": "barcode", "payload": "123", "extraData": "BARCODE_CODE39"},
        {"type": "feed", "payload": 3},
    ]


def test_build_job_image_uses_converter():
    with patch("printer.image_file_to_base64", return_value="QUJD"):
        job = build_job(parse("text", "x", "--image", "logo.png"))
    assert {"type": "printBase64Image", "payload": "QUJD", "extraData": "IMG_DEFAULT"} in job.to_payload()["payload"]


def test_unknown_justify_is_rejected():
    with pytest.raises(SystemExit):
        parse("text", "x", "--justify", "middle")


@pytest.mark.asyncio
async def test_dry_run_prints_body(capsys):
    code = await run(parse("text", "Hello", "--printer", "EPSON1", "--special", "--dry-run"))
    assert code == 0
    body = json.loads(capsys.readouterr().out)
    assert body["printer"] == "EPSON1"
    assert body["textSpecial"] is True
    assert body["payload"][0] == {"type": "text", "payload": "Hello\n"}


@pytest.mark.asyncio
async def test_printers_lists_names(capsys):
    with patch.object(Printer, "get_printers", AsyncMock(return_value=["EPSON1", "STAR2"])):
        code = await run(parse("printers"))
    assert code == 0
    assert capsys.readouterr().out.splitlines() == ["EPSON1", "STAR2"]


@pytest.mark.asyncio
async def test_print_failure_returns_1(capsys):
    error = PrintServiceError("Failed to print", status=500, body="bad printer")
    with patch.object(Printer, "print", AsyncMock(side_effect=error)):
        code = await run(parse("text", "Hello"))
    assert code == 1
    assert "Failed to print (HTTP 500)" in capsys.readouterr().err


@pytest.mark.asyncio
async def test_text_against_service(service, capsys):
    code = await run(parse("--url", service.url, "text", "Hello", "--printer", "EPSON1"))
    assert code == 0
    assert service.requests[0]["printer"] == "EPSON1"
    assert "Sent 3 action(s) to EPSON1" in capsys.readouterr().out


def test_main_sets_up_logging_and_runs(capsys):
    with patch("cli.setup_logging") as setup_logging:
        code = main(["text", "Hello", "--dry-run"])
    setup_logging.assert_called_once()
    assert code == 0
    assert json.loads(capsys.readouterr().out)["payload"][0]["payload"] == "Hello\n"
