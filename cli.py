#!/usr/bin/env python3
"""Command-line client for the local print service.

Usage examples (from project root, with venv activated):

  python -m cli printers
      → lists printer names known to the print service.

  python -m cli text "Hello" "World" --printer POS-80 --justify center --qr https://example.com
      → prints two centered lines and a QR code, then cuts.

  python -m cli text "Hello" --dry-run
      → shows the JSON body instead of sending it.

Service URL, default printer and key are taken from config.py / .env.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

import config
from print_actions import BarcodeMode, JustifyMode
from printer import Printer, PrintServiceError

logger = logging.getLogger(__name__)

JUSTIFY_CHOICES = {
    "left": JustifyMode.LEFT,
    "center": JustifyMode.CENTER,
    "right": JustifyMode.RIGHT,
}


def setup_logging() -> None:
    """Rotating file log plus warnings on stderr."""
    log_path = Path(config.LOG_FILE)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
    )
    console = logging.StreamHandler()
    console.setLevel(logging.WARNING)
    logging.basicConfig(
        handlers=[file_handler, console],
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Send print jobs to the local print service.")
    parser.add_argument(
        "--url",
        default=None,
        help=f"Print service base URL (default from config: {config.PRINT_SERVICE_URL}).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("printers", help="List printers known to the print service.")

    text = sub.add_parser("text", help="Print lines of text with optional QR, barcode and image.")
    text.add_argument("lines", nargs="+", help="Lines of text to print.")
    text.add_argument("--printer", default=None, help="Target printer name (default from config).")
    text.add_argument("--key", default=None, help="Unlock key forwarded to the service.")
    text.add_argument("--justify", choices=tuple(JUSTIFY_CHOICES), default=None)
    text.add_argument("--asian", action="store_true", help="Queue text as textAsian.")
    text.add_argument("--special", action="store_true", help="Render text as unicode.")
    text.add_argument("--qr", default=None, help="Content of a QR code printed after the text.")
    text.add_argument("--qr-size", type=int, default=None, help="QR module size (1–16, default 3).")
    text.add_argument("--barcode", default=None, help="Value of a barcode printed after the text.")
    text.add_argument(
        "--barcode-mode",
        choices=[mode.value for mode in BarcodeMode],
        default=None,
        help="Barcode symbology (default chosen by the service).",
    )
    text.add_argument("--image", default=None, help="Local image file printed after the text.")
    text.add_argument("--feed", type=int, default=None, help="Lines to feed before cutting.")
    text.add_argument("--no-cut", action="store_true", help="Do not cut the paper.")
    text.add_argument("--dry-run", action="store_true", help="Print the JSON body instead of sending it.")
    return parser


def build_job(args: argparse.Namespace) -> Printer:
    """Turn parsed ``text`` arguments into a queued Printer."""
    printer = Printer(
        args.printer,
        text_asian=True if args.asian else None,
        text_special=True if args.special else None,
        key=args.key,
        service_url=args.url,
    )
    if args.justify:
        printer.justify(JUSTIFY_CHOICES[args.justify])
    for line in args.lines:
        printer.text(line if line.endswith("\n") else line + "\n")
    if args.qr is not None:
        printer.qr_code(args.qr, size=args.qr_size)
    if args.barcode is not None:
        printer.barcode(args.barcode, args.barcode_mode)
    if args.image is not None:
        printer.print_image_file(args.image)
    printer.feed(args.feed)
    if not args.no_cut:
        printer.cut()
    return printer


async def run(args: argparse.Namespace) -> int:
    try:
        if args.command == "printers":
            printer = Printer(service_url=args.url)
            for name in await printer.get_printers():
                print(name)
            return 0

        job = build_job(args)
        if args.dry_run:
            print(json.dumps(job.to_payload(), ensure_ascii=False, indent=2))
            return 0
        await job.print()
        print(f"Sent {len(job.actions)} action(s) to {job.printer_name or 'default printer'}")
        return 0
    except PrintServiceError as e:
        detail = f" (HTTP {e.status})" if e.status is not None else ""
        print(f"Error: {e}{detail}", file=sys.stderr)
        return 1


def main(argv: list[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    setup_logging()
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
