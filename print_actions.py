"""Print action model: the wire vocabulary sent to the print service.

Every builder call on ``printer.Printer`` records one ``PrintAction``. The
enum values below are the exact strings the print service understands and
must not be renamed.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class ActionKind(str, Enum):
    QR_CODE = "qrCode"
    BARCODE = "barcode"
    PRINT = "print"
    COMMANDS = "commands"
    TEXT = "text"
    TEXT_ASIAN = "textAsian"
    JUSTIFY = "justify"
    PRINT_BASE64_IMAGE = "printBase64Image"
    SELECT_PRINT_MODE = "selectPrintMode"
    CUT = "cut"
    SET_EMPHASIS = "setEmphasis"
    FEED = "feed"
    PULSE = "pulse"
    CLOSE = "close"


class JustifyMode(str, Enum):
    CENTER = "justifyCenter"
    LEFT = "justifyLeft"
    RIGHT = "justifyRight"


class QrModel(str, Enum):
    QR_MODEL_1 = "QR_MODEL_1"
    QR_MODEL_2 = "QR_MODEL_2"
    QR_MICRO = "QR_MICRO"


class BarcodeMode(str, Enum):
    BARCODE_UPCA = "BARCODE_UPCA"
    BARCODE_UPCE = "BARCODE_UPCE"
    BARCODE_JAN13 = "BARCODE_JAN13"
    BARCODE_JAN8 = "BARCODE_JAN8"
    BARCODE_CODE39 = "BARCODE_CODE39"
    BARCODE_ITF = "BARCODE_ITF"
    BARCODE_CODABAR = "BARCODE_CODABAR"


class ImageMode(str, Enum):
    IMG_DEFAULT = "IMG_DEFAULT"
    IMG_DOUBLE_HEIGHT = "IMG_DOUBLE_HEIGHT"
    IMG_DOUBLE_WIDTH = "IMG_DOUBLE_WIDTH"


class PrintMode(str, Enum):
    MODE_DOUBLE_WIDTH = "MODE_DOUBLE_WIDTH"
    MODE_DOUBLE_HEIGHT = "MODE_DOUBLE_HEIGHT"
    MODE_EMPHASIZED = "MODE_EMPHASIZED"
    MODE_FONT_A = "MODE_FONT_A"
    MODE_FONT_B = "MODE_FONT_B"
    MODE_UNDERLINE = "MODE_UNDERLINE"


QR_DEFAULT_SIZE = 3


@dataclass(frozen=True)
class QrCode:
    """QR descriptor; size is documented as 1-16 but not enforced here."""

    content: str
    size: int = QR_DEFAULT_SIZE
    model: QrModel | str = QrModel.QR_MODEL_2

    def to_dict(self) -> dict[str, Any]:
        return {"content": self.content, "size": self.size, "model": _wire(self.model)}


ActionValue = Union[QrCode, ImageMode, PrintMode, JustifyMode, BarcodeMode, str, int, float, bool]


@dataclass(frozen=True)
class PrintAction:
    """One queued printer operation.

    ``None`` marks an absent payload/extra_data so the service applies its own
    default. It is distinct from ``0``, ``""`` and ``False``, which are sent.
    """

    kind: ActionKind
    payload: ActionValue | None = None
    extra_data: ActionValue | None = None

    def to_dict(self) -> dict[str, Any]:
        """Render the wire record ``{type, payload?, extraData?}``."""
        record: dict[str, Any] = {"type": _wire(self.kind)}
        if self.payload is not None:
            record["payload"] = _wire(self.payload)
        if self.extra_data is not None:
            record["extraData"] = _wire(self.extra_data)
        return record


def _wire(value: Any) -> Any:
    """Convert enums and descriptors to JSON-ready values; pass the rest through."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, QrCode):
        return value.to_dict()
    return value
