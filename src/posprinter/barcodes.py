"""
1D Barcodes for ESC/POS Printers.

Barcodes are rendered by the printer itself (GS k). Each symbology has its
own payload rules, checked before any command bytes are produced.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Callable, Mapping

from .constants import (
    BARCODE_FONT,
    BARCODE_HEIGHT,
    BARCODE_POSITION,
    BARCODE_PRINT,
    BARCODE_WIDTH,
    NUL,
)
from .errors import InputError
from .params import check_enum

DIGITS = frozenset("0123456789")
CODE39_CHARS = frozenset("0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ $%*+-./")
CODABAR_CHARS = frozenset("0123456789ABCDabcd$+-./:")

# Module width accepted by GS w; larger values are clamped
MAX_BARCODE_WIDTH = 5


class BarcodeSystem(IntEnum):
    """Barcode symbologies with their GS k function A ordinal."""

    UPCA = 0
    UPCE = 1
    EAN13 = 2
    EAN8 = 3
    CODE39 = 4
    ITF = 5
    CODABAR = 6

    def __str__(self) -> str:
        return {BarcodeSystem.UPCA: "UPC-A", BarcodeSystem.UPCE: "UPC-E"}.get(self, self.name)


class BarcodeFont(IntEnum):
    """Font used for HRI characters."""

    A = 0
    B = 1
    C = 2
    D = 3
    E = 4


class BarcodePosition(IntEnum):
    """Where HRI characters are printed relative to the bars."""

    NONE = 0
    ABOVE = 1
    BELOW = 2
    BOTH = 3


class BarcodeWidth(IntEnum):
    """Module width presets (GS w n)."""

    XS = 1
    S = 2
    M = 3
    L = 4
    XL = 5


class BarcodeHeight(IntEnum):
    """Bar height presets in dots (GS h n)."""

    XS = 51
    S = 102
    M = 153
    L = 204
    XL = 255


@dataclass(frozen=True)
class BarcodeOption:
    """Barcode appearance. Width and height accept presets or raw dot values."""

    width: int = BarcodeWidth.M
    height: int = BarcodeHeight.S
    font: BarcodeFont = BarcodeFont.A
    position: BarcodePosition = BarcodePosition.BELOW

    def __post_init__(self):
        barcode_width(self.width)
        barcode_height(self.height)
        check_enum("Barcode font", BarcodeFont, self.font)
        check_enum("Barcode position", BarcodePosition, self.position)


def _all_digits(data: str) -> bool:
    return all(c in DIGITS for c in data)


def _valid_upce(data: str) -> bool:
    # Any payload starting with "0" passes regardless of length
    return (_all_digits(data) and len(data) == 6) or data.startswith("0")


BARCODE_VALIDATORS: Mapping[BarcodeSystem, Callable[[str], bool]] = {
    BarcodeSystem.UPCA: lambda d: _all_digits(d) and len(d) in (11, 12),
    BarcodeSystem.UPCE: _valid_upce,
    BarcodeSystem.EAN8: lambda d: _all_digits(d) and len(d) in (7, 8),
    BarcodeSystem.EAN13: lambda d: _all_digits(d) and len(d) in (12, 13),
    BarcodeSystem.ITF: lambda d: len(d) >= 2 and _all_digits(d),
    BarcodeSystem.CODE39: lambda d: len(d) >= 1 and all(c in CODE39_CHARS for c in d),
    BarcodeSystem.CODABAR: lambda d: len(d) >= 2 and all(c in CODABAR_CHARS for c in d),
}


def validate_barcode(system: BarcodeSystem, data: str) -> None:
    """
    Check a payload against the rules of its symbology.

    Raises:
        InputError: If the payload is not valid for the symbology
    """
    system = check_enum("Barcode system", BarcodeSystem, system)
    if not BARCODE_VALIDATORS[system](data):
        raise InputError(f"Invalid {system} data: {data!r}")


def barcode_width(width: int) -> bytes:
    """GS w: module width, clamped to 1..5."""
    if width < 1:
        raise InputError("Barcode width must be > 0")
    return BARCODE_WIDTH + bytes([min(width, MAX_BARCODE_WIDTH)])


def barcode_height(height: int) -> bytes:
    """GS h: bar height in dots (1..255)."""
    if not 1 <= height <= 0xFF:
        raise InputError(f"Barcode height must be in 1..=255 (got {height})")
    return BARCODE_HEIGHT + bytes([height])


def barcode_font(font: BarcodeFont) -> bytes:
    """GS f: HRI font."""
    return BARCODE_FONT + bytes([check_enum("Barcode font", BarcodeFont, font)])


def barcode_position(position: BarcodePosition) -> bytes:
    """GS H: HRI position."""
    return BARCODE_POSITION + bytes(
        [check_enum("Barcode position", BarcodePosition, position)]
    )


def barcode_print(system: BarcodeSystem, data: str) -> bytes:
    """GS k m d1...dk NUL: print the barcode."""
    system = check_enum("Barcode system", BarcodeSystem, system)
    return BARCODE_PRINT + bytes([system]) + data.encode("utf-8") + bytes([NUL])


@dataclass(frozen=True)
class Barcode:
    """A validated barcode payload with its appearance."""

    system: BarcodeSystem
    data: str
    option: BarcodeOption = field(default_factory=BarcodeOption)

    def __post_init__(self):
        validate_barcode(self.system, self.data)

    def commands(self) -> list[bytes]:
        """
        Build the barcode command sequence.

        Returns:
            Width, height, font and position setup commands followed by the
            print command
        """
        return [
            barcode_width(self.option.width),
            barcode_height(self.option.height),
            barcode_font(self.option.font),
            barcode_position(self.option.position),
            barcode_print(self.system, self.data),
        ]
