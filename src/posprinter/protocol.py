"""
ESC/POS Command Builders.

One method per printer feature. Every method returns the exact bytes to
send (or an ordered list of commands for composite features) and checks
its numeric arguments before building anything.
"""

from enum import IntEnum
from typing import Optional

from . import constants as c
from .barcodes import Barcode, BarcodeOption, BarcodeSystem
from .codes import (
    Aztec,
    AztecOption,
    DataMatrix,
    DataMatrixOption,
    GS1DataBar2D,
    GS1DataBar2DOption,
    MaxiCode,
    MaxiCodeMode,
    Pdf417,
    Pdf417Option,
    QRCode,
    QRCodeOption,
)
from .encoder import Encoder
from .errors import InputError
from .image import BitImage, BitImageOption, ImageSource
from .page_codes import CharacterSet, PageCode
from .params import check_enum
from .status import RealTimeStatusRequest, real_time_status


class UnderlineMode(IntEnum):
    """Underline thickness (ESC - n)."""

    NONE = 0
    SINGLE = 1
    DOUBLE = 2


class Font(IntEnum):
    """Character font (ESC M n)."""

    A = 0
    B = 1
    C = 2


class JustifyMode(IntEnum):
    """Text alignment (ESC a n)."""

    LEFT = 0
    CENTER = 1
    RIGHT = 2


class CashDrawer(IntEnum):
    """Drawer kick-out connector pin (ESC p m)."""

    PIN2 = 0
    PIN5 = 1


class CutMode(IntEnum):
    """Paper cut (GS V 65 n)."""

    FULL = 0
    PARTIAL = 1


MAX_TEXT_SIZE = 8


def _check_byte(name: str, value: int, low: int = 0, high: int = 0xFF) -> int:
    if not low <= value <= high:
        raise InputError(f"{name} must be in {low}..={high} (got {value})")
    return value


class Protocol:
    """
    ESC/POS command builder.

    The encoder is used for text and for characters missing from a page-code
    table.
    """

    def __init__(self, encoder: Optional[Encoder] = None):
        self.encoder = encoder or Encoder()

    # --- Hardware ---

    def init(self) -> bytes:
        """Initialize the printer (ESC @)."""
        return c.HW_INIT

    def reset(self) -> bytes:
        return c.HW_RESET

    def cancel(self) -> bytes:
        """Discard data in the printer's page buffer (CAN)."""
        return c.CANCEL

    def cut(self, mode: CutMode = CutMode.FULL) -> bytes:
        if check_enum("Cut mode", CutMode, mode) == CutMode.PARTIAL:
            return c.PAPER_CUT_PARTIAL
        return c.PAPER_CUT_FULL

    def page_code(self, code: PageCode) -> bytes:
        return c.CHARACTER_PAGE_CODE + bytes([check_enum("Page code", PageCode, code)])

    def character_set(self, code: CharacterSet) -> bytes:
        return c.CHARACTER_SET + bytes([check_enum("Character set", CharacterSet, code)])

    # --- Text style ---

    def bold(self, enabled: bool) -> bytes:
        return c.TEXT_BOLD + bytes([int(enabled)])

    def underline(self, mode: UnderlineMode) -> bytes:
        return c.TEXT_UNDERLINE + bytes([check_enum("Underline mode", UnderlineMode, mode)])

    def double_strike(self, enabled: bool) -> bytes:
        return c.TEXT_DOUBLE_STRIKE + bytes([int(enabled)])

    def font(self, font: Font) -> bytes:
        return c.TEXT_FONT + bytes([check_enum("Font", Font, font)])

    def flip(self, enabled: bool) -> bytes:
        """Rotate characters 90 degrees clockwise (ESC V)."""
        return c.TEXT_FLIP + bytes([int(enabled)])

    def justify(self, mode: JustifyMode) -> bytes:
        return c.TEXT_JUSTIFY + bytes([check_enum("Justify mode", JustifyMode, mode)])

    def reverse(self, enabled: bool) -> bytes:
        """White on black printing (GS B)."""
        return c.TEXT_REVERSE + bytes([int(enabled)])

    def smoothing(self, enabled: bool) -> bytes:
        return c.TEXT_SMOOTHING + bytes([int(enabled)])

    def text_size(self, width: int, height: int) -> bytes:
        """
        Character size multiplier (GS ! n).

        Args:
            width: Horizontal multiplier (1-8)
            height: Vertical multiplier (1-8)

        Raises:
            InputError: If either multiplier is out of range
        """
        _check_byte("Text width", width, 1, MAX_TEXT_SIZE)
        _check_byte("Text height", height, 1, MAX_TEXT_SIZE)
        return c.TEXT_SIZE + bytes([((width - 1) << 4) | (height - 1)])

    def reset_size(self) -> bytes:
        return self.text_size(1, 1)

    def upside_down(self, enabled: bool) -> bytes:
        return c.TEXT_UPSIDE_DOWN + bytes([int(enabled)])

    # --- Paper movement ---

    def feed(self, lines: int = 1) -> bytes:
        """Print and feed n lines (ESC d n)."""
        return c.PAPER_FEED + bytes([_check_byte("Feed lines", lines)])

    def line_spacing(self, value: int) -> bytes:
        """Line spacing in motion units (ESC 3 n)."""
        return c.LINE_SPACING + bytes([_check_byte("Line spacing", value)])

    def reset_line_spacing(self) -> bytes:
        return c.LINE_SPACING_DEFAULT

    def motion_units(self, x: int, y: int) -> bytes:
        """Horizontal and vertical motion units (GS P x y)."""
        _check_byte("Horizontal motion unit", x)
        _check_byte("Vertical motion unit", y)
        return c.MOTION_UNITS + bytes([x, y])

    def cash_drawer(self, pin: CashDrawer) -> bytes:
        return c.CASH_DRAWER + bytes([check_enum("Cash drawer pin", CashDrawer, pin)])

    # --- Data ---

    def text(
        self,
        text: str,
        page_code: Optional[PageCode] = None,
        max_length: Optional[int] = None,
    ) -> bytes:
        """Encode text, through the page-code table when one is given."""
        return self.encoder.encode_text(text, page_code, max_length)

    def custom(self, data: bytes) -> bytes:
        """Raw bytes, sent as they are."""
        return bytes(data)

    def real_time_status(self, request: RealTimeStatusRequest) -> bytes:
        return real_time_status(request)

    # --- Barcodes and 2D symbols ---

    def barcode(
        self, data: str, system: BarcodeSystem, option: Optional[BarcodeOption] = None
    ) -> list[bytes]:
        return Barcode(system, data, option or BarcodeOption()).commands()

    def qrcode(self, data: str, option: Optional[QRCodeOption] = None) -> list[bytes]:
        return QRCode(data, option or QRCodeOption()).commands()

    def pdf417(self, data: str, option: Optional[Pdf417Option] = None) -> list[bytes]:
        return Pdf417(data, option or Pdf417Option()).commands()

    def maxi_code(self, data: str, mode: MaxiCodeMode = MaxiCodeMode.MODE2) -> list[bytes]:
        return MaxiCode(data, mode).commands()

    def gs1_databar_2d(
        self, data: str, option: Optional[GS1DataBar2DOption] = None
    ) -> list[bytes]:
        return GS1DataBar2D(data, option or GS1DataBar2DOption()).commands()

    def data_matrix(self, data: str, option: Optional[DataMatrixOption] = None) -> list[bytes]:
        return DataMatrix(data, option or DataMatrixOption()).commands()

    def aztec(self, data: str, option: Optional[AztecOption] = None) -> list[bytes]:
        return Aztec(data, option or AztecOption()).commands()

    # --- Graphics ---

    def bit_image(self, source: ImageSource, option: Optional[BitImageOption] = None) -> bytes:
        """Raster image command (GS v 0) for a path, encoded bytes or PIL Image."""
        return BitImage(source, option).command()
