"""
2D Symbols for ESC/POS Printers.

QR Code, PDF417, GS1 DataBar (2D), DataMatrix, Aztec and MaxiCode are all
driven through GS ( k. Every subcommand shares one frame:

    GS ( k pL pH cn fn [parameters...]

where cn selects the symbol family, fn the function, and pL/pH count the
bytes from cn onward. Options are validated when they are created, so an
invalid combination never produces command bytes.
"""

from dataclasses import dataclass, field
from enum import IntEnum

from .constants import CODE_2D
from .errors import InputError
from .params import check_enum, pack_length

# Symbol family selectors (cn)
CN_PDF417 = 0x30
CN_QRCODE = 0x31
CN_MAXICODE = 0x32
CN_GS1_DATABAR = 0x33
CN_AZTEC = 0x35
CN_DATAMATRIX = 0x36

# Function codes shared by every family
FN_STORE_DATA = 0x50
FN_PRINT = 0x51

# The "m" byte that follows store/print in most families
SYMBOL_STORE = 0x30

# QR Code model 1/2 holds at most 7089 numeric characters
QRCODE_MAX_DATA = 7089
QRCODE_MAX_SIZE = 15

GS1_EXPANDED_CHARS = frozenset("0123456789ABCD !\"%$'()*+,-./:;<=>?_{")
GS1_EXPANDED_MAX_LENGTH = 255

DATAMATRIX_SQUARE_SIZES = frozenset({
    0, 10, 12, 14, 16, 18, 20, 22, 24, 26, 32, 36, 40, 44, 48, 52,
    64, 72, 80, 88, 96, 104, 120, 132, 144,
})
DATAMATRIX_RECTANGLE_SIZES = frozenset({
    (8, 0), (8, 18), (8, 32),
    (12, 0), (12, 26), (12, 36),
    (16, 0), (16, 36), (16, 48),
})


def symbol_frame(cn: int, fn: int, *params: int) -> bytes:
    """Build GS ( k pL pH cn fn params."""
    low, high = pack_length(len(params), padding=2)
    return CODE_2D + bytes([low, high, cn, fn, *params])


def symbol_data_frame(cn: int, data: bytes, *prefix: int) -> bytes:
    """Build the store-data frame GS ( k pL pH cn 0x50 prefix... data."""
    low, high = pack_length(len(data), padding=2 + len(prefix))
    return CODE_2D + bytes([low, high, cn, FN_STORE_DATA, *prefix]) + data


def symbol_print(cn: int) -> bytes:
    """Print the symbol held in the printer's buffer."""
    return symbol_frame(cn, FN_PRINT, SYMBOL_STORE)


def _check_range(name: str, value: int, low: int, high: int) -> None:
    if not low <= value <= high:
        raise InputError(f"{name} must be in {low}..={high} (got {value})")


# --- QR Code ---


class QRCodeModel(IntEnum):
    """QR Code model (fn 0x41)."""

    MODEL1 = 49
    MODEL2 = 50
    MICRO = 51


class QRCodeCorrectionLevel(IntEnum):
    """QR Code error correction level (fn 0x45)."""

    L = 48
    M = 49
    Q = 50
    H = 51


@dataclass(frozen=True)
class QRCodeOption:
    """QR Code model, module size and correction level."""

    model: QRCodeModel = QRCodeModel.MODEL1
    size: int = 4
    correction_level: QRCodeCorrectionLevel = QRCodeCorrectionLevel.H

    def __post_init__(self):
        if self.size < 1:
            raise InputError(f"QR code size must be > 0 (got {self.size})")


def qrcode_model(model: QRCodeModel) -> bytes:
    return symbol_frame(CN_QRCODE, 0x41, check_enum("QR code model", QRCodeModel, model), 0)


def qrcode_size(size: int) -> bytes:
    """Module size in dots, clamped to 15."""
    if size < 0:
        raise InputError(f"QR code size must be >= 0 (got {size})")
    return symbol_frame(CN_QRCODE, 0x43, min(size, QRCODE_MAX_SIZE))


def qrcode_correction_level(level: QRCodeCorrectionLevel) -> bytes:
    level = check_enum("QR code correction level", QRCodeCorrectionLevel, level)
    return symbol_frame(CN_QRCODE, 0x45, level)


def qrcode_data(data: str) -> bytes:
    return symbol_data_frame(CN_QRCODE, data.encode("utf-8"), SYMBOL_STORE)


def qrcode_print() -> bytes:
    return symbol_print(CN_QRCODE)


@dataclass(frozen=True)
class QRCode:
    """QR Code payload and options."""

    data: str
    option: QRCodeOption = field(default_factory=QRCodeOption)

    def __post_init__(self):
        length = len(self.data.encode("utf-8"))
        if length > QRCODE_MAX_DATA:
            raise InputError(f"QR code data is too long ({length} bytes, max {QRCODE_MAX_DATA})")

    def commands(self) -> list[bytes]:
        return [
            qrcode_model(self.option.model),
            qrcode_size(self.option.size),
            qrcode_correction_level(self.option.correction_level),
            qrcode_data(self.data),
            qrcode_print(),
        ]


# --- PDF417 ---


class Pdf417Type(IntEnum):
    """PDF417 variant (fn 0x46)."""

    STANDARD = 0
    TRUNCATED = 1


@dataclass(frozen=True)
class Pdf417CorrectionLevel:
    """
    PDF417 error correction (fn 0x45).

    Either a fixed level 0-8, or a ratio 1-40 (tenths of a percent of the
    data codewords).
    """

    by_ratio: bool
    value: int

    def __post_init__(self):
        if self.by_ratio:
            _check_range("PDF417 correction ratio", self.value, 1, 40)
        else:
            _check_range("PDF417 correction level", self.value, 0, 8)

    @classmethod
    def level(cls, value: int) -> "Pdf417CorrectionLevel":
        return cls(by_ratio=False, value=value)

    @classmethod
    def ratio(cls, value: int) -> "Pdf417CorrectionLevel":
        return cls(by_ratio=True, value=value)

    def parameters(self) -> tuple[int, int]:
        """Return the (m, n) pair sent to the printer."""
        if self.by_ratio:
            return 49, self.value
        return 48, 48 + self.value


@dataclass(frozen=True)
class Pdf417Option:
    """PDF417 layout. Zero columns or rows lets the printer choose."""

    columns: int = 0
    rows: int = 0
    width: int = 2
    row_height: int = 3
    code_type: Pdf417Type = Pdf417Type.STANDARD
    correction_level: Pdf417CorrectionLevel = field(
        default_factory=lambda: Pdf417CorrectionLevel.ratio(1)
    )

    def __post_init__(self):
        _check_range("PDF417 columns", self.columns, 0, 30)
        if self.rows != 0:
            _check_range("PDF417 rows", self.rows, 3, 90)
        _check_range("PDF417 module width", self.width, 2, 8)
        _check_range("PDF417 row height", self.row_height, 2, 8)


def pdf417_columns(columns: int) -> bytes:
    _check_range("PDF417 columns", columns, 0, 30)
    return symbol_frame(CN_PDF417, 0x41, columns)


def pdf417_rows(rows: int) -> bytes:
    if rows != 0:
        _check_range("PDF417 rows", rows, 3, 90)
    return symbol_frame(CN_PDF417, 0x42, rows)


def pdf417_width(width: int) -> bytes:
    _check_range("PDF417 module width", width, 2, 8)
    return symbol_frame(CN_PDF417, 0x43, width)


def pdf417_row_height(row_height: int) -> bytes:
    _check_range("PDF417 row height", row_height, 2, 8)
    return symbol_frame(CN_PDF417, 0x44, row_height)


def pdf417_correction_level(level: Pdf417CorrectionLevel) -> bytes:
    return symbol_frame(CN_PDF417, 0x45, *level.parameters())


def pdf417_type(code_type: Pdf417Type) -> bytes:
    return symbol_frame(CN_PDF417, 0x46, check_enum("PDF417 type", Pdf417Type, code_type))


def pdf417_data(data: str) -> bytes:
    return symbol_data_frame(CN_PDF417, data.encode("utf-8"), SYMBOL_STORE)


def pdf417_print() -> bytes:
    return symbol_print(CN_PDF417)


@dataclass(frozen=True)
class Pdf417:
    """PDF417 payload and options."""

    data: str
    option: Pdf417Option = field(default_factory=Pdf417Option)

    def commands(self) -> list[bytes]:
        option = self.option
        return [
            pdf417_columns(option.columns),
            pdf417_rows(option.rows),
            pdf417_width(option.width),
            pdf417_row_height(option.row_height),
            pdf417_correction_level(option.correction_level),
            pdf417_type(option.code_type),
            pdf417_data(self.data),
            pdf417_print(),
        ]


# --- MaxiCode ---


class MaxiCodeMode(IntEnum):
    """MaxiCode mode (fn 0x41)."""

    MODE2 = 50
    MODE3 = 51
    MODE4 = 52
    MODE5 = 53
    MODE6 = 54


def maxi_code_mode(mode: MaxiCodeMode) -> bytes:
    return symbol_frame(CN_MAXICODE, 0x41, check_enum("MaxiCode mode", MaxiCodeMode, mode))


def maxi_code_data(data: str) -> bytes:
    return symbol_data_frame(CN_MAXICODE, data.encode("utf-8"), SYMBOL_STORE)


def maxi_code_print() -> bytes:
    return symbol_print(CN_MAXICODE)


@dataclass(frozen=True)
class MaxiCode:
    """MaxiCode payload and mode."""

    data: str
    mode: MaxiCodeMode = MaxiCodeMode.MODE2

    def commands(self) -> list[bytes]:
        return [maxi_code_mode(self.mode), maxi_code_data(self.data), maxi_code_print()]


# --- GS1 DataBar (2D) ---


class GS1DataBar2DWidth(IntEnum):
    """Module width (fn 0x43). The ordinals are not in size order."""

    S = 2
    M = 1
    L = 4


class GS1DataBar2DType(IntEnum):
    """GS1 DataBar stacked variants, sent with the data."""

    STACKED = 72
    STACKED_OMNIDIRECTIONAL = 73
    EXPANDED_STACKED = 76


@dataclass(frozen=True)
class GS1DataBar2DOption:
    """GS1 DataBar (2D) module width and variant."""

    width: GS1DataBar2DWidth = GS1DataBar2DWidth.M
    code_type: GS1DataBar2DType = GS1DataBar2DType.STACKED


def validate_gs1_databar_2d(data: str, code_type: GS1DataBar2DType) -> None:
    """
    Check a GS1 DataBar (2D) payload.

    Stacked variants take exactly 13 digits; Expanded Stacked takes up to
    255 characters from its restricted alphabet, including none at all.

    Raises:
        InputError: If the payload is invalid for the variant
    """
    code_type = check_enum("GS1 DataBar type", GS1DataBar2DType, code_type)
    if code_type == GS1DataBar2DType.EXPANDED_STACKED:
        valid = len(data) <= GS1_EXPANDED_MAX_LENGTH and all(c in GS1_EXPANDED_CHARS for c in data)
    else:
        valid = len(data) == 13 and all(c in "0123456789" for c in data)
    if not valid:
        raise InputError(f"Invalid GS1 DataBar {code_type.name} data: {data!r}")


def gs1_databar_2d_width(width: GS1DataBar2DWidth) -> bytes:
    width = check_enum("GS1 DataBar width", GS1DataBar2DWidth, width)
    return symbol_frame(CN_GS1_DATABAR, 0x43, width)


def gs1_databar_2d_expanded_width() -> bytes:
    """Maximum width for Expanded Stacked; always left to the printer."""
    return symbol_frame(CN_GS1_DATABAR, 0x47, 0, 0)


def gs1_databar_2d_data(data: str, code_type: GS1DataBar2DType) -> bytes:
    code_type = check_enum("GS1 DataBar type", GS1DataBar2DType, code_type)
    return symbol_data_frame(CN_GS1_DATABAR, data.encode("utf-8"), SYMBOL_STORE, code_type)


def gs1_databar_2d_print() -> bytes:
    return symbol_print(CN_GS1_DATABAR)


@dataclass(frozen=True)
class GS1DataBar2D:
    """GS1 DataBar (2D) payload and options."""

    data: str
    option: GS1DataBar2DOption = field(default_factory=GS1DataBar2DOption)

    def __post_init__(self):
        validate_gs1_databar_2d(self.data, self.option.code_type)

    def commands(self) -> list[bytes]:
        return [
            gs1_databar_2d_width(self.option.width),
            gs1_databar_2d_expanded_width(),
            gs1_databar_2d_data(self.data, self.option.code_type),
            gs1_databar_2d_print(),
        ]


# --- DataMatrix ---


@dataclass(frozen=True)
class DataMatrixType:
    """DataMatrix shape: square (side) or rectangle (rows, columns). Zero is automatic."""

    is_rectangle: bool
    rows: int
    columns: int

    def __post_init__(self):
        if self.is_rectangle:
            if (self.rows, self.columns) not in DATAMATRIX_RECTANGLE_SIZES:
                raise InputError(
                    f"Invalid DataMatrix rectangle size: ({self.rows}, {self.columns})"
                )
        elif self.rows != self.columns or self.rows not in DATAMATRIX_SQUARE_SIZES:
            raise InputError(f"Invalid DataMatrix square size: {self.rows}")

    @classmethod
    def square(cls, side: int = 0) -> "DataMatrixType":
        return cls(is_rectangle=False, rows=side, columns=side)

    @classmethod
    def rectangle(cls, rows: int, columns: int) -> "DataMatrixType":
        return cls(is_rectangle=True, rows=rows, columns=columns)

    def parameters(self) -> tuple[int, int, int]:
        """Return the (m, d1, d2) triple sent to the printer."""
        return (1 if self.is_rectangle else 0), self.rows, self.columns


@dataclass(frozen=True)
class DataMatrixOption:
    """DataMatrix shape and module size (2-16 dots)."""

    code_type: DataMatrixType = field(default_factory=DataMatrixType.square)
    size: int = 3

    def __post_init__(self):
        _check_range("DataMatrix size", self.size, 2, 16)


def data_matrix_type(code_type: DataMatrixType) -> bytes:
    return symbol_frame(CN_DATAMATRIX, 0x42, *code_type.parameters())


def data_matrix_size(size: int) -> bytes:
    _check_range("DataMatrix size", size, 2, 16)
    return symbol_frame(CN_DATAMATRIX, 0x43, size)


def data_matrix_data(data: str) -> bytes:
    return symbol_data_frame(CN_DATAMATRIX, data.encode("utf-8"), SYMBOL_STORE)


def data_matrix_print() -> bytes:
    return symbol_print(CN_DATAMATRIX)


@dataclass(frozen=True)
class DataMatrix:
    """DataMatrix payload and options."""

    data: str
    option: DataMatrixOption = field(default_factory=DataMatrixOption)

    def commands(self) -> list[bytes]:
        return [
            data_matrix_type(self.option.code_type),
            data_matrix_size(self.option.size),
            data_matrix_data(self.data),
            data_matrix_print(),
        ]


# --- Aztec ---


@dataclass(frozen=True)
class AztecMode:
    """
    Aztec symbol form and number of data layers.

    Full-range takes 0 (automatic) or 4-32 layers; compact takes 0-4.
    """

    is_compact: bool
    layers: int

    def __post_init__(self):
        if self.is_compact:
            if not 0 <= self.layers <= 4:
                raise InputError(f"Aztec compact layers must be in 0..=4 (got {self.layers})")
        elif self.layers != 0 and not 4 <= self.layers <= 32:
            raise InputError(f"Aztec full-range layers must be 0 or in 4..=32 (got {self.layers})")

    @classmethod
    def full_range(cls, layers: int = 0) -> "AztecMode":
        return cls(is_compact=False, layers=layers)

    @classmethod
    def compact(cls, layers: int = 0) -> "AztecMode":
        return cls(is_compact=True, layers=layers)

    def parameters(self) -> tuple[int, int]:
        return (1 if self.is_compact else 0), self.layers


@dataclass(frozen=True)
class AztecOption:
    """Aztec mode, module size (2-16 dots) and correction level (5-95%)."""

    mode: AztecMode = field(default_factory=AztecMode.full_range)
    size: int = 3
    correction_level: int = 23

    def __post_init__(self):
        _check_range("Aztec size", self.size, 2, 16)
        _check_range("Aztec correction level", self.correction_level, 5, 95)


def aztec_mode(mode: AztecMode) -> bytes:
    return symbol_frame(CN_AZTEC, 0x42, *mode.parameters())


def aztec_size(size: int) -> bytes:
    _check_range("Aztec size", size, 2, 16)
    return symbol_frame(CN_AZTEC, 0x43, size)


def aztec_correction_level(level: int) -> bytes:
    _check_range("Aztec correction level", level, 5, 95)
    return symbol_frame(CN_AZTEC, 0x45, level)


def aztec_data(data: str) -> bytes:
    return symbol_data_frame(CN_AZTEC, data.encode("utf-8"), SYMBOL_STORE)


def aztec_print() -> bytes:
    return symbol_print(CN_AZTEC)


@dataclass(frozen=True)
class Aztec:
    """Aztec payload and options."""

    data: str
    option: AztecOption = field(default_factory=AztecOption)

    def commands(self) -> list[bytes]:
        return [
            aztec_mode(self.option.mode),
            aztec_size(self.option.size),
            aztec_correction_level(self.option.correction_level),
            aztec_data(self.data),
            aztec_print(),
        ]

