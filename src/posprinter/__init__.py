"""ESC/POS command builder and printer driver."""

__version__ = "0.1.0"

from .errors import PrinterError, InputError, TransportError, InvalidResponseError
from .params import pack_length, pack_length4, unpack_length
from .page_codes import PageCode, CharacterSet, get_page_code_table, has_page_code_table
from .encoder import Encoder
from .barcodes import (
    Barcode,
    BarcodeSystem,
    BarcodeFont,
    BarcodePosition,
    BarcodeWidth,
    BarcodeHeight,
    BarcodeOption,
)
from .codes import (
    QRCode,
    QRCodeModel,
    QRCodeCorrectionLevel,
    QRCodeOption,
    Pdf417,
    Pdf417Type,
    Pdf417CorrectionLevel,
    Pdf417Option,
    MaxiCode,
    MaxiCodeMode,
    GS1DataBar2D,
    GS1DataBar2DWidth,
    GS1DataBar2DType,
    GS1DataBar2DOption,
    DataMatrix,
    DataMatrixType,
    DataMatrixOption,
    Aztec,
    AztecMode,
    AztecOption,
)
from .image import BitImage, BitImageOption, BitImageSize, ImageSizeError
from .status import RealTimeStatusRequest, StatusFlag, StatusReading, parse_status
from .instruction import DebugMode, Instruction
from .protocol import Protocol, UnderlineMode, Font, JustifyMode, CashDrawer, CutMode
from .options import PrinterOptions, PrinterStyleState, DEFAULT_CHARACTERS_PER_LINE
from .ui import Line, LineBuilder, LineStyle
from .connection import (
    Driver,
    ConsoleDriver,
    FileDriver,
    NetworkDriver,
    SerialDriver,
    open_driver,
)
from .printer import Printer

__all__ = [
    "PrinterError",
    "InputError",
    "TransportError",
    "InvalidResponseError",
    "pack_length",
    "pack_length4",
    "unpack_length",
    "PageCode",
    "CharacterSet",
    "get_page_code_table",
    "has_page_code_table",
    "Encoder",
    "Barcode",
    "BarcodeSystem",
    "BarcodeFont",
    "BarcodePosition",
    "BarcodeWidth",
    "BarcodeHeight",
    "BarcodeOption",
    "QRCode",
    "QRCodeModel",
    "QRCodeCorrectionLevel",
    "QRCodeOption",
    "Pdf417",
    "Pdf417Type",
    "Pdf417CorrectionLevel",
    "Pdf417Option",
    "MaxiCode",
    "MaxiCodeMode",
    "GS1DataBar2D",
    "GS1DataBar2DWidth",
    "GS1DataBar2DType",
    "GS1DataBar2DOption",
    "DataMatrix",
    "DataMatrixType",
    "DataMatrixOption",
    "Aztec",
    "AztecMode",
    "AztecOption",
    "BitImage",
    "BitImageOption",
    "BitImageSize",
    "ImageSizeError",
    "RealTimeStatusRequest",
    "StatusFlag",
    "StatusReading",
    "parse_status",
    "DebugMode",
    "Instruction",
    "Protocol",
    "UnderlineMode",
    "Font",
    "JustifyMode",
    "CashDrawer",
    "CutMode",
    "PrinterOptions",
    "PrinterStyleState",
    "DEFAULT_CHARACTERS_PER_LINE",
    "Line",
    "LineBuilder",
    "LineStyle",
    "Driver",
    "ConsoleDriver",
    "FileDriver",
    "NetworkDriver",
    "SerialDriver",
    "open_driver",
    "Printer",
]
