"""
High-Level ESC/POS Printer Interface.

Commands are queued as labelled instructions and only sent when print() is
called, in a single write. A builder error therefore never leaves half a
receipt on the paper.
"""

import logging
from typing import Iterable, Optional, Union

from .barcodes import BarcodeOption, BarcodeSystem
from .codes import (
    AztecOption,
    DataMatrixOption,
    GS1DataBar2DOption,
    MaxiCodeMode,
    Pdf417Option,
    QRCodeOption,
)
from .connection import Driver
from .errors import TransportError
from .image import BitImageOption, ImageSource
from .instruction import DebugMode, Instruction
from .options import PrinterOptions, PrinterStyleState
from .page_codes import CharacterSet, PageCode
from .protocol import CashDrawer, CutMode, Font, JustifyMode, Protocol, UnderlineMode
from .status import RealTimeStatusRequest, StatusReading
from .ui import Line

logger = logging.getLogger(__name__)


class Printer:
    """
    ESC/POS printer.

    Every method except print(), send_status() and read_status() only
    queues commands and returns the printer, so calls can be chained:

        Printer(driver).init().bold(True).writeln("Hello").print_cut()
    """

    def __init__(
        self,
        driver: Driver,
        protocol: Optional[Protocol] = None,
        options: Optional[PrinterOptions] = None,
    ):
        """
        Initialize printer interface.

        Args:
            driver: Transport the commands are written to
            protocol: Command builder (default: UTF-8 fallback encoder)
            options: Page code, debug mode and line width
        """
        self.driver = driver
        self.protocol = protocol or Protocol()
        self.options = options or PrinterOptions()
        self._instructions: list[Instruction] = []
        self._style_state = PrinterStyleState()

    # --- State and diagnostics ---

    @property
    def instructions(self) -> list[Instruction]:
        """Instructions queued since the last flush."""
        return list(self._instructions)

    @property
    def style_state(self) -> PrinterStyleState:
        return self._style_state

    def reset_style_state(self) -> "Printer":
        self._style_state = PrinterStyleState()
        return self

    def set_debug(self, mode: Union[bool, DebugMode, None]) -> "Printer":
        """Enable/disable debug output. True selects hexadecimal rendering."""
        if mode is True:
            mode = DebugMode.HEX
        self.options.debug_mode = mode or None
        return self

    def _log(self, message: str):
        """Log debug message if enabled."""
        if self.options.debug_mode is not None:
            logger.debug(message)

    def debug(self) -> "Printer":
        """Log every queued instruction."""
        for instruction in self._instructions:
            self._log(f"queued {instruction}")
        return self

    def _command(self, label: str, commands: Iterable[bytes]) -> "Printer":
        instruction = Instruction(label, list(commands), self.options.debug_mode)
        if label:
            self._log(str(instruction))
        self._instructions.append(instruction)
        return self

    def _flush(self):
        """Send all queued instructions in one write, then clear the queue."""
        data = b"".join(instruction.flatten() for instruction in self._instructions)
        try:
            self.driver.write(data)
            self.driver.flush()
        finally:
            # Nothing is re-sent after a failed write
            self._instructions = []
            self.reset_style_state()

    def print(self) -> "Printer":
        """
        Send the queued instructions to the printer.

        Raises:
            TransportError: If the driver fails; the queue is discarded
        """
        self._flush()
        self._log("[print]")
        return self

    def print_cut(self) -> "Printer":
        return self.cut().print()

    # --- Hardware ---

    def init(self) -> "Printer":
        """Initialize the printer and select the configured page code."""
        self._command("initialization", [self.protocol.init()])
        if self.options.page_code is not None:
            code = self.options.page_code
            self._command(f"character page code {code}", [self.protocol.page_code(code)])
        return self

    def reset(self) -> "Printer":
        return self._command("reset", [self.protocol.reset()])

    def cut(self) -> "Printer":
        return self._command("full paper cut", [self.protocol.cut(CutMode.FULL)])

    def partial_cut(self) -> "Printer":
        return self._command("partial paper cut", [self.protocol.cut(CutMode.PARTIAL)])

    def page_code(self, code: PageCode) -> "Printer":
        """Select a page code, and use it to encode subsequent text."""
        command = self.protocol.page_code(code)
        self.options.page_code = PageCode(code)
        return self._command(f"character page code {self.options.page_code}", [command])

    def character_set(self, code: CharacterSet) -> "Printer":
        command = self.protocol.character_set(code)
        return self._command(f"character set {CharacterSet(code)}", [command])

    # --- Text style ---

    def bold(self, enabled: bool) -> "Printer":
        self._style_state.bold = enabled
        return self._command("text bold", [self.protocol.bold(enabled)])

    def underline(self, mode: UnderlineMode) -> "Printer":
        command = self.protocol.underline(mode)
        self._style_state.underline = UnderlineMode(mode)
        return self._command(f"text underline {UnderlineMode(mode).name.lower()}", [command])

    def double_strike(self, enabled: bool) -> "Printer":
        self._style_state.double_strike = enabled
        return self._command("text double strike", [self.protocol.double_strike(enabled)])

    def font(self, font: Font) -> "Printer":
        command = self.protocol.font(font)
        self._style_state.font = Font(font)
        return self._command(f"text font {Font(font).name}", [command])

    def flip(self, enabled: bool) -> "Printer":
        self._style_state.flip = enabled
        return self._command("text flip", [self.protocol.flip(enabled)])

    def justify(self, mode: JustifyMode) -> "Printer":
        command = self.protocol.justify(mode)
        self._style_state.justify = JustifyMode(mode)
        return self._command(f"text justify {JustifyMode(mode).name.lower()}", [command])

    def reverse(self, enabled: bool) -> "Printer":
        self._style_state.reverse = enabled
        return self._command("text reverse colours", [self.protocol.reverse(enabled)])

    def size(self, width: int, height: int) -> "Printer":
        command = self.protocol.text_size(width, height)
        self._style_state.text_size = (width, height)
        return self._command("text size", [command])

    def reset_size(self) -> "Printer":
        self._style_state.text_size = (1, 1)
        return self._command("text size reset", [self.protocol.reset_size()])

    def smoothing(self, enabled: bool) -> "Printer":
        return self._command("text smoothing mode", [self.protocol.smoothing(enabled)])

    def upside_down(self, enabled: bool) -> "Printer":
        return self._command("upside-down mode", [self.protocol.upside_down(enabled)])

    # --- Paper movement ---

    def feed(self) -> "Printer":
        return self._command("line feed", [self.protocol.feed(1)])

    def feeds(self, lines: int) -> "Printer":
        return self._command("line feeds", [self.protocol.feed(lines)])

    def line_spacing(self, value: int) -> "Printer":
        return self._command("line spacing", [self.protocol.line_spacing(value)])

    def reset_line_spacing(self) -> "Printer":
        return self._command("reset line spacing", [self.protocol.reset_line_spacing()])

    def motion_units(self, x: int, y: int) -> "Printer":
        return self._command("set motion units", [self.protocol.motion_units(x, y)])

    def cash_drawer(self, pin: CashDrawer) -> "Printer":
        command = self.protocol.cash_drawer(pin)
        return self._command(f"cash drawer {CashDrawer(pin).name.lower()}", [command])

    # --- Data ---

    def write(self, text: str) -> "Printer":
        """Queue text encoded with the current page code."""
        return self._command("text", [self.protocol.text(text, self.options.page_code)])

    def writeln(self, text: str) -> "Printer":
        return self.write(text).feed()

    def custom(self, data: bytes) -> "Printer":
        """Queue raw bytes."""
        return self._command("custom command", [self.protocol.custom(data)])

    def custom_with_page_code(self, data: bytes, code: PageCode) -> "Printer":
        """Select a page code, then queue raw bytes meant for it."""
        self.page_code(code)
        label = f"custom command with page code {self.options.page_code}"
        return self._command(label, [self.protocol.custom(data)])

    # --- Status ---

    def real_time_status(self, request: RealTimeStatusRequest) -> "Printer":
        return self._command(f"real-time status {request}", [self.protocol.real_time_status(request)])

    def send_status(self) -> "Printer":
        """Send queued status requests (and anything else queued)."""
        self._flush()
        self._log("[send printer status]")
        return self

    def read_status(
        self,
        requests: Iterable[RealTimeStatusRequest],
        timeout: Optional[float] = None,
    ) -> list[StatusReading]:
        """
        Query real-time status and decode the replies.

        The printer answers each request with one byte, in order.

        Args:
            requests: Status categories to query
            timeout: Read timeout in seconds (default: driver timeout)

        Returns:
            One reading per request

        Raises:
            TransportError: If the printer sends fewer bytes than requested
            InvalidResponseError: If a reply is not a valid status byte
        """
        requests = list(requests)
        for request in requests:
            self.real_time_status(request)
        self.send_status()

        data = self.driver.read(len(requests), timeout)
        if len(data) < len(requests):
            raise TransportError(
                f"Expected {len(requests)} status byte(s), received {len(data)}"
            )
        readings = [StatusReading(request, raw) for request, raw in zip(requests, data)]
        for reading in readings:
            self._log(f"status {reading}")
        return readings

    # --- Barcodes ---

    def barcode(
        self, system: BarcodeSystem, data: str, option: Optional[BarcodeOption] = None
    ) -> "Printer":
        """Queue a 1D barcode of any symbology."""
        commands = self.protocol.barcode(data, system, option)
        return self._command(f"print {system} barcode", commands)

    def ean13(self, data: str) -> "Printer":
        return self.barcode(BarcodeSystem.EAN13, data, None)

    def ean13_option(self, data: str, option: BarcodeOption) -> "Printer":
        return self.barcode(BarcodeSystem.EAN13, data, option)

    def ean8(self, data: str) -> "Printer":
        return self.barcode(BarcodeSystem.EAN8, data, None)

    def ean8_option(self, data: str, option: BarcodeOption) -> "Printer":
        return self.barcode(BarcodeSystem.EAN8, data, option)

    def upca(self, data: str) -> "Printer":
        return self.barcode(BarcodeSystem.UPCA, data, None)

    def upca_option(self, data: str, option: BarcodeOption) -> "Printer":
        return self.barcode(BarcodeSystem.UPCA, data, option)

    def upce(self, data: str) -> "Printer":
        return self.barcode(BarcodeSystem.UPCE, data, None)

    def upce_option(self, data: str, option: BarcodeOption) -> "Printer":
        return self.barcode(BarcodeSystem.UPCE, data, option)

    def code39(self, data: str) -> "Printer":
        return self.barcode(BarcodeSystem.CODE39, data, None)

    def code39_option(self, data: str, option: BarcodeOption) -> "Printer":
        return self.barcode(BarcodeSystem.CODE39, data, option)

    def codabar(self, data: str) -> "Printer":
        return self.barcode(BarcodeSystem.CODABAR, data, None)

    def codabar_option(self, data: str, option: BarcodeOption) -> "Printer":
        return self.barcode(BarcodeSystem.CODABAR, data, option)

    def itf(self, data: str) -> "Printer":
        return self.barcode(BarcodeSystem.ITF, data, None)

    def itf_option(self, data: str, option: BarcodeOption) -> "Printer":
        return self.barcode(BarcodeSystem.ITF, data, option)

    # --- 2D symbols ---

    def qrcode(self, data: str) -> "Printer":
        return self.qrcode_option(data, QRCodeOption())

    def qrcode_option(self, data: str, option: QRCodeOption) -> "Printer":
        return self._command("print QR code", self.protocol.qrcode(data, option))

    def gs1_databar_2d(self, data: str) -> "Printer":
        return self.gs1_databar_2d_option(data, GS1DataBar2DOption())

    def gs1_databar_2d_option(self, data: str, option: GS1DataBar2DOption) -> "Printer":
        return self._command("print 2D GS1 DataBar", self.protocol.gs1_databar_2d(data, option))

    def pdf417(self, data: str) -> "Printer":
        return self.pdf417_option(data, Pdf417Option())

    def pdf417_option(self, data: str, option: Pdf417Option) -> "Printer":
        return self._command("print PDF417", self.protocol.pdf417(data, option))

    def maxi_code(self, data: str) -> "Printer":
        return self.maxi_code_option(data, MaxiCodeMode.MODE2)

    def maxi_code_option(self, data: str, mode: MaxiCodeMode) -> "Printer":
        return self._command("print MaxiCode", self.protocol.maxi_code(data, mode))

    def data_matrix(self, data: str) -> "Printer":
        return self.data_matrix_option(data, DataMatrixOption())

    def data_matrix_option(self, data: str, option: DataMatrixOption) -> "Printer":
        return self._command("print DataMatrix", self.protocol.data_matrix(data, option))

    def aztec(self, data: str) -> "Printer":
        return self.aztec_option(data, AztecOption())

    def aztec_option(self, data: str, option: AztecOption) -> "Printer":
        return self._command("print Aztec code", self.protocol.aztec(data, option))

    # --- Graphics and layout ---

    def bit_image(self, source: ImageSource) -> "Printer":
        """Queue an image from a path, encoded bytes or PIL Image."""
        return self.bit_image_option(source, BitImageOption())

    def bit_image_option(self, source: ImageSource, option: BitImageOption) -> "Printer":
        # Build first so an invalid image queues nothing
        command = self.protocol.bit_image(source, option)
        self._command("cancel data", [self.protocol.cancel()])
        return self._command("print bit image", [command])

    def draw_line(self, line: Line) -> "Printer":
        commands = line.render(self.protocol, self.options, self._style_state)
        return self._command("draw line", commands)
