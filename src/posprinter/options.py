"""Printer options and the style state tracked between flushes."""

from dataclasses import dataclass
from typing import Optional

from .instruction import DebugMode
from .page_codes import PageCode
from .protocol import Font, JustifyMode, UnderlineMode

DEFAULT_CHARACTERS_PER_LINE = 42


@dataclass
class PrinterOptions:
    """
    Printer configuration.

    Attributes:
        page_code: Page code selected on init and used to encode text
        debug_mode: Log queued instructions in this rendering (None disables)
        characters_per_line: Characters per line at normal size, font A
    """

    page_code: Optional[PageCode] = None
    debug_mode: Optional[DebugMode] = None
    characters_per_line: int = DEFAULT_CHARACTERS_PER_LINE


@dataclass
class PrinterStyleState:
    """Text style most recently queued on the printer."""

    text_size: tuple[int, int] = (1, 1)
    justify: JustifyMode = JustifyMode.LEFT
    font: Font = Font.A
    underline: UnderlineMode = UnderlineMode.NONE
    bold: bool = False
    double_strike: bool = False
    reverse: bool = False
    flip: bool = False
