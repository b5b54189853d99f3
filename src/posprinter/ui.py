"""
Receipt Layout Components.

Components render to an ordered list of commands using the current printer
options and style state, and put back any style they change.
"""

from dataclasses import dataclass, field
from typing import ClassVar, Optional

from .errors import InputError
from .options import PrinterOptions, PrinterStyleState
from .protocol import Font, JustifyMode, Protocol


def chars_number(characters_per_line: int, text_width: int) -> int:
    """Number of characters that fit on a line at the given text width."""
    if text_width < 1:
        raise InputError(f"Text width must be > 0 (got {text_width})")
    return characters_per_line // text_width


@dataclass(frozen=True)
class LineStyle:
    """Pattern repeated to draw a line."""

    pattern: str

    SIMPLE: ClassVar["LineStyle"]
    DOUBLE: ClassVar["LineStyle"]
    DOTTED: ClassVar["LineStyle"]
    DASHED: ClassVar["LineStyle"]

    @classmethod
    def custom(cls, pattern: str) -> "LineStyle":
        return cls(pattern)


LineStyle.SIMPLE = LineStyle("-")
LineStyle.DOUBLE = LineStyle("=")
LineStyle.DOTTED = LineStyle(".")
LineStyle.DASHED = LineStyle("- ")


@dataclass(frozen=True)
class Line:
    """
    A horizontal rule.

    Attributes:
        font: Font to draw with (None keeps the current one)
        size: Text size (width, height) to draw with
        justify: Alignment to draw with
        style: Line pattern
        width: Number of pattern repeats (None fills the line)
        offset: Spaces before (left aligned) or after the pattern
    """

    font: Optional[Font] = None
    size: Optional[tuple[int, int]] = None
    justify: Optional[JustifyMode] = None
    style: LineStyle = field(default_factory=lambda: LineStyle.SIMPLE)
    width: Optional[int] = None
    offset: int = 0

    def draw(
        self,
        protocol: Protocol,
        characters_per_line: int,
        text_width: int,
        justify: JustifyMode,
    ) -> list[bytes]:
        """Build the text and feed commands for the line itself."""
        max_width = chars_number(characters_per_line, text_width)
        width = self.width if self.width is not None else max_width
        width = min(width, max(max_width - self.offset, 0))
        line = self.style.pattern * width

        if self.offset > 0:
            padding = " " * self.offset
            line = padding + line if justify == JustifyMode.LEFT else line + padding

        # Cut at max_width bytes, dropping a trailing partial character
        line = line.encode("utf-8")[:max_width].decode("utf-8", errors="ignore")

        if not line:
            return []
        return [protocol.text(line), protocol.feed(1)]

    def render(
        self,
        protocol: Protocol,
        options: PrinterOptions,
        style_state: PrinterStyleState,
    ) -> list[bytes]:
        """
        Render the line with temporary style overrides.

        Args:
            protocol: Command builder
            options: Printer options (characters per line)
            style_state: Current style, restored after the line

        Returns:
            Ordered list of commands
        """
        commands = []
        text_size = style_state.text_size
        justify = style_state.justify

        if self.font is not None:
            commands.append(protocol.font(self.font))
        if self.size is not None:
            text_size = self.size
            commands.append(protocol.text_size(*self.size))
        if self.justify is not None:
            justify = self.justify
            commands.append(protocol.justify(self.justify))

        commands.extend(self.draw(protocol, options.characters_per_line, text_size[0], justify))

        if self.font is not None:
            commands.append(protocol.font(style_state.font))
        if self.size is not None:
            commands.append(protocol.text_size(*style_state.text_size))
        if self.justify is not None:
            commands.append(protocol.justify(style_state.justify))

        return commands


class LineBuilder:
    """Fluent construction of a Line."""

    def __init__(self):
        self._fields: dict = {}

    def font(self, font: Font) -> "LineBuilder":
        self._fields["font"] = font
        return self

    def size(self, width: int, height: int) -> "LineBuilder":
        self._fields["size"] = (width, height)
        return self

    def justify(self, mode: JustifyMode) -> "LineBuilder":
        self._fields["justify"] = mode
        return self

    def style(self, style: LineStyle) -> "LineBuilder":
        self._fields["style"] = style
        return self

    def width(self, width: int) -> "LineBuilder":
        self._fields["width"] = width
        return self

    def offset(self, offset: int) -> "LineBuilder":
        self._fields["offset"] = offset
        return self

    def build(self) -> Line:
        return Line(**self._fields)
