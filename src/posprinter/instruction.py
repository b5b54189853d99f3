"""Queued printer instructions and their debug rendering."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class DebugMode(Enum):
    """How instruction bytes are rendered in debug output."""

    HEX = "hex"
    DEC = "dec"
    CHAR = "char"


def render_bytes(data: bytes, mode: Optional[DebugMode]) -> str:
    """Render command bytes for diagnostics."""
    if mode == DebugMode.HEX:
        return data.hex(" ")
    if mode == DebugMode.CHAR:
        return "".join(chr(b) if 0x20 <= b < 0x7F else f"\\x{b:02x}" for b in data)
    return str(list(data))


@dataclass
class Instruction:
    """
    A labelled group of commands queued for the printer.

    The debug mode only changes how the instruction is rendered in logs,
    never the bytes sent.
    """

    label: str
    commands: list[bytes] = field(default_factory=list)
    debug_mode: Optional[DebugMode] = None

    def flatten(self) -> bytes:
        """Concatenate all commands into the bytes to send."""
        return b"".join(self.commands)

    def __str__(self) -> str:
        return f"[{self.label}] {render_bytes(self.flatten(), self.debug_mode)}"
