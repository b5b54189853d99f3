"""
Parameter Length Encoding.

Most GS ( k and GS v 0 frames carry their payload length as little-endian
byte groups (pL pH, or p1 p2 p3 p4). The helpers here are the only place
that rejects a payload too large for its frame.
"""

from enum import Enum
from typing import Sequence, Type, TypeVar

from .errors import InputError

MAX_LENGTH_2 = 0xFFFF
MAX_LENGTH_4 = 0xFFFFFFFF

E = TypeVar("E", bound=Enum)


def pack_length(length: int, padding: int = 0) -> tuple[int, int]:
    """
    Split a payload length into (pL, pH).

    Args:
        length: Payload length in bytes
        padding: Header bytes the device also counts (e.g. cn fn m)

    Returns:
        Tuple (low, high) with total = low + 256 * high

    Raises:
        InputError: If the total does not fit in two bytes
    """
    total = length + padding
    if total < 0:
        raise InputError(f"Invalid data length: {total}")

    high = total // 256
    low = total - 256 * high
    if high > 0xFF:
        raise InputError(f"Data is too large (length: {total}, max: {MAX_LENGTH_2})")
    return low, high


def pack_length4(length: int, padding: int = 0) -> tuple[int, int, int, int]:
    """
    Split a payload length into (p1, p2, p3, p4), least significant first.

    Raises:
        InputError: If the total does not fit in four bytes
    """
    total = length + padding
    if total < 0:
        raise InputError(f"Invalid data length: {total}")
    if total > MAX_LENGTH_4:
        raise InputError(f"Data is too large (length: {total}, max: {MAX_LENGTH_4})")

    p4 = total // 0x1000000
    rest = total - p4 * 0x1000000
    p3 = rest // 0x10000
    rest -= p3 * 0x10000
    p2 = rest // 0x100
    p1 = rest - p2 * 0x100
    return p1, p2, p3, p4


def unpack_length(parts: Sequence[int]) -> int:
    """Rebuild a length from little-endian byte groups."""
    total = 0
    for shift, part in enumerate(parts):
        if not 0 <= part <= 0xFF:
            raise InputError(f"Length byte out of range: {part}")
        total += part << (8 * shift)
    return total


def check_enum(name: str, enum: Type[E], value) -> E:
    """
    Convert a value to an enum member.

    Raises:
        InputError: If the value is not one of the enum's members
    """
    try:
        return enum(value)
    except ValueError:
        choices = ", ".join(member.name for member in enum)
        raise InputError(f"{name} must be one of {choices} (got {value!r})") from None
