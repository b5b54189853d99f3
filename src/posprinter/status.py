"""
Real-Time Status for ESC/POS Printers.

DLE EOT n [a] asks the printer for one status byte. The byte itself does not
say which request it answers, so a reading always pairs the request with the
raw byte and is decoded against that request only.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Mapping

from .constants import REAL_TIME_STATUS
from .errors import InvalidResponseError


class RealTimeStatusRequest(Enum):
    """Status categories with their (n, a) bytes."""

    PRINTER = (1, 0)
    OFFLINE_CAUSE = (2, 0)
    ERROR_CAUSE = (3, 0)
    ROLL_PAPER_SENSOR = (4, 0)
    INK_A = (7, 1)
    INK_B = (7, 2)
    PEELER = (8, 3)
    INTERFACE = (18, 1)
    DMD = (18, 2)

    @property
    def n(self) -> int:
        return self.value[0]

    @property
    def a(self) -> int:
        return self.value[1]

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")


class StatusFlag(Enum):
    """Named flags decoded from status bytes."""

    # Printer
    DRAWER_KICK_OUT_CONNECTOR_PIN3_LOW = "drawer_kick_out_connector_pin3_low"
    ONLINE = "online"
    WAITING_FOR_ONLINE_RECOVERY = "waiting_for_online_recovery"
    PAPER_FEED_BUTTON_PRESSED = "paper_feed_button_pressed"

    # Offline cause
    COVER_CLOSED = "cover_closed"
    PAPER_FED_BY_PAPER_FEED_BUTTON = "paper_fed_by_paper_feed_button"
    PRINTING_STOPS_DUE_TO_PAPER_END = "printing_stops_due_to_paper_end"
    ERROR_OCCURRED = "error_occurred"

    # Error cause
    RECOVERABLE_ERROR_OCCURRED = "recoverable_error_occurred"
    AUTOCUTTER_ERROR_OCCURRED = "autocutter_error_occurred"
    UNRECOVERABLE_ERROR_OCCURRED = "unrecoverable_error_occurred"
    AUTO_RECOVERABLE_ERROR_OCCURRED = "auto_recoverable_error_occurred"

    # Roll paper sensor
    ROLL_PAPER_NEAR_END_SENSOR_PAPER_ADEQUATE = "roll_paper_near_end_sensor_paper_adequate"
    ROLL_PAPER_END_SENSOR_PAPER_PRESENT = "roll_paper_end_sensor_paper_present"

    # Ink A / B
    INK_NEAR_END_DETECTED = "ink_near_end_detected"
    INK_END_DETECTED = "ink_end_detected"
    INK_CARTRIDGE_DETECTED = "ink_cartridge_detected"
    CLEANING_PERFORMED = "cleaning_performed"

    # Peeler
    WAITING_FOR_LABEL_TO_BE_REMOVED = "waiting_for_label_to_be_removed"
    PAPER_PRESENT_IN_LABEL_PEELING_DETECTOR = "paper_present_in_label_peeling_detector"

    # Interface
    PRINTING_MULTIPLE_INTERFACES_ENABLED = "printing_multiple_interfaces_enabled"

    # DM-D
    DMD_TRANSMISSION_STATUS_READY = "dmd_transmission_status_ready"

    def __str__(self) -> str:
        return self.value


Bits = tuple[int, ...]

_INK_FLAGS: tuple[tuple[StatusFlag, Callable[[Bits], bool]], ...] = (
    (StatusFlag.INK_NEAR_END_DETECTED, lambda b: b[2] == 1),
    (StatusFlag.INK_END_DETECTED, lambda b: b[3] == 1),
    (StatusFlag.INK_CARTRIDGE_DETECTED, lambda b: b[5] == 0),
)

# Bit index is least significant first
STATUS_DECODERS: Mapping[RealTimeStatusRequest, tuple[tuple[StatusFlag, Callable[[Bits], bool]], ...]] = {
    RealTimeStatusRequest.PRINTER: (
        (StatusFlag.DRAWER_KICK_OUT_CONNECTOR_PIN3_LOW, lambda b: b[2] == 0),
        (StatusFlag.ONLINE, lambda b: b[3] == 0),
        (StatusFlag.WAITING_FOR_ONLINE_RECOVERY, lambda b: b[5] == 1),
        (StatusFlag.PAPER_FEED_BUTTON_PRESSED, lambda b: b[6] == 1),
    ),
    RealTimeStatusRequest.OFFLINE_CAUSE: (
        (StatusFlag.COVER_CLOSED, lambda b: b[2] == 0),
        (StatusFlag.PAPER_FED_BY_PAPER_FEED_BUTTON, lambda b: b[3] == 1),
        (StatusFlag.PRINTING_STOPS_DUE_TO_PAPER_END, lambda b: b[5] == 1),
        (StatusFlag.ERROR_OCCURRED, lambda b: b[6] == 1),
    ),
    RealTimeStatusRequest.ERROR_CAUSE: (
        (StatusFlag.RECOVERABLE_ERROR_OCCURRED, lambda b: b[2] == 1),
        (StatusFlag.AUTOCUTTER_ERROR_OCCURRED, lambda b: b[3] == 1),
        (StatusFlag.UNRECOVERABLE_ERROR_OCCURRED, lambda b: b[5] == 1),
        (StatusFlag.AUTO_RECOVERABLE_ERROR_OCCURRED, lambda b: b[6] == 1),
    ),
    RealTimeStatusRequest.ROLL_PAPER_SENSOR: (
        (StatusFlag.ROLL_PAPER_NEAR_END_SENSOR_PAPER_ADEQUATE, lambda b: b[2] == 0 and b[3] == 0),
        (StatusFlag.ROLL_PAPER_END_SENSOR_PAPER_PRESENT, lambda b: b[5] == 0 and b[6] == 0),
    ),
    RealTimeStatusRequest.INK_A: _INK_FLAGS + (
        (StatusFlag.CLEANING_PERFORMED, lambda b: b[6] == 1),
    ),
    RealTimeStatusRequest.INK_B: _INK_FLAGS,
    RealTimeStatusRequest.PEELER: (
        (StatusFlag.WAITING_FOR_LABEL_TO_BE_REMOVED, lambda b: b[2] == 1),
        (StatusFlag.PAPER_PRESENT_IN_LABEL_PEELING_DETECTOR, lambda b: b[5] == 0),
    ),
    RealTimeStatusRequest.INTERFACE: (
        (StatusFlag.PRINTING_MULTIPLE_INTERFACES_ENABLED, lambda b: b[2] == 1),
    ),
    RealTimeStatusRequest.DMD: (
        (StatusFlag.DMD_TRANSMISSION_STATUS_READY, lambda b: b[2] == 0),
    ),
}


def real_time_status(request: RealTimeStatusRequest) -> bytes:
    """Build DLE EOT n a for a status request."""
    return REAL_TIME_STATUS + bytes([request.n, request.a])


def status_bits(raw: int) -> Bits:
    """Split a byte into bits, least significant first."""
    return tuple((raw >> i) & 1 for i in range(8))


def is_pattern_valid(raw: int) -> bool:
    """Check the fixed bits every status byte carries (0xx1xx10)."""
    if not 0 <= raw <= 0xFF:
        return False
    bits = status_bits(raw)
    return bits[0] == 0 and bits[1] == 1 and bits[4] == 1 and bits[7] == 0


@dataclass(frozen=True)
class StatusReading:
    """
    A status byte paired with the request it answers.

    Raises:
        InvalidResponseError: If the byte does not carry the fixed status bits
    """

    request: RealTimeStatusRequest
    raw: int

    def __post_init__(self):
        if not is_pattern_valid(self.raw):
            raise InvalidResponseError(
                f"Invalid {self.request} status byte: {self.raw:#04x} "
                f"(expected bit pattern 0xx1xx10)"
            )

    @property
    def flags(self) -> dict[StatusFlag, bool]:
        """Decode the byte into the flags of its request."""
        bits = status_bits(self.raw)
        return {flag: decode(bits) for flag, decode in STATUS_DECODERS[self.request]}

    def __getitem__(self, flag: StatusFlag) -> bool:
        return self.flags[flag]

    def __str__(self) -> str:
        flags = ", ".join(f"{flag}={value}" for flag, value in self.flags.items())
        return f"{self.request}: {flags}"


def parse_status(request: RealTimeStatusRequest, raw: int) -> dict[StatusFlag, bool]:
    """Validate and decode one status byte for the given request."""
    return StatusReading(request, raw).flags
