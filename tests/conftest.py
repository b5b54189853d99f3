"""
Pytest configuration for ESC/POS printer tests.

Provides a recording driver and command-line options for hardware tests.
"""

from typing import Optional

import pytest

from posprinter import Driver, Printer, open_driver


class RecordingDriver(Driver):
    """Driver that keeps everything written to it and replays canned replies."""

    def __init__(self, replies: bytes = b""):
        self.writes: list[bytes] = []
        self.flushes = 0
        self.replies = bytearray(replies)
        self.closed = False

    @property
    def name(self) -> str:
        return "recording"

    def write(self, data: bytes) -> None:
        self.writes.append(data)

    def read(self, size: int = 1, timeout: Optional[float] = None) -> bytes:
        data = bytes(self.replies[:size])
        del self.replies[:size]
        return data

    def flush(self) -> None:
        self.flushes += 1

    def close(self) -> None:
        self.closed = True

    @property
    def data(self) -> bytes:
        return b"".join(self.writes)


def pytest_addoption(parser):
    """Add command-line options for hardware tests."""
    parser.addoption(
        "--device",
        action="store",
        default=None,
        help="Device URI of a printer for hardware tests (e.g. tcp://192.168.1.100)",
    )


@pytest.fixture
def driver():
    """Provide a recording driver."""
    return RecordingDriver()


@pytest.fixture
def printer(driver):
    """Provide a printer writing to the recording driver."""
    return Printer(driver)


@pytest.fixture
def device_uri(request):
    """Get the printer device URI from command line."""
    uri = request.config.getoption("--device")
    if uri is None:
        pytest.skip("No printer device provided (use --device=tcp://HOST)")
    return uri


@pytest.fixture
def hardware_printer(device_uri):
    """Provide a printer connected to real hardware."""
    driver = open_driver(device_uri)
    printer = Printer(driver)
    printer.set_debug(True)

    yield printer

    driver.close()
