"""
Printer Connections.

Drivers move bytes to and from a printer. They know nothing about ESC/POS;
the Printer hands them fully built command batches.
"""

import os
import select
import socket
import sys
import time
from abc import ABC, abstractmethod
from pathlib import Path
from typing import BinaryIO, Optional, Union
from urllib.parse import parse_qs, urlsplit

import serial

from .errors import InputError, TransportError


class Driver(ABC):
    """Byte transport to a printer."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Human readable driver name."""

    @abstractmethod
    def write(self, data: bytes) -> None:
        """Send bytes to the printer."""

    @abstractmethod
    def read(self, size: int = 1, timeout: Optional[float] = None) -> bytes:
        """
        Read up to size bytes from the printer.

        Returns fewer bytes if the timeout expires first.
        """

    def flush(self) -> None:
        """Push buffered bytes to the printer."""

    def close(self) -> None:
        """Release the underlying resource. Safe to call more than once."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class ConsoleDriver(Driver):
    """Writes raw command bytes to stdout, for debugging."""

    def __init__(self, show_output: bool = True, stream: Optional[BinaryIO] = None):
        self.show_output = show_output
        self._stream = stream

    @property
    def name(self) -> str:
        return "console"

    def write(self, data: bytes) -> None:
        if self.show_output:
            stream = self._stream or sys.stdout.buffer
            stream.write(data)

    def read(self, size: int = 1, timeout: Optional[float] = None) -> bytes:
        return b""

    def flush(self) -> None:
        if self.show_output:
            (self._stream or sys.stdout.buffer).flush()


class FileDriver(Driver):
    """Writes to a file or printer device node (e.g. /dev/usb/lp0)."""

    DEFAULT_TIMEOUT = 2.0

    def __init__(self, path: Union[str, Path], timeout: float = DEFAULT_TIMEOUT):
        self.path = Path(path)
        self.timeout = timeout
        self._file: Optional[BinaryIO] = None

    @property
    def name(self) -> str:
        return f"file ({self.path})"

    def _open(self) -> BinaryIO:
        if self._file is None:
            try:
                self._file = open(self.path, "wb")
            except OSError as e:
                raise TransportError(f"Cannot open {self.path}: {e}") from e
        return self._file

    def write(self, data: bytes) -> None:
        try:
            self._open().write(data)
        except OSError as e:
            raise TransportError(f"Write to {self.path} failed: {e}") from e

    def read(self, size: int = 1, timeout: Optional[float] = None) -> bytes:
        deadline = time.monotonic() + (self.timeout if timeout is None else timeout)
        try:
            fd = os.open(self.path, os.O_RDONLY | os.O_NONBLOCK)
        except OSError as e:
            raise TransportError(f"Cannot open {self.path}: {e}") from e

        buffer = bytearray()
        try:
            while len(buffer) < size:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    break
                ready, _, _ = select.select([fd], [], [], remaining)
                if not ready:
                    break
                try:
                    chunk = os.read(fd, size - len(buffer))
                except BlockingIOError:
                    continue
                if not chunk:
                    break  # End of file, or no writer on the device
                buffer += chunk
        except OSError as e:
            raise TransportError(f"Read from {self.path} failed: {e}") from e
        finally:
            os.close(fd)
        return bytes(buffer)

    def flush(self) -> None:
        if self._file is not None:
            try:
                self._file.flush()
            except OSError as e:
                raise TransportError(f"Flush of {self.path} failed: {e}") from e

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None


class NetworkDriver(Driver):
    """Raw TCP connection, usually to port 9100."""

    DEFAULT_PORT = 9100
    DEFAULT_TIMEOUT = 5.0

    def __init__(self, host: str, port: int = DEFAULT_PORT, timeout: float = DEFAULT_TIMEOUT):
        self.host = host
        self.port = port
        self.timeout = timeout
        self._socket: Optional[socket.socket] = None

    @property
    def name(self) -> str:
        return f"network ({self.host}:{self.port})"

    def _connect(self) -> socket.socket:
        if self._socket is None:
            try:
                self._socket = socket.create_connection((self.host, self.port), timeout=self.timeout)
            except OSError as e:
                raise TransportError(f"Cannot connect to {self.host}:{self.port}: {e}") from e
        return self._socket

    def write(self, data: bytes) -> None:
        try:
            self._connect().sendall(data)
        except OSError as e:
            raise TransportError(f"Send to {self.host}:{self.port} failed: {e}") from e

    def read(self, size: int = 1, timeout: Optional[float] = None) -> bytes:
        sock = self._connect()
        deadline = time.monotonic() + (self.timeout if timeout is None else timeout)
        buffer = bytearray()

        while len(buffer) < size:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                break
            sock.settimeout(remaining)
            try:
                chunk = sock.recv(size - len(buffer))
            except socket.timeout:
                break
            except OSError as e:
                raise TransportError(f"Receive from {self.host}:{self.port} failed: {e}") from e
            if not chunk:
                break  # Connection closed by printer
            buffer += chunk

        sock.settimeout(self.timeout)
        return bytes(buffer)

    def close(self) -> None:
        if self._socket is not None:
            self._socket.close()
            self._socket = None


class SerialDriver(Driver):
    """Serial port connection using pyserial."""

    DEFAULT_BAUDRATE = 9600
    DEFAULT_TIMEOUT = 2.0

    def __init__(
        self,
        port: str,
        baudrate: int = DEFAULT_BAUDRATE,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.port = port
        self.baudrate = baudrate
        self.timeout = timeout
        self._serial: Optional[serial.Serial] = None

    @property
    def name(self) -> str:
        return f"serial ({self.port} @ {self.baudrate})"

    def _open(self) -> serial.Serial:
        if self._serial is None:
            try:
                self._serial = serial.Serial(
                    self.port, self.baudrate, timeout=self.timeout, write_timeout=self.timeout
                )
            except serial.SerialException as e:
                raise TransportError(f"Cannot open serial port {self.port}: {e}") from e
        return self._serial

    def write(self, data: bytes) -> None:
        try:
            self._open().write(data)
        except serial.SerialException as e:
            raise TransportError(f"Write to {self.port} failed: {e}") from e

    def read(self, size: int = 1, timeout: Optional[float] = None) -> bytes:
        ser = self._open()
        try:
            if timeout is not None:
                ser.timeout = timeout
            return ser.read(size)
        except serial.SerialException as e:
            raise TransportError(f"Read from {self.port} failed: {e}") from e
        finally:
            ser.timeout = self.timeout

    def flush(self) -> None:
        if self._serial is not None:
            try:
                self._serial.flush()
            except serial.SerialException as e:
                raise TransportError(f"Flush of {self.port} failed: {e}") from e

    def close(self) -> None:
        if self._serial is not None:
            self._serial.close()
            self._serial = None


def open_driver(uri: str) -> Driver:
    """
    Create a driver from a device URI.

    Supported forms:
        console
        file:///dev/usb/lp0
        tcp://192.168.1.100[:9100]
        serial:///dev/ttyUSB0[?baudrate=19200]

    Raises:
        InputError: If the URI is not understood
    """
    if uri == "console":
        return ConsoleDriver()

    parts = urlsplit(uri)
    query = parse_qs(parts.query)

    if parts.scheme == "file" and parts.path:
        return FileDriver(parts.path)
    if parts.scheme == "tcp" and parts.hostname:
        try:
            port = parts.port or NetworkDriver.DEFAULT_PORT
        except ValueError:
            raise InputError(f"Invalid port in device URI: {uri}") from None
        return NetworkDriver(parts.hostname, port)
    if parts.scheme == "serial" and parts.path:
        try:
            baudrate = int(query.get("baudrate", [SerialDriver.DEFAULT_BAUDRATE])[0])
        except ValueError:
            raise InputError(f"Invalid baudrate in device URI: {uri}") from None
        return SerialDriver(parts.path, baudrate)

    raise InputError(
        f"Unsupported device URI: '{uri}'. "
        "Expected console, file:///path, tcp://host[:port] or serial:///port[?baudrate=N]"
    )
