"""
Exception Classes for ESC/POS Printing.

Every error raised by this package derives from PrinterError.
"""


class PrinterError(Exception):
    """Base exception for all printer errors."""

    pass


class InputError(PrinterError, ValueError):
    """Invalid parameter, payload or page code passed to a command builder."""

    pass


class TransportError(PrinterError):
    """Error writing to, reading from or flushing a driver."""

    pass


class InvalidResponseError(PrinterError):
    """Status byte received from the printer does not match the expected pattern."""

    pass
