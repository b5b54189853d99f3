"""
Text Encoding for ESC/POS.

Text is either encoded whole with a generic codec, or transcoded character
by character through a page-code table with a per-character fallback.
"""

import codecs
from typing import Optional

from .errors import InputError
from .page_codes import PageCode, get_page_code_table


class Encoder:
    """
    Generic byte encoder used for text without a page code and for
    characters missing from a page-code table.
    """

    def __init__(self, encoding: str = "utf-8", errors: str = "strict"):
        """
        Initialize encoder.

        Args:
            encoding: Python codec name (default UTF-8)
            errors: Codec error handler. "strict" rejects characters the
                codec cannot represent; "replace" substitutes them.

        Raises:
            InputError: If the codec is unknown
        """
        try:
            codecs.lookup(encoding)
        except LookupError:
            raise InputError(f"Unknown text encoding: {encoding}") from None
        self.encoding = encoding
        self.errors = errors

    def encode(self, text: str) -> bytes:
        """Encode text with the generic codec."""
        try:
            return text.encode(self.encoding, self.errors)
        except UnicodeEncodeError as e:
            raise InputError(f"Cannot encode {text[e.start:e.end]!r} with {self.encoding}") from e

    def encode_text(
        self,
        text: str,
        page_code: Optional[PageCode] = None,
        max_length: Optional[int] = None,
    ) -> bytes:
        """
        Encode text for printing.

        Without a page code the whole string goes through the generic codec
        and the resulting bytes are cut at max_length, which may split a
        multi-byte character. With a page code each character is looked up
        in the table first and only falls back to the generic codec when
        missing; a character that would overflow max_length is dropped along
        with the rest of the text.

        Args:
            text: Text to encode
            page_code: Optional page code whose table to use
            max_length: Optional maximum number of output bytes

        Returns:
            Encoded bytes

        Raises:
            InputError: If the page code has no table, or a character cannot
                be encoded
        """
        if max_length is not None and max_length < 0:
            raise InputError(f"Invalid max length: {max_length}")

        if page_code is None:
            encoded = self.encode(text)
            if max_length is not None:
                encoded = encoded[:max_length]
            return encoded

        table = get_page_code_table(page_code)
        result = bytearray()
        for char in text:
            byte = table.get(char)
            encoded = bytes([byte]) if byte is not None else self.encode(char)

            if max_length is not None and len(result) + len(encoded) > max_length:
                break
            result += encoded

        return bytes(result)
