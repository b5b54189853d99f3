"""
Page Codes and Character Tables.

A page code selects one of the printer's 8-bit character tables (ESC t n).
For page codes that have a matching Python codec, a lookup table from
Unicode character to the printer byte is built on first use and shared
read-only for the rest of the process.
"""

import threading
import unicodedata
from enum import IntEnum
from types import MappingProxyType
from typing import Mapping

from .errors import InputError


class PageCode(IntEnum):
    """Character code tables with their ESC t ordinal."""

    PC437 = 0
    KATAKANA = 1
    PC850 = 2
    PC860 = 3
    PC863 = 4
    PC865 = 5
    HIRAGANA = 6
    PC851 = 11
    PC853 = 12
    PC857 = 13
    PC737 = 14
    ISO8859_7 = 15
    WPC1252 = 16
    PC866 = 17
    PC852 = 18
    PC858 = 19
    PC720 = 32
    WPC775 = 33
    PC855 = 34
    PC861 = 35
    PC862 = 36
    PC864 = 37
    PC869 = 38
    ISO8859_2 = 39
    ISO8859_15 = 40
    PC1098 = 41
    PC1118 = 42
    PC1119 = 43
    PC1125 = 44
    WPC1250 = 45
    WPC1251 = 46
    WPC1253 = 47
    WPC1254 = 48
    WPC1255 = 49
    WPC1256 = 50
    WPC1257 = 51
    WPC1258 = 52
    KZ1048 = 53

    def __str__(self) -> str:
        return self.name

    @classmethod
    def from_name(cls, name: str) -> "PageCode":
        """Look up a page code by name, case-insensitively (e.g. "pc858")."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise InputError(f"Unknown page code: {name}") from None


class CharacterSet(IntEnum):
    """International character sets with their ESC R ordinal."""

    USA = 0
    FRANCE = 1
    GERMANY = 2
    UK = 3
    DENMARK1 = 4
    SWEDEN = 5
    ITALY = 6
    SPAIN1 = 7
    JAPAN = 8
    NORWAY = 9
    DENMARK2 = 10
    SPAIN2 = 11
    LATIN_AMERICA = 12
    KOREA = 13
    SLOVENIA_CROATIA = 14
    CHINA = 15
    VIETNAM = 16
    ARABIA = 17
    INDIA_DEVANAGARI = 66
    INDIA_BENGALI = 67
    INDIA_TAMIL = 68
    INDIA_TELUGU = 69
    INDIA_ASSAMESE = 70
    INDIA_ORIYA = 71
    INDIA_KANNADA = 72
    INDIA_MALAYALAM = 73
    INDIA_GUJARATI = 74
    INDIA_PUNJABI = 75
    INDIA_MARATHI = 82

    def __str__(self) -> str:
        return self.name


# Python codec covering the upper half (0x80-0xFF) of each printer table
PAGE_CODE_CODECS: Mapping[PageCode, str] = MappingProxyType({
    PageCode.PC437: "cp437",
    PageCode.PC850: "cp850",
    PageCode.PC860: "cp860",
    PageCode.PC863: "cp863",
    PageCode.PC865: "cp865",
    PageCode.PC857: "cp857",
    PageCode.PC737: "cp737",
    PageCode.ISO8859_7: "iso8859_7",
    PageCode.WPC1252: "cp1252",
    PageCode.PC866: "cp866",
    PageCode.PC852: "cp852",
    PageCode.PC858: "cp858",
    PageCode.PC720: "cp720",
    PageCode.WPC775: "cp775",
    PageCode.PC855: "cp855",
    PageCode.PC861: "cp861",
    PageCode.PC862: "cp862",
    PageCode.PC864: "cp864",
    PageCode.PC869: "cp869",
    PageCode.ISO8859_2: "iso8859_2",
    PageCode.ISO8859_15: "iso8859_15",
    PageCode.PC1125: "cp1125",
    PageCode.WPC1250: "cp1250",
    PageCode.WPC1251: "cp1251",
    PageCode.WPC1253: "cp1253",
    PageCode.WPC1254: "cp1254",
    PageCode.WPC1255: "cp1255",
    PageCode.WPC1256: "cp1256",
    PageCode.WPC1257: "cp1257",
    PageCode.WPC1258: "cp1258",
    PageCode.KZ1048: "kz1048",
})

_tables: dict[PageCode, Mapping[str, int]] = {}
_tables_lock = threading.Lock()


def _build_table(codec: str) -> dict[str, int]:
    """Map each printable character of the codec's upper half to its byte."""
    table: dict[str, int] = {}
    for byte in range(0x80, 0x100):
        try:
            char = bytes([byte]).decode(codec)
        except UnicodeDecodeError:
            continue  # Undefined slot
        if unicodedata.category(char) == "Cc":
            continue
        table.setdefault(char, byte)
    return table


def has_page_code_table(page_code: PageCode) -> bool:
    """Check whether text can be transcoded for this page code."""
    return page_code in PAGE_CODE_CODECS


def get_page_code_table(page_code: PageCode) -> Mapping[str, int]:
    """
    Get the character table for a page code, building it on first access.

    Args:
        page_code: Printer page code

    Returns:
        Read-only mapping from character to printer byte

    Raises:
        InputError: If no table is available for the page code
    """
    table = _tables.get(page_code)
    if table is not None:
        return table

    codec = PAGE_CODE_CODECS.get(page_code)
    if codec is None:
        raise InputError(f"No character table available for page code {page_code}")

    with _tables_lock:
        # Another thread may have published it while we waited
        table = _tables.get(page_code)
        if table is None:
            table = MappingProxyType(_build_table(codec))
            _tables[page_code] = table
    return table
