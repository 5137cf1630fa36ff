"""Cyrillic <-> legacy "1C" single-byte text rewriting.

The legacy toolchain stores Russian text as cp1251 bytes that older tools read
back as Latin-1, so every Cyrillic letter shows up as a Latin-1 Supplement
character. The tables below undo (or redo) that shift one character at a time.
"""

from types import MappingProxyType
from typing import Mapping, Tuple

# (native, legacy) pairs
CHARACTER_TABLE: Tuple[Tuple[str, str], ...] = (
    ("А", "À"), ("Б", "Á"), ("В", "Â"), ("Г", "Ã"), ("Д", "Ä"),
    ("Е", "Å"), ("Ж", "Æ"), ("З", "Ç"), ("И", "È"), ("Й", "É"),
    ("К", "Ê"), ("Л", "Ë"), ("М", "Ì"), ("Н", "Í"), ("О", "Î"),
    ("П", "Ï"), ("Р", "Ð"), ("С", "Ñ"), ("Т", "Ò"), ("У", "Ó"),
    ("Ф", "Ô"), ("Х", "Õ"), ("Ц", "Ö"), ("Ч", "×"), ("Ш", "Ø"),
    ("Щ", "Ù"), ("Ъ", "Ú"), ("Ы", "Û"), ("Ь", "Ü"), ("Э", "Ý"),
    ("Ю", "Þ"), ("Я", "ß"), ("а", "à"), ("б", "á"), ("в", "â"),
    ("г", "ã"), ("д", "ä"), ("е", "å"), ("ж", "æ"), ("з", "ç"),
    ("и", "è"), ("й", "é"), ("к", "ê"), ("л", "ë"), ("м", "ì"),
    ("н", "í"), ("о", "î"), ("п", "ï"), ("р", "ð"), ("с", "ñ"),
    ("т", "ò"), ("у", "ó"), ("ф", "ô"), ("х", "õ"), ("ц", "ö"),
    ("ч", "÷"), ("ш", "ø"), ("щ", "ù"), ("ъ", "ú"), ("ы", "û"),
    ("ь", "ü"), ("э", "ý"), ("ю", "þ"), ("я", "ÿ"), ("ё", "¸"),
    ("Ё", "¨"),
)

NATIVE_TO_LEGACY: Mapping[str, str] = MappingProxyType(dict(CHARACTER_TABLE))
LEGACY_TO_NATIVE: Mapping[str, str] = MappingProxyType(
    {legacy: native for native, legacy in CHARACTER_TABLE}
)

# str.translate tables, keyed by code point
_TO_LEGACY = str.maketrans(dict(NATIVE_TO_LEGACY))
_TO_NATIVE = str.maketrans(dict(LEGACY_TO_NATIVE))


def to_legacy(text: str) -> str:
    """Rewrite Cyrillic characters to their legacy 1C stand-ins.

    Characters outside the table are passed through unchanged, so the result
    always has the same length as the input.
    """
    return text.translate(_TO_LEGACY)


def to_native(text: str) -> str:
    """Inverse of :func:`to_legacy`."""
    return text.translate(_TO_NATIVE)
