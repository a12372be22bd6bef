"""Single code unit helpers shared by the scalar decoder and the text scanner.

Every helper either returns exactly one decoded character or raises
InvalidCodeUnitError; callers decide which placeholder to substitute.
"""

from __future__ import annotations

from typing import Literal

from hexinspect.errors import InvalidCodeUnitError

ByteOrder = Literal["little", "big"]
BYTE_ORDERS: tuple[ByteOrder, ...] = ("little", "big")
ASCII_MASK = 0x7F
SWAPPED_ORDER: dict[str, ByteOrder] = {"little": "big", "big": "little"}


def compose(octets: bytes, order: ByteOrder) -> int:
    """Unsigned integer of the octets read under the given byte order."""
    return int.from_bytes(octets, order)


def text_unit(octets: bytes, order: ByteOrder) -> int:
    """Code unit as the inspector composes it for UTF-16 and the text scanners.

    The octets are read in the opposite order to the one requested: the
    little-endian view puts byte 0 in the high position, the big-endian view
    puts it in the low position.
    """
    return int.from_bytes(octets, SWAPPED_ORDER[order])


def ascii_char(byte: int) -> str:
    return chr(byte & ASCII_MASK)


def utf8_decode(octets: bytes) -> str:
    """Strict UTF-8 decode of a short octet run; may yield more than one character."""
    try:
        return octets.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidCodeUnitError("utf-8", octets) from exc


def utf8_char(octets: bytes) -> str:
    """Best single character from one or two UTF-8 octets.

    A two-octet sequence forming one code point wins; otherwise the leading
    octet is decoded on its own.
    """
    if len(octets) >= 2:
        try:
            decoded = utf8_decode(octets[:2])
        except InvalidCodeUnitError:
            decoded = ""
        if len(decoded) == 1:
            return decoded
    return utf8_decode(octets[:1])


def utf16_char(unit: int) -> str:
    """Decode one 16-bit code unit; lone surrogates are rejected."""
    raw = unit.to_bytes(2, "little")
    try:
        return raw.decode("utf-16-le")
    except UnicodeDecodeError as exc:
        raise InvalidCodeUnitError("utf-16", raw) from exc


def utf32_char(value: int) -> str:
    """Map a 32-bit value to a Unicode scalar value."""
    if value > 0x10FFFF or 0xD800 <= value <= 0xDFFF:
        raise InvalidCodeUnitError("utf-32", value.to_bytes(4, "big"))
    return chr(value)
