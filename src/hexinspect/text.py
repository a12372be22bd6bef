"""Text scanner: the whole window rendered under each text encoding.

UTF-16 and UTF-32 start a new code unit at every byte offset, so each output
token lines up with the byte it starts at in a fixed-width preview pane. Their
code units are composed with text_unit, which reads the octets opposite to the
requested byte order. The last complete code unit of the window is not
sampled.
"""

from __future__ import annotations

from hexinspect.chars import (
    ByteOrder,
    ascii_char,
    text_unit,
    utf8_decode,
    utf16_char,
    utf32_char,
)
from hexinspect.errors import InvalidCodeUnitError
from hexinspect.views import TextView

PLACEHOLDER = " "
UTF16_SEPARATOR = " "
UTF32_SEPARATOR = "   "


def _utf8_single(byte: int) -> str | None:
    try:
        return utf8_decode(bytes((byte,)))
    except InvalidCodeUnitError:
        return None


def scan_ascii(window: bytes) -> str:
    """One 7-bit character per byte."""
    return "".join(ascii_char(byte) for byte in window)


def scan_utf8(window: bytes, order: ByteOrder) -> str:
    """Walk the window pairing octets, emitting one- or two-byte code points.

    The big-endian pass swaps each octet pair before decoding it.
    """
    out: list[str] = []
    total = len(window)
    idx = 0
    while idx < total - 1:
        first, second = window[idx], window[idx + 1]
        lead = _utf8_single(first)
        pair = bytes((second, first)) if order == "big" else bytes((first, second))
        try:
            decoded = utf8_decode(pair)
        except InvalidCodeUnitError:
            out.append(lead if lead is not None else PLACEHOLDER)
            idx += 1
            continue

        if lead is not None and decoded[0] == lead:
            # genuine single-byte code point
            out.append(lead)
            idx += 1
        else:
            # either one two-byte code point or two independent single bytes;
            # both octets are consumed
            out.append(decoded)
            idx += 2

    if idx == total - 1:
        lead = _utf8_single(window[idx])
        out.append(lead if lead is not None else PLACEHOLDER)
    return "".join(out)


def scan_utf16(window: bytes, order: ByteOrder) -> str:
    """One token per byte offset up to ``len - 2``: the code unit there plus a space."""
    out: list[str] = []
    for idx in range(len(window) - 2):
        try:
            char = utf16_char(text_unit(window[idx : idx + 2], order))
        except InvalidCodeUnitError:
            char = PLACEHOLDER
        out.append(char + UTF16_SEPARATOR)
    return "".join(out)


def scan_utf32(window: bytes, order: ByteOrder) -> str:
    """One token per byte offset up to ``len - 4``, padded to a 4-column stride."""
    out: list[str] = []
    for idx in range(len(window) - 4):
        try:
            char = utf32_char(text_unit(window[idx : idx + 4], order))
        except InvalidCodeUnitError:
            char = PLACEHOLDER
        out.append(char + UTF32_SEPARATOR)
    return "".join(out)


def decode_text(window: bytes | bytearray | memoryview) -> TextView:
    """Render the full window under every encoding and byte order."""
    data = bytes(window)
    return TextView(
        text_ascii=scan_ascii(data),
        text_le_utf8=scan_utf8(data, "little"),
        text_le_utf16=scan_utf16(data, "little"),
        text_le_utf32=scan_utf32(data, "little"),
        text_be_utf8=scan_utf8(data, "big"),
        text_be_utf16=scan_utf16(data, "big"),
        text_be_utf32=scan_utf32(data, "big"),
    )
