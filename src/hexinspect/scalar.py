"""Scalar decoder: every fixed-width reading of the bytes at a cursor.

Both byte orders reinterpret the same leading bytes of the window. The window
must hold at least MIN_WINDOW bytes so the 128-bit fields can be read; shorter
windows are rejected up front instead of being sliced short.
"""

from __future__ import annotations

import math
import struct
from collections.abc import Callable

from hexinspect.chars import (
    BYTE_ORDERS,
    ByteOrder,
    ascii_char,
    compose,
    text_unit,
    utf8_char,
    utf16_char,
    utf32_char,
)
from hexinspect.errors import InvalidCodeUnitError, ShortBufferError
from hexinspect.views import ORDER_TAGS, ScalarView

MIN_WINDOW = 16
INT_WIDTHS: dict[int, int] = {8: 1, 16: 2, 32: 4, 64: 8, 128: 16}
FLOAT_FORMATS: dict[int, str] = {32: "f", 64: "d"}
STRUCT_ORDER = {"little": "<", "big": ">"}


def _same_float(a: float, b: float, code: str) -> bool:
    try:
        return struct.pack("<" + code, a) == struct.pack("<" + code, b)
    except OverflowError:
        return False


def format_exponent(value: float, width: int = 64) -> str:
    """Render the shortest round-tripping digits as ``<mantissa>e<exponent>``.

    ``width`` selects the precision the digits must survive (32 or 64 bits),
    so ``1.0`` becomes ``1e0`` and ``0.1`` read as f32 stays ``1e-1``.
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value == 0:
        return "-0e0" if math.copysign(1.0, value) < 0 else "0e0"

    code = FLOAT_FORMATS[width]
    text = repr(value)
    for precision in range(17):
        candidate = f"{value:.{precision}e}"
        if _same_float(float(candidate), value, code):
            text = candidate
            break
    mantissa, _, exponent = text.partition("e")
    if "." in mantissa:
        mantissa = mantissa.rstrip("0").rstrip(".")
    return f"{mantissa}e{int(exponent)}"


def _char_or_empty(decode: Callable[[], str]) -> str:
    try:
        return decode()
    except InvalidCodeUnitError:
        return ""


def _utf8_octets(head: bytes, order: ByteOrder) -> bytes:
    # Big-endian view swaps the two leading octets before decoding.
    if order == "big":
        return bytes((head[1], head[0]))
    return head[:2]


def _decode_order(head: bytes, order: ByteOrder) -> dict[str, str]:
    tag = ORDER_TAGS[order]
    values: dict[str, str] = {}
    for bits, size in INT_WIDTHS.items():
        span = head[:size]
        values[f"value_{tag}_u{bits}"] = str(int.from_bytes(span, order, signed=False))
        values[f"value_{tag}_i{bits}"] = str(int.from_bytes(span, order, signed=True))
    for bits, code in FLOAT_FORMATS.items():
        (number,) = struct.unpack(STRUCT_ORDER[order] + code, head[: bits // 8])
        values[f"value_{tag}_f{bits}"] = format_exponent(number, bits)

    values[f"char_{tag}_ascii"] = ascii_char(head[0])
    values[f"char_{tag}_utf8"] = _char_or_empty(lambda: utf8_char(_utf8_octets(head, order)))
    values[f"char_{tag}_utf16"] = _char_or_empty(lambda: utf16_char(text_unit(head[:2], order)))
    values[f"char_{tag}_utf32"] = _char_or_empty(lambda: utf32_char(compose(head[:4], order)))
    return values


def decode_scalars(window: bytes | bytearray | memoryview) -> ScalarView:
    """Decode every numeric and single-character reading of the window start.

    Raises ShortBufferError when fewer than MIN_WINDOW bytes are available.
    """
    if len(window) < MIN_WINDOW:
        raise ShortBufferError(MIN_WINDOW, len(window))
    head = bytes(window[:MIN_WINDOW])
    values: dict[str, str] = {}
    for order in BYTE_ORDERS:
        values.update(_decode_order(head, order))
    return ScalarView(**values)
