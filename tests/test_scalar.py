import struct
from concurrent.futures import ThreadPoolExecutor

import pytest

from hexinspect.errors import ShortBufferError
from hexinspect.scalar import MIN_WINDOW, decode_scalars, format_exponent
from hexinspect.views import SCALAR_FIELDS


def _window(*head: int) -> bytes:
    return bytes(head).ljust(MIN_WINDOW, b"\x00")


def test_u16_orders_reinterpret_same_bytes():
    view = decode_scalars(_window(0x41, 0x00))
    assert view.value_le_u16 == "65"
    assert view.value_be_u16 == "16640"
    assert view.char_le_ascii == "A"
    assert view.char_be_ascii == "A"
    assert view.value_le_u8 == view.value_be_u8 == "65"


def test_f32_little_endian_one():
    view = decode_scalars(_window(0x00, 0x00, 0x80, 0x3F))
    assert view.value_le_f32 == "1e0"
    assert view.value_be_f32.endswith("e-41")


def test_all_ones_window():
    view = decode_scalars(b"\xff" * MIN_WINDOW)
    assert view.value_le_u128 == str(2**128 - 1)
    assert view.value_be_i128 == "-1"
    assert view.value_le_i8 == "-1"
    assert view.value_le_f32 == "NaN"
    assert view.value_be_f64 == "NaN"
    assert view.char_le_ascii == "\x7f"
    assert view.char_le_utf8 == ""
    assert view.char_le_utf32 == ""
    assert view.char_le_utf16 == "\uffff"


def test_all_zero_window():
    view = decode_scalars(bytes(MIN_WINDOW))
    assert view.value_le_f32 == "0e0"
    assert view.value_be_f64 == "0e0"
    assert view.char_le_utf32 == "\x00"
    assert view.char_be_utf8 == "\x00"


def test_every_field_populated_as_string():
    for window in (bytes(MIN_WINDOW), b"\xff" * MIN_WINDOW, bytes(range(64))):
        mapping = decode_scalars(window).to_dict()
        assert tuple(mapping) == SCALAR_FIELDS
        assert all(isinstance(value, str) for value in mapping.values())


def test_signed_and_wide_integers():
    window = struct.pack("<q", -2) + struct.pack(">Q", 7)
    view = decode_scalars(window)
    assert view.value_le_i64 == "-2"
    assert view.value_le_u64 == str(2**64 - 2)
    assert view.value_le_i32 == "-2"
    assert view.value_be_u128 == str(int.from_bytes(window, "big"))


def test_utf8_char_two_byte_sequence():
    view = decode_scalars(_window(0xC3, 0xA9))
    assert view.char_le_utf8 == "é"
    assert view.char_be_utf8 == ""


def test_utf8_char_big_endian_swaps_leading_octets():
    view = decode_scalars(_window(0xA9, 0xC3))
    assert view.char_be_utf8 == "é"
    assert view.char_le_utf8 == ""


def test_utf8_char_falls_back_to_lead_byte():
    view = decode_scalars(_window(0x41, 0x42))
    assert view.char_le_utf8 == "A"
    assert view.char_be_utf8 == "B"


def test_utf16_char_reads_leading_byte_as_high_byte_for_little_endian():
    view = decode_scalars(_window(0x00, 0x41))
    assert view.char_le_utf16 == "A"
    assert view.char_be_utf16 == "䄀"
    assert view.value_le_u16 == str(0x4100)


def test_utf32_char_follows_requested_order():
    view = decode_scalars(_window(0x41, 0x00, 0x00, 0x00))
    assert view.char_le_utf32 == "A"
    assert view.char_be_utf32 == ""
    assert view.char_le_utf16 == "䄀"
    assert view.char_be_utf16 == "A"


def test_utf16_surrogate_degrades_to_empty():
    view = decode_scalars(_window(0xD8, 0x00))
    assert view.char_le_utf16 == ""
    assert view.char_be_utf16 == "\u00d8"
    assert view.value_be_u16 == str(0xD800)


def test_short_window_reports_short_buffer():
    with pytest.raises(ShortBufferError) as excinfo:
        decode_scalars(b"\x01" * (MIN_WINDOW - 1))
    assert excinfo.value.required == MIN_WINDOW
    assert excinfo.value.actual == MIN_WINDOW - 1

    with pytest.raises(ShortBufferError):
        decode_scalars(b"")


def test_accepts_memoryview_and_longer_windows():
    data = bytearray(b"\x10\x00" + bytes(1022))
    assert decode_scalars(memoryview(data)).value_le_u16 == "16"


def test_concurrent_calls_share_input():
    window = bytes(range(32))
    with ThreadPoolExecutor(max_workers=4) as pool:
        views = list(pool.map(decode_scalars, [window] * 16))
    assert all(view == views[0] for view in views)


def test_format_exponent_renderings():
    assert format_exponent(1.0) == "1e0"
    assert format_exponent(1.5) == "1.5e0"
    assert format_exponent(123.0) == "1.23e2"
    assert format_exponent(-0.0025) == "-2.5e-3"
    assert format_exponent(-0.0) == "-0e0"
    assert format_exponent(float("inf")) == "inf"
    assert format_exponent(float("-inf")) == "-inf"
    assert format_exponent(float("nan")) == "NaN"


def test_format_exponent_uses_single_precision_digits():
    (tenth,) = struct.unpack("<f", struct.pack("<f", 0.1))
    assert format_exponent(tenth, 32) == "1e-1"
    assert format_exponent(tenth, 64) == "1.0000000149011612e-1"
