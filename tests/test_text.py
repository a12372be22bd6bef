import random

from hexinspect.text import decode_text, scan_ascii, scan_utf8, scan_utf16, scan_utf32
from hexinspect.views import TEXT_FIELDS


def test_ascii_masks_each_byte():
    window = bytes(range(256))
    text = scan_ascii(window)
    assert len(text) == len(window)
    assert all(ord(ch) == byte & 0x7F for ch, byte in zip(text, window, strict=True))
    assert scan_ascii(b"\xc1\x42") == "AB"


def test_utf8_reproduces_plain_ascii():
    for sample in (b"Hello, world!", b"AB", b"A", b"", b"AAAA"):
        assert scan_utf8(sample, "little") == sample.decode("ascii")


def test_utf8_two_byte_code_points():
    assert scan_utf8("héllo".encode(), "little") == "héllo"
    assert scan_utf8(b"\xa9\xc3", "big") == "é"


def test_utf8_big_endian_swaps_pairs():
    assert scan_utf8(b"ABCD", "big") == "BADC"
    assert scan_utf8(b"ABC", "big") == "BAC"
    assert scan_utf8(b"AAB", "big") == "ABA"


def test_utf8_invalid_bytes_become_placeholders():
    assert scan_utf8(b"\xff\xff", "little") == "  "
    assert scan_utf8(b"A\x80B", "little") == "A B"


def test_utf16_samples_every_byte_offset():
    assert scan_utf16(b"\x00A\x00", "little") == "A "
    assert scan_utf16(b"\x00A\x00", "big") == "\u4100 "
    assert scan_utf16(b"A\x00B\x00", "little") == "\u4100 B "
    assert scan_utf16(b"\x00A", "little") == ""
    assert scan_utf16(b"A", "little") == ""


def test_utf16_surrogate_uses_placeholder():
    assert scan_utf16(b"\xd8\x00\x00", "little") == "  "
    assert scan_utf16(b"\x00\xd8\x00", "big") == "  "


def test_utf32_column_alignment():
    assert scan_utf32(b"\x00\x00\x00A\x00", "little") == "A   "
    assert scan_utf32(b"\x00\x00\x00A\x00", "big") == "    "
    assert scan_utf32(b"A\x00\x00\x00\x00", "big") == "A   "
    assert scan_utf32(b"A\x00\x00\x00", "big") == ""
    assert len(scan_utf32(bytes(8), "little")) == 4 * 4


def test_random_windows_never_raise():
    rng = random.Random(1234)
    for length in range(0, 80):
        window = bytes(rng.randrange(256) for _ in range(length))
        view = decode_text(window)
        assert len(view.text_ascii) == length
        for order in ("le", "be"):
            assert len(getattr(view, f"text_{order}_utf16")) == 2 * max(length - 2, 0)
            assert len(getattr(view, f"text_{order}_utf32")) == 4 * max(length - 4, 0)
            assert len(getattr(view, f"text_{order}_utf8")) <= length


def test_decode_text_fills_every_field():
    view = decode_text(bytearray(b"hexinspect" * 8))
    mapping = view.to_dict()
    assert tuple(mapping) == TEXT_FIELDS
    assert mapping["text_ascii"].startswith("hexinspect")
    assert mapping["text_le_utf8"] == "hexinspect" * 8
