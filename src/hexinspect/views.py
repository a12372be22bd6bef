"""Result records handed to the UI boundary.

Field names form the wire schema: every field is a string and every field is
always present.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields

SCALAR_KINDS: tuple[str, ...] = (
    "u8",
    "i8",
    "u16",
    "i16",
    "u32",
    "i32",
    "u64",
    "i64",
    "u128",
    "i128",
    "f32",
    "f64",
)
CHAR_ENCODINGS: tuple[str, ...] = ("ascii", "utf8", "utf16", "utf32")
ORDER_TAGS = {"little": "le", "big": "be"}


@dataclass
class ScalarView:
    value_le_u8: str = ""
    value_le_i8: str = ""
    value_le_u16: str = ""
    value_le_i16: str = ""
    value_le_u32: str = ""
    value_le_i32: str = ""
    value_le_u64: str = ""
    value_le_i64: str = ""
    value_le_u128: str = ""
    value_le_i128: str = ""
    value_le_f32: str = ""
    value_le_f64: str = ""
    char_le_ascii: str = ""
    char_le_utf8: str = ""
    char_le_utf16: str = ""
    char_le_utf32: str = ""
    value_be_u8: str = ""
    value_be_i8: str = ""
    value_be_u16: str = ""
    value_be_i16: str = ""
    value_be_u32: str = ""
    value_be_i32: str = ""
    value_be_u64: str = ""
    value_be_i64: str = ""
    value_be_u128: str = ""
    value_be_i128: str = ""
    value_be_f32: str = ""
    value_be_f64: str = ""
    char_be_ascii: str = ""
    char_be_utf8: str = ""
    char_be_utf16: str = ""
    char_be_utf32: str = ""

    def to_dict(self) -> dict[str, str]:
        return asdict(self)

    def value(self, kind: str, order: str) -> str:
        """Look up a numeric rendering, e.g. ``value("u16", "little")``."""
        return getattr(self, f"value_{ORDER_TAGS[order]}_{kind}")

    def char(self, encoding: str, order: str) -> str:
        return getattr(self, f"char_{ORDER_TAGS[order]}_{encoding}")


@dataclass
class TextView:
    text_ascii: str = ""
    text_le_utf8: str = ""
    text_le_utf16: str = ""
    text_le_utf32: str = ""
    text_be_utf8: str = ""
    text_be_utf16: str = ""
    text_be_utf32: str = ""

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


SCALAR_FIELDS: tuple[str, ...] = tuple(f.name for f in fields(ScalarView))
TEXT_FIELDS: tuple[str, ...] = tuple(f.name for f in fields(TextView))
