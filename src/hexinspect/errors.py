"""Error taxonomy for the byte interpretation core and the file-state layer."""

from __future__ import annotations


class DecodeError(ValueError):
    """Base class for failures raised while interpreting a byte window."""


class ShortBufferError(DecodeError):
    """The window is smaller than the widest field that must be decoded."""

    def __init__(self, required: int, actual: int) -> None:
        super().__init__(f"window holds {actual} bytes; at least {required} are required")
        self.required = required
        self.actual = actual


class InvalidCodeUnitError(DecodeError):
    """Bytes do not form a valid character under the attempted encoding."""

    def __init__(self, encoding: str, octets: bytes) -> None:
        super().__init__(f"invalid {encoding} code unit: {octets.hex()}")
        self.encoding = encoding
        self.octets = octets


class FileStateError(RuntimeError):
    """Raised for an unknown file index or a position outside the file."""
