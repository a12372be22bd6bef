"""Open-file registry feeding byte windows to the decoders.

The registry owns every open handle and addresses them by the integer index
returned from open_file. Callers never hold a handle across calls; they ask
the registry to read, and the registry hands back copies of the buffered
window.
"""

from __future__ import annotations

import base64
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO

from hexinspect.errors import FileStateError
from hexinspect.scalar import MIN_WINDOW, decode_scalars
from hexinspect.text import decode_text
from hexinspect.views import ScalarView, TextView

WINDOW_SIZE = 1024


@dataclass
class FileState:
    handle: BinaryIO
    path: Path
    index: int
    size: int
    prev_seek_pos: int = 0
    window: bytes = field(default=b"\x00" * WINDOW_SIZE)


@dataclass
class FileReadResult:
    file_index: int
    file_data: str


@dataclass
class OpenFileInfo:
    file_name: str
    file_name_no_path: str
    file_index: int
    file_size: int


def _fill_window(handle: BinaryIO, size: int) -> bytes:
    data = handle.read(size)
    return data.ljust(size, b"\x00")


class FileRegistry:
    """Arena of open files, guarded by a single lock."""

    def __init__(self, window_size: int = WINDOW_SIZE) -> None:
        if window_size < MIN_WINDOW:
            raise ValueError(f"window_size must be at least {MIN_WINDOW}, got {window_size}")
        self.window_size = window_size
        self._files: dict[int, FileState] = {}
        self._next_index = 0
        self._lock = threading.Lock()

    def __enter__(self) -> FileRegistry:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close_all()

    def _get(self, index: int) -> FileState:
        state = self._files.get(index)
        if state is None:
            raise FileStateError(f"Invalid file index: {index}")
        return state

    def open_file(self, path: Path | str, rw: bool = False) -> int:
        """Open a file, buffer its first window and return its index."""
        path = Path(path)
        handle = path.open("r+b" if rw else "rb")
        try:
            size = path.stat().st_size
            window = _fill_window(handle, self.window_size)
        except OSError:
            handle.close()
            raise
        with self._lock:
            index = self._next_index
            self._next_index += 1
            self._files[index] = FileState(
                handle=handle, path=path, index=index, size=size, window=window
            )
        return index

    def read_file(self, index: int, position: int) -> FileReadResult:
        """Seek to ``position`` and buffer the window starting there."""
        with self._lock:
            state = self._get(index)
            if position < 0 or position >= state.size:
                raise FileStateError(f"Invalid file position: {position}")
            state.handle.seek(position)
            state.window = _fill_window(state.handle, self.window_size)
            state.prev_seek_pos = position
            encoded = base64.b64encode(state.window).decode("ascii")
        return FileReadResult(file_index=index, file_data=encoded)

    def read_file_current_pos(self, index: int) -> FileReadResult:
        with self._lock:
            position = self._get(index).prev_seek_pos
        return self.read_file(index, position)

    def get_open_files(self) -> list[OpenFileInfo]:
        with self._lock:
            return [
                OpenFileInfo(
                    file_name=str(state.path),
                    file_name_no_path=state.path.name,
                    file_index=state.index,
                    file_size=state.size,
                )
                for state in self._files.values()
            ]

    def window_at(self, index: int, position: int) -> bytes:
        """Slice of the buffered window starting at an absolute file position."""
        with self._lock:
            state = self._get(index)
            offset = max(position - state.prev_seek_pos, 0)
            if offset >= len(state.window):
                raise FileStateError(f"Invalid file position: {position}")
            return state.window[offset:]

    def get_data_in_position(self, index: int, position: int) -> ScalarView:
        """Scalar readings at ``position``; raises ShortBufferError near the window end."""
        return decode_scalars(self.window_at(index, position))

    def get_text_data_in_position(self, index: int) -> TextView:
        with self._lock:
            window = self._get(index).window
        return decode_text(window)

    def close_file(self, index: int) -> None:
        with self._lock:
            state = self._files.pop(index, None)
        if state is None:
            raise FileStateError(f"Invalid file index: {index}")
        state.handle.close()

    def close_all(self) -> None:
        with self._lock:
            states = list(self._files.values())
            self._files.clear()
        for state in states:
            state.handle.close()
