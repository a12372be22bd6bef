"""Micro-benchmarks for the scalar decoder and text scanner on random windows."""

from __future__ import annotations

import random
import time

from hexinspect.files import WINDOW_SIZE
from hexinspect.scalar import decode_scalars
from hexinspect.text import decode_text


def benchmark_decode(windows: int = 200, runs: int = 3, seed: int = 1234) -> dict[str, float]:
    rng = random.Random(seed)
    data = [rng.randbytes(WINDOW_SIZE) for _ in range(windows)]
    best_scalar = None
    best_text = None
    for _ in range(runs):
        start = time.perf_counter()
        for window in data:
            decode_scalars(window)
        elapsed = time.perf_counter() - start
        best_scalar = elapsed if best_scalar is None or elapsed < best_scalar else best_scalar

        start = time.perf_counter()
        for window in data:
            decode_text(window)
        elapsed = time.perf_counter() - start
        best_text = elapsed if best_text is None or elapsed < best_text else best_text
    return {
        "windows": windows,
        "window_bytes": WINDOW_SIZE,
        "scalar_us_per_call": (best_scalar or 0.0) / windows * 1e6,
        "text_ms_per_call": (best_text or 0.0) / windows * 1e3,
    }


if __name__ == "__main__":
    result = benchmark_decode()
    print(result)
