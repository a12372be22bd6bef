"""Export scalar readings over a byte range as JSONL or Arrow IPC."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from pathlib import Path

import orjson
import pyarrow as pa

from hexinspect.scalar import MIN_WINDOW, decode_scalars
from hexinspect.views import SCALAR_FIELDS, ScalarView

InspectRow = tuple[int, ScalarView]


def inspect_range(data: bytes, start: int = 0, count: int | None = None) -> Iterator[InspectRow]:
    """Yield ``(offset, view)`` for each offset with a full window behind it."""
    last = len(data) - MIN_WINDOW
    stop = last + 1 if count is None else min(start + count, last + 1)
    for offset in range(max(start, 0), stop):
        yield offset, decode_scalars(data[offset : offset + MIN_WINDOW])


def views_to_jsonl(rows: Iterable[InspectRow], path: Path) -> int:
    """Write one JSON object per offset; returns the number of rows written."""
    path.parent.mkdir(parents=True, exist_ok=True)
    written = 0
    with path.open("wb") as f:
        for offset, view in rows:
            f.write(orjson.dumps({"offset": offset, **view.to_dict()}) + b"\n")
            written += 1
    return written


def views_to_arrow(rows: Iterable[InspectRow], path: Path) -> int:
    """Write rows to an Arrow IPC file with an offset column plus one string column per field."""
    path.parent.mkdir(parents=True, exist_ok=True)
    materialized = list(rows)
    columns: dict[str, list] = {"offset": [offset for offset, _view in materialized]}
    for name in SCALAR_FIELDS:
        columns[name] = [getattr(view, name) for _offset, view in materialized]
    schema = pa.schema(
        [pa.field("offset", pa.int64())] + [pa.field(name, pa.string()) for name in SCALAR_FIELDS]
    )
    table = pa.table(columns, schema=schema)
    with pa.OSFile(str(path), "wb") as sink:
        with pa.ipc.new_file(sink, table.schema) as writer:
            writer.write_table(table)
    return table.num_rows
