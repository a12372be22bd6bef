from pathlib import Path

import orjson
import pyarrow.ipc as pa_ipc

from hexinspect.report import inspect_range, views_to_arrow, views_to_jsonl
from hexinspect.scalar import decode_scalars
from hexinspect.views import SCALAR_FIELDS


def test_inspect_range_stops_before_short_windows():
    data = bytes(range(40))
    rows = list(inspect_range(data))
    assert [offset for offset, _view in rows] == list(range(25))
    assert rows[3][1] == decode_scalars(data[3:19])
    assert len(list(inspect_range(data, start=20, count=100))) == 5
    assert list(inspect_range(bytes(8))) == []


def test_views_to_jsonl(tmp_path: Path):
    path = tmp_path / "out" / "dump.jsonl"
    written = views_to_jsonl(inspect_range(bytes(range(20))), path)
    lines = path.read_bytes().splitlines()
    assert written == len(lines) == 5
    first = orjson.loads(lines[0])
    assert first["offset"] == 0
    assert first["value_le_u8"] == "0"


def test_views_to_arrow(tmp_path: Path):
    path = tmp_path / "dump.arrow"
    written = views_to_arrow(inspect_range(bytes(range(18))), path)
    assert written == 3
    with pa_ipc.open_file(path) as reader:
        table = reader.read_all()
    assert table.num_rows == 3
    assert table.column_names == ["offset", *SCALAR_FIELDS]
    assert table.column("value_le_u8").to_pylist() == ["0", "1", "2"]
