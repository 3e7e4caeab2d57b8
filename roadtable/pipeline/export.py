"""Road table CSV export."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from roadtable.common.constants import CSV_DELIMITER, OUTPUT_HEADERS
from roadtable.common.errors import OutputError
from roadtable.common.fs import write_csv
from roadtable.common.models import RoadRecord


def format_length(value: float) -> str:
    return repr(float(value))


def _serialize_row(record: RoadRecord) -> dict:
    row = record.to_row()
    row["LengthKm"] = format_length(record.length_km)
    return row


def write_roads_csv(path: Path, records: Iterable[RoadRecord]) -> Path:
    serialized_rows = [_serialize_row(record) for record in records]
    try:
        write_csv(path, OUTPUT_HEADERS, serialized_rows, delimiter=CSV_DELIMITER)
    except OSError as exc:
        raise OutputError(f"Cannot write road table {path}: {exc}") from exc
    return path
