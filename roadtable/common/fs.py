"""Filesystem helpers for policy files, run reports and the road table."""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Iterable, Mapping

import yaml


def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def read_text(path: Path) -> str:
    # Exports saved by Windows tools often carry a BOM.
    with path.open("r", encoding="utf-8-sig") as f:
        return f.read()


def read_yaml(path: Path):
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def write_json(path: Path, payload: Mapping[str, object]) -> None:
    ensure_dir(path.parent)
    path.write_text(json.dumps(payload, ensure_ascii=False, indent=2, sort_keys=True) + "\n", encoding="utf-8")


def write_csv(
    path: Path,
    headers: list[str],
    rows: Iterable[Mapping[str, object]],
    *,
    delimiter: str,
    lineterminator: str = "\r\n",
) -> int:
    """Write ``rows`` under a header line, replacing any existing file. Returns the row count."""
    ensure_dir(path.parent)
    written = 0
    with path.open("w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(
            f,
            fieldnames=headers,
            delimiter=delimiter,
            lineterminator=lineterminator,
            quoting=csv.QUOTE_MINIMAL,
            extrasaction="raise",
        )
        writer.writeheader()
        for row in rows:
            writer.writerow(row)
            written += 1
    return written
