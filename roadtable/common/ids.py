"""Run identifier helpers."""

from __future__ import annotations

import re
from datetime import datetime, timezone
from pathlib import Path

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_-]+")


def generate_run_id(input_path: Path | None = None) -> str:
    """Sortable run id, suffixed with the input file stem so log files name their source."""
    stamp = datetime.now(tz=timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
    if input_path is None:
        return f"run-{stamp}"
    stem = _UNSAFE_CHARS.sub("_", input_path.stem).strip("_")
    return f"run-{stamp}-{stem}" if stem else f"run-{stamp}"
