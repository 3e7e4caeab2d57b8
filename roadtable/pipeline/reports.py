"""Run report for a single extraction."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from roadtable.common.errors import OutputError
from roadtable.common.fs import write_json
from roadtable.pipeline.extract import REJECTION_REASONS

if TYPE_CHECKING:
    from roadtable.pipeline.runner import ExtractionResult


def write_run_summary(
    path: Path,
    *,
    run_id: str,
    input_path: Path,
    output_path: Path,
    result: ExtractionResult,
) -> Path:
    rejected = {reason: int(result.rejected.get(reason, 0)) for reason in REJECTION_REASONS}
    status = "success"
    if result.features_in and not result.records:
        status = "empty"

    payload = {
        "run_id": run_id,
        "status": status,
        "input_path": str(input_path),
        "output_path": str(output_path),
        "features_in": result.features_in,
        "records_out": result.count,
        "rejected": rejected,
        "rejected_total": sum(rejected.values()),
    }
    try:
        write_json(path, payload)
    except OSError as exc:
        raise OutputError(f"Cannot write run report {path}: {exc}") from exc
    return path
