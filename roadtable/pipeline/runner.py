"""Pipeline orchestration: decode, extract, export."""

from __future__ import annotations

import logging
import time
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from roadtable.common.logging import log_event
from roadtable.common.models import RawFeature, RoadRecord
from roadtable.common.policy import DEFAULT_POLICY, ClassificationPolicy
from roadtable.ingest.geojson_reader import read_feature_collection
from roadtable.pipeline.export import write_roads_csv
from roadtable.pipeline.extract import extract_road
from roadtable.pipeline.reports import write_run_summary


@dataclass
class ExtractionResult:
    records: list[RoadRecord] = field(default_factory=list)
    features_in: int = 0
    rejected: Counter = field(default_factory=Counter)

    @property
    def count(self) -> int:
        return len(self.records)


def run_extraction(
    features: Iterable[RawFeature],
    policy: ClassificationPolicy = DEFAULT_POLICY,
) -> ExtractionResult:
    result = ExtractionResult()
    for feature in features:
        result.features_in += 1
        extraction = extract_road(feature, policy)
        if extraction.record is None:
            result.rejected[extraction.rejected] += 1
            continue
        result.records.append(extraction.record)
    return result


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)


def run_pipeline(
    input_path: Path,
    output_path: Path,
    *,
    logger: logging.Logger,
    run_id: str,
    policy: ClassificationPolicy = DEFAULT_POLICY,
    report_path: Path | None = None,
) -> ExtractionResult:
    started = time.monotonic()
    log_event(logger, "reading feature collection", run_id=run_id, stage="read", event="STAGE_START", status="ok", path=str(input_path))
    features = read_feature_collection(input_path)
    log_event(
        logger,
        "feature collection decoded",
        run_id=run_id,
        stage="read",
        event="STAGE_END",
        status="ok",
        path=str(input_path),
        features_in=len(features),
        duration_ms=_elapsed_ms(started),
    )

    started = time.monotonic()
    result = run_extraction(features, policy)
    log_event(
        logger,
        "roads extracted",
        run_id=run_id,
        stage="extract",
        event="STAGE_END",
        status="ok",
        features_in=result.features_in,
        records_out=result.count,
        rejected=dict(sorted(result.rejected.items())),
        duration_ms=_elapsed_ms(started),
    )

    started = time.monotonic()
    write_roads_csv(output_path, result.records)
    log_event(
        logger,
        "road table written",
        run_id=run_id,
        stage="export",
        event="STAGE_END",
        status="ok",
        path=str(output_path),
        records_out=result.count,
        duration_ms=_elapsed_ms(started),
    )

    if report_path is not None:
        write_run_summary(report_path, run_id=run_id, input_path=input_path, output_path=output_path, result=result)
    return result
