"""Extract drivable road segments from a GeoJSON export into a semicolon-delimited road table."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from roadtable.common.config_loader import load_policy
from roadtable.common.constants import DEFAULT_INPUT_FILE, DEFAULT_OUTPUT_FILE, EXIT_HARD_FAIL, EXIT_SUCCESS
from roadtable.common.errors import MissingInputError, PipelineError
from roadtable.common.ids import generate_run_id
from roadtable.common.logging import build_logger, close_logger, log_event
from roadtable.pipeline.runner import run_pipeline


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--input", default=DEFAULT_INPUT_FILE)
    parser.add_argument("--output", default=DEFAULT_OUTPUT_FILE)
    parser.add_argument("--policy-config", default=None)
    parser.add_argument("--overlay-policy-config", default=None)
    parser.add_argument("--report", default=None)
    parser.add_argument("--log-dir", default=None)
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--run-id", default=None)
    return parser.parse_args(argv)


def run_command(args: argparse.Namespace) -> int:
    input_path = Path(args.input)
    run_id = args.run_id or generate_run_id(input_path)
    output_path = Path(args.output)
    log_dir = Path(args.log_dir) if args.log_dir else None

    logger = build_logger(run_id, log_dir=log_dir, level=args.log_level)
    try:
        policy = load_policy(
            Path(args.policy_config) if args.policy_config else None,
            overlay_path=Path(args.overlay_policy_config) if args.overlay_policy_config else None,
        )
        result = run_pipeline(
            input_path,
            output_path,
            logger=logger,
            run_id=run_id,
            policy=policy,
            report_path=Path(args.report) if args.report else None,
        )
    except MissingInputError as exc:
        log_event(
            logger,
            str(exc),
            level=logging.ERROR,
            run_id=run_id,
            event="RUN_FAIL",
            status="error",
            path=str(input_path),
            error_code=exc.error_code,
        )
        print(f"ERROR: File {input_path} not found.")
        return EXIT_HARD_FAIL
    except PipelineError as exc:
        log_event(logger, str(exc), level=logging.ERROR, run_id=run_id, event="RUN_FAIL", status="error", error_code=exc.error_code)
        print(f"ERROR: {exc}")
        return EXIT_HARD_FAIL
    finally:
        close_logger(logger)

    print(f"Saved {result.count} road segments to {output_path}")
    return EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    return run_command(args)


if __name__ == "__main__":
    raise SystemExit(main())
