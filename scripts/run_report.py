"""Build a period statistics report from a CSV/JSON task file."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

import pendulum

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from alignment_engine.adapters import csv_adapter, json_adapter
from alignment_engine.config import DEFAULT_TIMEZONE
from alignment_engine.evaluator import compare_periods
from alignment_engine.lookup import range_lookup
from alignment_engine.periods import parse_timestamp
from alignment_engine.report import build_stats_report
from alignment_engine.tasks import rescore_tasks


def _load_tasks(path: Path):
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return csv_adapter.parse(str(path))
    if suffix == ".json":
        return json_adapter.parse(str(path))
    raise ValueError("Unsupported input format, expected .csv or .json")


def main() -> None:
    parser = argparse.ArgumentParser(description="Build an alignment stats report")
    parser.add_argument("--data", required=True, help="Path to CSV/JSON tasks file")
    parser.add_argument("--period", choices=["week", "month"], default="week")
    parser.add_argument("--date", help="Reference date (ISO 8601), defaults to now")
    parser.add_argument("--rescore", action="store_true", help="Recompute alignment and points before reporting")
    parser.add_argument("--output", help="Also write the report JSON to this path")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    tasks = _load_tasks(Path(args.data))
    if args.rescore:
        tasks = rescore_tasks(tasks)

    reference = parse_timestamp(args.date) if args.date else pendulum.now(DEFAULT_TIMEZONE)
    report = build_stats_report(args.period, reference, range_lookup(tasks))

    payload = report.as_dict()
    payload["comparison"] = compare_periods(report.current, report.previous)
    print(json.dumps(payload, indent=2))

    if args.output:
        out_path = Path(args.output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        print(f"Saved stats report to {out_path}")


if __name__ == "__main__":
    main()
