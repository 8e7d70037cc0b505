"""Demo script for alignment-engine."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from alignment_engine.adapters.csv_adapter import parse
from alignment_engine.evaluator import compare_periods
from alignment_engine.lookup import range_lookup
from alignment_engine.periods import parse_timestamp
from alignment_engine.report import build_stats_report
from alignment_engine.tasks import rescore_tasks


def main() -> None:
    tasks = rescore_tasks(parse("examples/sample_tasks.csv"))
    report = build_stats_report("week", parse_timestamp("2025-01-08"), range_lookup(tasks))
    print("Current:", report.current.as_dict())
    print("Previous:", report.previous.as_dict())
    print("Comparison:", compare_periods(report.current, report.previous))
    for bucket in report.historical:
        print(f"{bucket.label:>12}  points={bucket.summary.total_points:<4} alignment={bucket.summary.average_alignment}")


if __name__ == "__main__":
    main()
