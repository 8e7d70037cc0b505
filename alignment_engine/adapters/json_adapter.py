"""JSON adapter for task records and reports."""

from __future__ import annotations

import json

from alignment_engine.adapters.records import parse_task_record
from alignment_engine.schema import StatsReport, Task


def parse(file_path: str) -> list[Task]:
    """Parse JSON file into tasks."""

    with open(file_path, encoding="utf-8") as handle:
        payload = json.load(handle)

    if not isinstance(payload, list):
        raise ValueError("JSON payload must be a list of objects")

    tasks = []
    for index, item in enumerate(payload, start=1):
        if not isinstance(item, dict):
            raise ValueError(f"Item {index}: expected an object")
        tasks.append(parse_task_record(item, f"Item {index}"))
    return tasks


def dump_report(report: StatsReport, file_path: str) -> None:
    with open(file_path, "w", encoding="utf-8") as handle:
        json.dump(report.as_dict(), handle, indent=2)
