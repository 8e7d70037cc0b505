"""CSV adapter for task records."""

from __future__ import annotations

import csv

from alignment_engine.adapters.records import FIELDNAMES, parse_task_record
from alignment_engine.schema import Task


def parse(file_path: str) -> list[Task]:
    """Parse CSV file into a list of tasks."""

    with open(file_path, newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            return []

        tasks: list[Task] = []
        for row_number, row in enumerate(reader, start=2):
            tasks.append(parse_task_record(row, f"Row {row_number}"))
        return tasks


def dump(tasks: list[Task], file_path: str) -> None:
    """Write tasks back out in the format ``parse`` reads."""

    with open(file_path, "w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=FIELDNAMES)
        writer.writeheader()
        for task in tasks:
            row = task.as_dict()
            writer.writerow({name: "" if row[name] is None else row[name] for name in FIELDNAMES})
