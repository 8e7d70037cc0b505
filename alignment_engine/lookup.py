"""In-memory task range lookup."""

from __future__ import annotations

from typing import Callable, Iterable

from alignment_engine.schema import Task


def range_lookup(tasks: Iterable[Task]) -> Callable[..., list[Task]]:
    """Build a ``fetch_tasks_in_range(start, end)`` over a fixed task collection.

    Both bounds are inclusive and completion state is ignored.
    """

    snapshot = sorted(tasks, key=lambda task: task.scheduled_start)

    def fetch_tasks_in_range(start, end) -> list[Task]:
        return [task for task in snapshot if start <= task.scheduled_start <= end]

    return fetch_tasks_in_range
