"""Period summary metrics."""

from __future__ import annotations

from collections import defaultdict
from typing import Iterable

import numpy as np

from alignment_engine.schema import CategoryStats, StatsSummary, Task
from alignment_engine.scoring import round_half_up


def summarize(tasks: Iterable[Task]) -> StatsSummary:
    """Compute totals, completion rate, average alignment and category breakdown.

    The average alignment covers every task, so incomplete tasks (score 0)
    pull it down.
    """

    tasks = list(tasks)
    if not tasks:
        return StatsSummary()

    by_category: dict = defaultdict(CategoryStats)
    completed_count = 0
    for task in tasks:
        stats = by_category[task.category]
        stats.total += 1
        if task.is_completed:
            completed_count += 1
            stats.completed += 1
            stats.points += task.points

    scores = np.fromiter((task.alignment_score for task in tasks), dtype=float, count=len(tasks))
    points = np.fromiter((task.points for task in tasks), dtype=np.int64, count=len(tasks))

    return StatsSummary(
        total_tasks=len(tasks),
        completed_tasks=completed_count,
        total_points=int(points.sum()),
        average_alignment=round_half_up(float(scores.mean())),
        success_rate=round_half_up(completed_count / len(tasks) * 100.0),
        category_stats=dict(by_category),
    )
