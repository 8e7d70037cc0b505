"""Current vs previous period comparison."""

from __future__ import annotations

from alignment_engine.schema import PeriodStats, StatsSummary


def _summary(value) -> StatsSummary:
    return value.summary if isinstance(value, PeriodStats) else value


def compare_periods(current, previous) -> dict:
    """Compare two period summaries for the dashboard trend cards."""

    current = _summary(current)
    previous = _summary(previous)

    def pct_change(old: float, new: float) -> float:
        if old == 0:
            return 0.0
        return ((new - old) / old) * 100.0

    return {
        "points_change_pct": pct_change(previous.total_points, current.total_points),
        "completed_change": current.completed_tasks - previous.completed_tasks,
        "success_rate_change": current.success_rate - previous.success_rate,
        "alignment_change": current.average_alignment - previous.average_alignment,
    }
