"""Current, previous and historical period statistics."""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from alignment_engine.config import DEFAULT_TIMEZONE, HISTORY_DEPTH
from alignment_engine.metrics import summarize
from alignment_engine.periods import DateLike, coerce_period, period_bounds, period_label, shift_period
from alignment_engine.schema import HistoricalBucket, PeriodStats, ReportError, StatsReport, Task

logger = logging.getLogger(__name__)

TaskLookup = Callable[..., Iterable[Task]]


def _fetch(fetch_tasks_in_range: TaskLookup, start, end) -> list[Task]:
    logger.debug("Fetching tasks scheduled between %s and %s", start, end)
    try:
        return list(fetch_tasks_in_range(start, end))
    except Exception as exc:
        logger.exception("Task lookup failed for %s .. %s", start, end)
        raise ReportError(f"Failed to fetch tasks scheduled between {start} and {end}") from exc


def list_period_tasks(period, reference: DateLike, fetch_tasks_in_range: TaskLookup, tz: str = DEFAULT_TIMEZONE) -> list[Task]:
    """Tasks scheduled within the period containing ``reference``, earliest first."""

    start, end = period_bounds(period, reference, tz)
    return sorted(_fetch(fetch_tasks_in_range, start, end), key=lambda task: task.scheduled_start)


def _period_stats(period, reference, fetch_tasks_in_range: TaskLookup, tz: str) -> PeriodStats:
    start, end = period_bounds(period, reference, tz)
    summary = summarize(_fetch(fetch_tasks_in_range, start, end))
    return PeriodStats(period=period, start=start, end=end, summary=summary)


def _historical(period, reference, fetch_tasks_in_range: TaskLookup, depth: int, tz: str) -> list[HistoricalBucket]:
    buckets = []
    for steps in range(depth - 1, -1, -1):
        start, end = period_bounds(period, shift_period(period, reference, steps, tz), tz)
        summary = summarize(_fetch(fetch_tasks_in_range, start, end))
        buckets.append(HistoricalBucket(label=period_label(period, start), start=start, end=end, summary=summary))
    return buckets


def build_stats_report(
    period,
    reference: DateLike,
    fetch_tasks_in_range: TaskLookup,
    history_depth: int = HISTORY_DEPTH,
    tz: str = DEFAULT_TIMEZONE,
) -> StatsReport:
    """Summarize the current period, the one before it and ``history_depth`` buckets.

    ``fetch_tasks_in_range(start, end)`` must return every task whose
    ``scheduled_start`` lies within the inclusive range. A failing lookup
    aborts the whole report.
    """

    period = coerce_period(period)
    if history_depth < 1:
        raise ValueError("history_depth must be at least 1")

    current = _period_stats(period, reference, fetch_tasks_in_range, tz)
    previous = _period_stats(period, shift_period(period, reference, 1, tz), fetch_tasks_in_range, tz)
    historical = _historical(period, reference, fetch_tasks_in_range, history_depth, tz)

    logger.info(
        "Built %s stats report: %d current tasks, %d buckets",
        period.value,
        current.summary.total_tasks,
        len(historical),
    )
    return StatsReport(current=current, previous=previous, historical=historical)
