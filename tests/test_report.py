from datetime import date, datetime

import pendulum
import pytest

from alignment_engine.lookup import range_lookup
from alignment_engine.periods import period_bounds
from alignment_engine.report import build_stats_report, list_period_tasks
from alignment_engine.schema import Category, Period, ReportError, Task
from alignment_engine.tasks import create_task, toggle_completion


def task(task_id, start, completed=False, score=0, points=0, category=Category.WORK):
    return Task(
        task_id,
        f"task {task_id}",
        category,
        start,
        start.add(hours=1),
        is_completed=completed,
        alignment_score=score,
        points=points,
    )


def sample_tasks():
    return [
        task("cur-1", pendulum.datetime(2025, 1, 6, 0, tz="UTC"), True, 100, 30),
        task("cur-2", pendulum.datetime(2025, 1, 12, 23, 59, 59, tz="UTC"), category=Category.HEALTH),
        task("prev-1", pendulum.datetime(2025, 1, 1, 9, tz="UTC"), True, 50, 20),
        task("next-1", pendulum.datetime(2025, 1, 13, 0, tz="UTC"), True, 100, 30),
        task("old-1", pendulum.datetime(2024, 10, 21, 9, tz="UTC"), True, 99, 30),
    ]


def test_week_report_current_and_previous():
    report = build_stats_report("week", date(2025, 1, 8), range_lookup(sample_tasks()))

    assert report.current.period is Period.WEEK
    assert report.current.summary.total_tasks == 2
    assert report.current.summary.completed_tasks == 1
    assert report.current.summary.total_points == 30
    assert report.current.summary.success_rate == 50

    assert (report.previous.start.month, report.previous.start.day) == (12, 30)
    assert report.previous.summary.total_tasks == 1
    assert report.previous.summary.total_points == 20


def test_historical_buckets_are_contiguous_and_oldest_first():
    report = build_stats_report("week", date(2025, 1, 8), range_lookup(sample_tasks()))
    buckets = report.historical

    assert len(buckets) == 12
    assert buckets[-1].start == report.current.start
    assert buckets[-1].label == "Week 6/1"
    assert buckets[0].label == "Week 21/10"
    assert buckets[0].summary.total_points == 30
    for older, newer in zip(buckets, buckets[1:]):
        assert older.end < newer.start
        assert newer.start == older.start.add(weeks=1)


def test_month_report_labels_and_clamping():
    report = build_stats_report(Period.MONTH, date(2025, 3, 31), range_lookup([]))

    assert (report.previous.start.month, report.previous.end.day) == (2, 28)
    labels = [bucket.label for bucket in report.historical]
    assert labels[0] == "Apr 2024"
    assert labels[-1] == "Mar 2025"
    assert len(set(labels)) == 12
    for older, newer in zip(report.historical, report.historical[1:]):
        assert newer.start == older.end.add(microseconds=1)


def test_lookup_bounds_are_inclusive():
    fetched = []

    def lookup(start, end):
        fetched.append((start, end))
        return []

    build_stats_report("week", date(2025, 1, 8), lookup)
    assert len(fetched) == 14
    assert fetched[0][0] == pendulum.datetime(2025, 1, 6, tz="UTC")


def test_lookup_failure_aborts_report():
    def lookup(start, end):
        raise ConnectionError("store unavailable")

    with pytest.raises(ReportError) as excinfo:
        build_stats_report("week", date(2025, 1, 8), lookup)
    assert isinstance(excinfo.value.__cause__, ConnectionError)


def test_unknown_period_is_rejected():
    with pytest.raises(ValueError):
        build_stats_report("year", date(2025, 1, 8), range_lookup([]))


def test_list_period_tasks_sorted():
    tasks = list_period_tasks("week", date(2025, 1, 8), range_lookup(list(reversed(sample_tasks()))))
    assert [t.task_id for t in tasks] == ["cur-1", "cur-2"]


def test_report_as_dict():
    payload = build_stats_report("week", date(2025, 1, 8), range_lookup(sample_tasks())).as_dict()
    assert payload["current"]["period"] == "week"
    assert payload["current"]["category_stats"]["work"] == {"total": 1, "completed": 1, "points": 30}
    assert payload["current"]["start_date"].startswith("2025-01-06T00:00:00")
    assert len(payload["historical"]) == 12


@pytest.mark.parametrize("period", ["week", "month"])
def test_tasks_on_period_edges_are_included(period):
    start, end = period_bounds(period, date(2025, 1, 8))
    edge_tasks = [
        task("first", start, True, 100, 30),
        task("last", end, True, 50, 20),
        task("before", start.subtract(microseconds=1), True, 100, 30),
        task("after", end.add(microseconds=1), True, 100, 30),
    ]
    report = build_stats_report(period, date(2025, 1, 8), range_lookup(edge_tasks))
    assert report.current.summary.total_tasks == 2
    assert report.current.summary.total_points == 50
    listed = list_period_tasks(period, date(2025, 1, 8), range_lookup(edge_tasks))
    assert [t.task_id for t in listed] == ["first", "last"]


def test_report_includes_tasks_created_from_naive_datetimes():
    created = create_task("t1", "Write docs", "work", datetime(2025, 1, 6, 10), datetime(2025, 1, 6, 11))
    done = toggle_completion(created, True, datetime(2025, 1, 6, 10), datetime(2025, 1, 6, 11))
    report = build_stats_report("week", date(2025, 1, 8), range_lookup([done]))
    assert report.current.summary.total_tasks == 1
    assert report.current.summary.total_points == 30


def test_errors_outside_the_lookup_are_not_wrapped():
    def lookup(start, end):
        return [object()]

    with pytest.raises(AttributeError):
        build_stats_report("week", date(2025, 1, 8), lookup)


def test_list_period_tasks_wraps_lookup_failure():
    def lookup(start, end):
        raise TimeoutError("store unavailable")

    with pytest.raises(ReportError):
        list_period_tasks("week", date(2025, 1, 8), lookup)
