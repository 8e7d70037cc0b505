from datetime import datetime

import pendulum
import pytest

from alignment_engine.schema import Category, InvalidTaskError
from alignment_engine.tasks import apply_update, create_task, rescore_tasks, toggle_completion

START = pendulum.datetime(2025, 1, 6, 10, tz="UTC")
END = pendulum.datetime(2025, 1, 6, 11, tz="UTC")


def new_task():
    return create_task("t1", " Write docs ", "Work", START, END)


def test_create_task_defaults():
    task = new_task()
    assert task.title == "Write docs"
    assert task.category is Category.WORK
    assert (task.is_completed, task.alignment_score, task.points) == (False, 0, 0)
    assert task.actual_start is None and task.actual_end is None


@pytest.mark.parametrize(
    "kwargs",
    [
        {"title": "  "},
        {"category": "chores"},
        {"scheduled_end": START},
        {"scheduled_end": START.subtract(minutes=1)},
    ],
)
def test_create_task_rejects_invalid_input(kwargs):
    params = {"task_id": "t1", "title": "ok", "category": "work", "scheduled_start": START, "scheduled_end": END}
    params.update(kwargs)
    with pytest.raises(InvalidTaskError):
        create_task(**params)


def test_toggle_completion_scores_and_clears():
    done = toggle_completion(new_task(), True, START.add(minutes=30), END.add(minutes=30))
    assert (done.alignment_score, done.points) == (99, 30)

    reopened = toggle_completion(done, False)
    assert reopened.actual_start is None and reopened.actual_end is None
    assert (reopened.alignment_score, reopened.points) == (0, 0)


def test_toggle_completion_without_actuals_gives_partial_credit():
    done = toggle_completion(new_task(), True)
    assert (done.alignment_score, done.points) == (50, 20)


def test_toggle_completion_does_not_mutate_input():
    original = new_task()
    toggle_completion(original, True, START, END)
    assert original.is_completed is False


def test_apply_update_only_changes_given_fields():
    task = apply_update(new_task(), actual_start=START)
    assert task.actual_start == START
    assert (task.alignment_score, task.points) == (0, 0)

    task = apply_update(task, actual_end=END, is_completed=True)
    assert (task.alignment_score, task.points) == (100, 30)

    task = apply_update(task, is_completed=False)
    assert task.actual_end == END
    assert (task.alignment_score, task.points) == (0, 0)


def test_rescore_tasks():
    stale = toggle_completion(new_task(), True, START, END)
    tasks = rescore_tasks([stale, new_task()])
    assert [(t.alignment_score, t.points) for t in tasks] == [(100, 30), (0, 0)]


def test_naive_timestamps_are_read_in_utc():
    task = create_task("t1", "Write docs", "work", datetime(2025, 1, 6, 10), datetime(2025, 1, 6, 11))
    assert task.scheduled_start == START
    assert task.scheduled_start.tzinfo is not None


def test_naive_timestamps_honour_timezone():
    task = create_task("t1", "Write docs", "work", datetime(2025, 1, 6, 11), datetime(2025, 1, 6, 12), tz="Europe/Paris")
    assert task.scheduled_start == START


def test_toggle_completion_accepts_naive_actual_times():
    done = toggle_completion(new_task(), True, datetime(2025, 1, 6, 10, 30), datetime(2025, 1, 6, 11, 30))
    assert done.actual_start == START.add(minutes=30)
    assert (done.alignment_score, done.points) == (99, 30)


def test_apply_update_accepts_naive_actual_times():
    task = apply_update(new_task(), datetime(2025, 1, 6, 10), datetime(2025, 1, 6, 11), True)
    assert (task.alignment_score, task.points) == (100, 30)
