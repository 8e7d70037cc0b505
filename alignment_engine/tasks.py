"""Task creation, validation and completion updates."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Iterable, Optional

from alignment_engine.config import DEFAULT_POLICY, DEFAULT_TIMEZONE, ScoringPolicy
from alignment_engine.periods import to_moment
from alignment_engine.schema import Category, InvalidTaskError, Task
from alignment_engine.scoring import recompute_task_score

logger = logging.getLogger(__name__)


def _coerce_category(value) -> Category:
    try:
        return Category(str(value.value if isinstance(value, Category) else value).strip().lower())
    except ValueError as exc:
        raise InvalidTaskError(f"Unknown category '{value}'") from exc


def validate_task(task: Task) -> Task:
    """Reject tasks that cannot be scored."""

    if not task.title or not task.title.strip():
        raise InvalidTaskError(f"Task {task.task_id}: title must not be empty")
    if not isinstance(task.category, Category):
        raise InvalidTaskError(f"Task {task.task_id}: invalid category '{task.category}'")
    if task.scheduled_end <= task.scheduled_start:
        raise InvalidTaskError(f"Task {task.task_id}: scheduled_end must be after scheduled_start")
    return task


def create_task(
    task_id: str,
    title: str,
    category,
    scheduled_start: datetime,
    scheduled_end: datetime,
    description: Optional[str] = None,
    calendar_event_id: Optional[str] = None,
    tz: str = DEFAULT_TIMEZONE,
) -> Task:
    """Create a new, not yet completed task.

    Naive timestamps are read in ``tz`` so tasks compare with period bounds.
    """

    task = Task(
        task_id=str(task_id),
        title=(title or "").strip(),
        category=_coerce_category(category),
        scheduled_start=to_moment(scheduled_start, tz),
        scheduled_end=to_moment(scheduled_end, tz),
        description=description.strip() if description else description,
        calendar_event_id=calendar_event_id,
    )
    return validate_task(task)


def _moment(value, tz: str):
    return None if value is None else to_moment(value, tz)


def _rescored(task: Task, policy: ScoringPolicy) -> Task:
    alignment_score, points = recompute_task_score(task, policy)
    return replace(task, alignment_score=alignment_score, points=points)


def toggle_completion(
    task: Task,
    is_completed: bool,
    actual_start: Optional[datetime] = None,
    actual_end: Optional[datetime] = None,
    policy: ScoringPolicy = DEFAULT_POLICY,
    tz: str = DEFAULT_TIMEZONE,
) -> Task:
    """Mark a task complete or incomplete and refresh its score and points.

    Completing keeps existing actual timestamps unless new ones are given.
    Reopening clears them.
    """

    validate_task(task)
    if is_completed:
        updated = replace(
            task,
            is_completed=True,
            actual_start=_moment(actual_start, tz) or task.actual_start,
            actual_end=_moment(actual_end, tz) or task.actual_end,
        )
    else:
        updated = replace(task, is_completed=False, actual_start=None, actual_end=None)
    logger.debug("Task %s completion set to %s", task.task_id, is_completed)
    return _rescored(updated, policy)


def apply_update(
    task: Task,
    actual_start: Optional[datetime] = None,
    actual_end: Optional[datetime] = None,
    is_completed: Optional[bool] = None,
    policy: ScoringPolicy = DEFAULT_POLICY,
    tz: str = DEFAULT_TIMEZONE,
) -> Task:
    """Apply only the provided fields, then refresh score and points."""

    validate_task(task)
    changes = {}
    if actual_start is not None:
        changes["actual_start"] = to_moment(actual_start, tz)
    if actual_end is not None:
        changes["actual_end"] = to_moment(actual_end, tz)
    if is_completed is not None:
        changes["is_completed"] = bool(is_completed)
    return _rescored(replace(task, **changes), policy)


def rescore_tasks(tasks: Iterable[Task], policy: ScoringPolicy = DEFAULT_POLICY) -> list[Task]:
    """Recompute derived fields for every task."""

    return [_rescored(validate_task(task), policy) for task in tasks]
