"""Alignment scoring and points engine."""

from __future__ import annotations

import logging
from math import floor

from alignment_engine.config import DEFAULT_POLICY, ScoringPolicy
from alignment_engine.schema import InvalidTaskError, Task

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positive values."""

    return int(floor(value + 0.5))


def _seconds(later, earlier) -> float:
    return (later - earlier).total_seconds()


def compute_alignment_score(task: Task, policy: ScoringPolicy = DEFAULT_POLICY) -> int:
    """Score 0-100 for how closely actual execution matched the scheduled window."""

    if not task.is_completed:
        return 0
    if task.actual_start is None or task.actual_end is None:
        return policy.partial_completion_score

    scheduled_duration = _seconds(task.scheduled_end, task.scheduled_start)
    if scheduled_duration <= 0:
        raise InvalidTaskError(f"Task {task.task_id}: scheduled_end must be after scheduled_start")

    actual_duration = _seconds(task.actual_end, task.actual_start)
    start_delay = abs(_seconds(task.actual_start, task.scheduled_start))
    end_delay = abs(_seconds(task.actual_end, task.scheduled_end))
    duration_accuracy = abs(actual_duration - scheduled_duration) / scheduled_duration

    penalty_unit = policy.delay_penalty_unit.total_seconds()
    timing_score = max(0.0, policy.max_score - (start_delay + end_delay) / penalty_unit)
    duration_score = max(0.0, policy.max_score - duration_accuracy * 100)

    combined = (timing_score + duration_score) / 2
    return round_half_up(min(policy.max_score, max(0.0, combined)))


def compute_points(alignment_score: int, is_completed: bool, policy: ScoringPolicy = DEFAULT_POLICY) -> int:
    """Flat base award plus a bonus scaled linearly by alignment."""

    if not is_completed:
        return 0
    bonus = round_half_up((alignment_score / policy.max_score) * policy.bonus_points)
    return policy.base_points + bonus


def recompute_task_score(task: Task, policy: ScoringPolicy = DEFAULT_POLICY) -> tuple[int, int]:
    """Return ``(alignment_score, points)`` for the task's current state."""

    alignment_score = compute_alignment_score(task, policy)
    points = compute_points(alignment_score, task.is_completed, policy)
    logger.debug("Task %s rescored: alignment=%d points=%d", task.task_id, alignment_score, points)
    return alignment_score, points
