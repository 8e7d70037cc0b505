"""Core data schema for tasks and period statistics."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class InvalidTaskError(ValueError):
    """Task record violates a creation-time invariant."""


class ReportError(RuntimeError):
    """Statistics report could not be built."""


class Category(str, Enum):
    WORK = "work"
    PERSONAL = "personal"
    HEALTH = "health"
    LEARNING = "learning"
    OTHER = "other"


class Period(str, Enum):
    WEEK = "week"
    MONTH = "month"


@dataclass(frozen=True)
class Task:
    """Snapshot of a tracked task. Derived fields are refreshed by the scorer."""

    task_id: str
    title: str
    category: Category
    scheduled_start: datetime
    scheduled_end: datetime
    description: Optional[str] = None
    actual_start: Optional[datetime] = None
    actual_end: Optional[datetime] = None
    is_completed: bool = False
    alignment_score: int = 0
    points: int = 0
    calendar_event_id: Optional[str] = None

    def as_dict(self) -> dict:
        return {
            "task_id": self.task_id,
            "title": self.title,
            "description": self.description,
            "category": self.category.value,
            "scheduled_start": self.scheduled_start.isoformat(),
            "scheduled_end": self.scheduled_end.isoformat(),
            "actual_start": self.actual_start.isoformat() if self.actual_start else None,
            "actual_end": self.actual_end.isoformat() if self.actual_end else None,
            "is_completed": self.is_completed,
            "alignment_score": self.alignment_score,
            "points": self.points,
            "calendar_event_id": self.calendar_event_id,
        }


@dataclass
class CategoryStats:
    total: int = 0
    completed: int = 0
    points: int = 0

    def as_dict(self) -> dict:
        return {"total": self.total, "completed": self.completed, "points": self.points}


@dataclass
class StatsSummary:
    """Aggregate over the tasks of one period."""

    total_tasks: int = 0
    completed_tasks: int = 0
    total_points: int = 0
    average_alignment: int = 0
    success_rate: int = 0
    category_stats: dict[Category, CategoryStats] = field(default_factory=dict)

    def as_dict(self) -> dict:
        return {
            "total_tasks": self.total_tasks,
            "completed_tasks": self.completed_tasks,
            "total_points": self.total_points,
            "average_alignment": self.average_alignment,
            "success_rate": self.success_rate,
            "category_stats": {category.value: stats.as_dict() for category, stats in self.category_stats.items()},
        }


@dataclass
class PeriodStats:
    period: Period
    start: datetime
    end: datetime
    summary: StatsSummary

    def as_dict(self) -> dict:
        return {
            **self.summary.as_dict(),
            "period": self.period.value,
            "start_date": self.start.isoformat(),
            "end_date": self.end.isoformat(),
        }


@dataclass
class HistoricalBucket:
    label: str
    start: datetime
    end: datetime
    summary: StatsSummary

    def as_dict(self) -> dict:
        return {"label": self.label, **self.summary.as_dict(), "date": self.start.isoformat()}


@dataclass
class StatsReport:
    """Current, previous and historical statistics for one reporting request."""

    current: PeriodStats
    previous: PeriodStats
    historical: list[HistoricalBucket]

    def as_dict(self) -> dict:
        return {
            "current": self.current.as_dict(),
            "previous": self.previous.as_dict(),
            "historical": [bucket.as_dict() for bucket in self.historical],
        }
