"""Shared task-record parsing for the file adapters."""

from __future__ import annotations

from alignment_engine.periods import parse_timestamp
from alignment_engine.schema import Category, InvalidTaskError, Task
from alignment_engine.tasks import validate_task

REQUIRED_FIELDS = ("task_id", "title", "category", "scheduled_start", "scheduled_end")
FIELDNAMES = REQUIRED_FIELDS + (
    "description",
    "actual_start",
    "actual_end",
    "is_completed",
    "alignment_score",
    "points",
    "calendar_event_id",
)

_TRUE_VALUES = {"1", "true", "yes", "y"}
_FALSE_VALUES = {"", "0", "false", "no", "n"}


def _blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _timestamp(record: dict, name: str, label: str):
    value = record.get(name)
    if _blank(value):
        return None
    try:
        return parse_timestamp(value)
    except Exception as exc:  # noqa: BLE001
        raise ValueError(f"{label}: malformed {name}") from exc


def _flag(value, label: str) -> bool:
    if isinstance(value, bool):
        return value
    text = "" if value is None else str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ValueError(f"{label}: invalid is_completed '{value}'")


def _count(record: dict, name: str, label: str) -> int:
    value = record.get(name)
    if _blank(value):
        return 0
    try:
        number = int(float(value))
    except Exception as exc:  # noqa: BLE001
        raise ValueError(f"{label}: invalid {name}") from exc
    if number < 0:
        raise ValueError(f"{label}: {name} must not be negative")
    if name == "alignment_score" and number > 100:
        raise ValueError(f"{label}: alignment_score must be at most 100")
    return number


def parse_task_record(record: dict, label: str) -> Task:
    """Build a validated task from a flat record; ``label`` prefixes error messages."""

    missing = [name for name in REQUIRED_FIELDS if _blank(record.get(name))]
    if missing:
        raise ValueError(f"{label}: missing required fields {missing}")

    category_raw = str(record["category"]).strip().lower()
    try:
        category = Category(category_raw)
    except ValueError as exc:
        raise ValueError(f"{label}: invalid category '{category_raw}'") from exc

    description = record.get("description")
    event_id = record.get("calendar_event_id")
    task = Task(
        task_id=str(record["task_id"]).strip(),
        title=str(record["title"]).strip(),
        category=category,
        scheduled_start=_timestamp(record, "scheduled_start", label),
        scheduled_end=_timestamp(record, "scheduled_end", label),
        description=None if _blank(description) else str(description).strip(),
        actual_start=_timestamp(record, "actual_start", label),
        actual_end=_timestamp(record, "actual_end", label),
        is_completed=_flag(record.get("is_completed"), label),
        alignment_score=_count(record, "alignment_score", label),
        points=_count(record, "points", label),
        calendar_event_id=None if _blank(event_id) else str(event_id).strip(),
    )
    if not task.is_completed and (task.alignment_score or task.points):
        raise ValueError(f"{label}: incomplete task must have zero alignment_score and points")
    try:
        return validate_task(task)
    except InvalidTaskError as exc:
        raise InvalidTaskError(f"{label}: {exc}") from exc
