"""Calendar event payloads to new tasks."""

from __future__ import annotations

from alignment_engine.categorize import categorize_event
from alignment_engine.periods import parse_timestamp
from alignment_engine.schema import Task
from alignment_engine.tasks import create_task

UNTITLED = "Untitled Event"


def _event_time(event: dict, key: str, index: int):
    moment = event.get(key) or {}
    raw = moment.get("dateTime") or moment.get("date")
    if not raw:
        raise ValueError(f"Event {index}: missing {key} time")
    try:
        return parse_timestamp(raw)
    except Exception as exc:  # noqa: BLE001
        raise ValueError(f"Event {index}: malformed {key} time") from exc


def event_to_task(event: dict, index: int = 1) -> Task:
    """Convert one Google Calendar style event into an unscored task."""

    title = (event.get("summary") or "").strip() or UNTITLED
    description = event.get("description") or ""
    event_id = event.get("id")
    return create_task(
        task_id=event_id or f"event-{index}",
        title=title,
        category=categorize_event(title, description),
        scheduled_start=_event_time(event, "start", index),
        scheduled_end=_event_time(event, "end", index),
        description=description or None,
        calendar_event_id=event_id,
    )


def events_to_tasks(events: list[dict]) -> list[Task]:
    return [event_to_task(event, index) for index, event in enumerate(events, start=1)]
