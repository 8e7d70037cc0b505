"""Tunable scoring and reporting policy."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta


@dataclass(frozen=True)
class ScoringPolicy:
    """Constants used by the alignment scorer and points formula."""

    partial_completion_score: int = 50
    delay_penalty_unit: timedelta = timedelta(minutes=30)
    base_points: int = 10
    bonus_points: int = 20
    max_score: int = 100


DEFAULT_POLICY = ScoringPolicy()

HISTORY_DEPTH = 12
DEFAULT_TIMEZONE = "UTC"
