"""
Due-date urgency scoring for a single assignment.

The score blends how close the due date is (time factor) with how much work
is left (progress factor). Categories are discrete buckets over the same
inputs and are what the UI shows.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional

logger = logging.getLogger(__name__)

TIME_WEIGHT = 0.7
PROGRESS_WEIGHT = 0.3

OVERDUE_TIME_FACTOR = 12
# (max days until due, time factor), checked in order
TIME_FACTOR_STEPS = ((1, 10), (3, 8), (7, 6))
DEFAULT_TIME_FACTOR = 4

# (max days until due, category), checked in order
CATEGORY_STEPS = ((2, "Urgent"), (7, "High"), (14, "Medium"))
DEFAULT_CATEGORY = "Low"

_PRIORITY_LEVELS = {
    "Overdue": "high",
    "Urgent": "high",
    "High": "high",
    "Medium": "medium",
    "Low": "low",
}


@dataclass(frozen=True)
class PriorityScore:
    days_until_due: int
    priority_score: float
    priority_category: str
    overdue: bool = False
    anomaly: Optional[str] = None


def read_field(item: Any, name: str, alias: Optional[str] = None, default: Any = None) -> Any:
    """Read a field from a model or from a plain dict in snake_case or camelCase."""
    if isinstance(item, Mapping):
        if name in item:
            return item[name]
        if alias is not None and alias in item:
            return item[alias]
        return default
    return getattr(item, name, default)


def to_date(value: Any) -> Optional[date]:
    """Parse a calendar date; time of day is dropped. Returns None when unparseable."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            return None
    return None


def clamp_progress(value: Any) -> int:
    try:
        progress = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(0, min(100, progress))


def time_factor(days_until_due: int, overdue: bool) -> int:
    if overdue:
        return OVERDUE_TIME_FACTOR
    for max_days, factor in TIME_FACTOR_STEPS:
        if days_until_due <= max_days:
            return factor
    return DEFAULT_TIME_FACTOR


def priority_category(days_until_due: int, overdue: bool) -> str:
    if overdue:
        return "Overdue"
    for max_days, category in CATEGORY_STEPS:
        if days_until_due <= max_days:
            return category
    return DEFAULT_CATEGORY


def priority_level(category: str) -> str:
    """Collapse a category onto the low/medium/high scale stored on assignments."""
    return _PRIORITY_LEVELS.get(category, "medium")


def score(assignment: Any, reference_date: Any = None) -> PriorityScore:
    """Score one assignment against a reference date (defaults to today).

    Never raises on bad dates: a missing or unparseable due date scores as
    "Low" with zero days until due and records the anomaly.
    """
    reference = to_date(reference_date) or date.today()
    progress = clamp_progress(read_field(assignment, "progress", default=0))
    progress_factor = 1 - (progress / 100)

    raw_end = read_field(assignment, "end_date", "endDate")
    end = to_date(raw_end)
    if end is None:
        anomaly = "missing due date" if raw_end in (None, "") else f"unparseable due date {raw_end!r}"
        logger.warning(
            "Assignment %s: %s, scoring as Low",
            read_field(assignment, "id", default="<unknown>"),
            anomaly,
        )
        return PriorityScore(
            days_until_due=0,
            priority_score=TIME_WEIGHT * DEFAULT_TIME_FACTOR + PROGRESS_WEIGHT * progress_factor,
            priority_category=DEFAULT_CATEGORY,
            anomaly=anomaly,
        )

    # the clamped day count cannot tell overdue from due-today
    overdue = end < reference
    days_until_due = max(0, (end - reference).days)

    return PriorityScore(
        days_until_due=days_until_due,
        priority_score=TIME_WEIGHT * time_factor(days_until_due, overdue) + PROGRESS_WEIGHT * progress_factor,
        priority_category=priority_category(days_until_due, overdue),
        overdue=overdue,
    )
