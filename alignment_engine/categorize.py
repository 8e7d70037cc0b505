"""Keyword categorization of imported calendar events."""

from __future__ import annotations

from typing import Optional

from alignment_engine.schema import Category

# Checked in order; the first rule with a keyword in the title wins.
_KEYWORD_RULES = (
    (("work", "meeting"), Category.WORK),
    (("workout", "gym"), Category.HEALTH),
    (("study", "learn"), Category.LEARNING),
    (("personal",), Category.PERSONAL),
)

CATEGORY_DISPLAY = {
    Category.WORK: ("Work", "#3B82F6"),
    Category.PERSONAL: ("Personal", "#8B5CF6"),
    Category.HEALTH: ("Health", "#10B981"),
    Category.LEARNING: ("Learning", "#F59E0B"),
    Category.OTHER: ("Other", "#6B7280"),
}


def categorize_event(title: Optional[str], description: Optional[str] = None) -> Category:
    """Classify an event by case-insensitive keyword match on its title.

    ``description`` is accepted for call-site symmetry but not matched.
    "Workout" contains "work" and is classified as work.
    """

    text = (title or "").lower()
    for keywords, category in _KEYWORD_RULES:
        if any(keyword in text for keyword in keywords):
            return category
    return Category.OTHER


def display_name(category: Category) -> str:
    return CATEGORY_DISPLAY[Category(category)][0]


def category_color(category: Category) -> str:
    return CATEGORY_DISPLAY[Category(category)][1]
