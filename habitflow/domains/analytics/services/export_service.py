"""Flat per-habit export of a user's full habit set."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from habitflow.domains.analytics.services import load_habits
from habitflow.domains.habits.models.habit_models import Habit


def _export_row(habit: Habit) -> dict:
    return {
        "name": habit.name,
        "category": habit.category.name if habit.category else None,
        "frequency": habit.frequency,
        "priority": habit.priority,
        "current_streak": habit.streak_current,
        "longest_streak": habit.streak_longest,
        "total_completions": len(habit.completions),
        "created_at": habit.created_at,
        "completions": [
            {"completed_on": c.completed_on, "value": c.value, "notes": c.notes}
            for c in habit.completions
        ],
    }


def export_habits(user_id: int, exported_at: Optional[datetime] = None) -> dict:
    """Project every habit (active or not) into an export record."""
    habits = load_habits(user_id, active_only=False)
    return {
        "data": [_export_row(habit) for habit in habits],
        "exported_at": exported_at or datetime.utcnow(),
    }
