"""Completion recorder: the only place that advances a habit's streak."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from habitflow.core.utils.dates import as_day
from habitflow.domains.habits.errors import AlreadyCompletedToday
from habitflow.domains.habits.models.habit_models import Habit, HabitCompletion

DEFAULT_COMPLETION_VALUE = 1


def completed_on(habit: Habit, day: date | datetime) -> Optional[HabitCompletion]:
    """Return the habit's completion for ``day`` if one exists."""
    target = as_day(day)
    for completion in habit.completions:
        if as_day(completion.completed_on) == target:
            return completion
    return None


def record_completion(
    habit: Habit,
    today: date | datetime,
    value: float | None = None,
    notes: str | None = None,
) -> HabitCompletion:
    """Append today's completion and bump the streak counters.

    Raises ``AlreadyCompletedToday`` without touching the habit when ``today``
    already has a completion. The streak is a plain counter: it is never
    reset here and the previous completion's date is not inspected.
    Persisting the habit is left to the caller.
    """
    day = as_day(today)
    if completed_on(habit, day) is not None:
        raise AlreadyCompletedToday(day.isoformat())

    completion = HabitCompletion(
        completed_on=day,
        value=value if value is not None and value > 0 else DEFAULT_COMPLETION_VALUE,
        notes=(notes or "").strip() or None,
    )
    habit.completions.append(completion)

    habit.streak_current = (habit.streak_current or 0) + 1
    if habit.streak_current > (habit.streak_longest or 0):
        habit.streak_longest = habit.streak_current
    return completion
