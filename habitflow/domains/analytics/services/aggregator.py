"""Read-only aggregation over habit snapshots.

Every function takes already-loaded habits (with their completions and
category) plus an explicit ``today`` and returns plain dicts. Nothing here
touches the session or mutates the habits it is given.
"""

from __future__ import annotations

import math
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Sequence

from habitflow.core.utils.dates import as_day, start_of_day, utc_to_local
from habitflow.domains.habits.models.habit_models import Habit, HabitCompletion

DEFAULT_PERIOD_DAYS = 30
STATS_WINDOW_DAYS = 30
RECENT_COMPLETIONS_LIMIT = 30


def _active(habits: Iterable[Habit]) -> List[Habit]:
    return [habit for habit in habits if habit.is_active is not False]


def _category_ref(habit: Habit) -> Optional[dict]:
    category = habit.category
    if category is None:
        return None
    return {"id": category.id, "name": category.name, "color": category.color}


def _completion_row(completion: HabitCompletion) -> dict:
    return {
        "completed_on": as_day(completion.completed_on),
        "value": completion.value,
        "notes": completion.notes,
    }


def _count_since(completions: Sequence[HabitCompletion], window_start: date) -> int:
    return sum(1 for c in completions if as_day(c.completed_on) >= window_start)


def days_since_created(habit: Habit, today: date | datetime) -> int:
    """Whole days (rounded up) from creation to the start of local ``today``.

    ``created_at`` is stored as naive UTC and is shifted to local time first.
    """
    if habit.created_at is None:
        return 0
    elapsed = start_of_day(today) - utc_to_local(habit.created_at)
    return math.ceil(elapsed / timedelta(days=1))


def dashboard(habits: Iterable[Habit], today: date | datetime) -> dict:
    active = _active(habits)
    day = as_day(today)

    completed_today = 0
    current_streaks = 0
    for habit in active:
        if any(as_day(c.completed_on) == day for c in habit.completions):
            completed_today += 1
        if (habit.streak_current or 0) > 0:
            current_streaks += 1

    total_completions = sum(len(habit.completions) for habit in active)
    total_days = sum(days_since_created(habit, day) for habit in active)
    average = (total_completions / total_days) * 100 if total_days > 0 else 0

    return {
        "total_habits": len(active),
        "completed_today": completed_today,
        "current_streaks": current_streaks,
        "average_completion": average,
    }


def streaks(habits: Iterable[Habit]) -> List[dict]:
    return [
        {
            "habit_id": habit.id,
            "habit_name": habit.name,
            "category": _category_ref(habit),
            "current_streak": habit.streak_current or 0,
            "longest_streak": habit.streak_longest or 0,
        }
        for habit in _active(habits)
    ]


def progress(
    habits: Iterable[Habit],
    period_days: int | None = DEFAULT_PERIOD_DAYS,
    *,
    today: date | datetime,
) -> List[dict]:
    """Per-habit completion counts and rates over the last ``period_days``.

    A completion counts when it falls on or after ``today - period_days``.
    The rate is not capped at 100.
    """
    if not period_days or period_days <= 0:
        period_days = DEFAULT_PERIOD_DAYS
    window_start = as_day(today) - timedelta(days=period_days)

    entries = []
    for habit in _active(habits):
        count = _count_since(habit.completions, window_start)
        entries.append(
            {
                "habit_id": habit.id,
                "habit_name": habit.name,
                "completions": count,
                "completion_rate": (count / period_days) * 100,
                "streak": habit.streak_current or 0,
            }
        )
    return entries


def habit_stats(habit: Habit, today: date | datetime) -> dict:
    """Lifetime totals plus two independent 30-ish views of recent activity.

    ``recent_completions`` is the last 30 entries of the log by position;
    ``completion_rate`` counts only completions dated within the last 30 days.
    """
    completions = list(habit.completions)
    window_start = as_day(today) - timedelta(days=STATS_WINDOW_DAYS)
    windowed = _count_since(completions, window_start)
    return {
        "total_completions": len(completions),
        "current_streak": habit.streak_current or 0,
        "longest_streak": habit.streak_longest or 0,
        "completion_rate": (windowed / STATS_WINDOW_DAYS) * 100,
        "recent_completions": [
            _completion_row(c) for c in completions[-RECENT_COMPLETIONS_LIMIT:]
        ],
    }
