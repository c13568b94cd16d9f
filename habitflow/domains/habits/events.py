"""Habits domain event catalog."""

from __future__ import annotations

HABITS_HABIT_CREATED = "habits.habit.created"
HABITS_HABIT_UPDATED = "habits.habit.updated"
HABITS_HABIT_COMPLETED = "habits.habit.completed"
HABITS_HABIT_DELETED = "habits.habit.deleted"

EVENT_CATALOG = {
    HABITS_HABIT_CREATED: {
        "version": "v1",
        "payload": {
            "habit_id": "int",
            "user_id": "int",
            "name": "str",
            "category_id": "int",
            "frequency": "str",
            "priority": "str",
            "created_at": "datetime",
        },
    },
    HABITS_HABIT_UPDATED: {
        "version": "v1",
        "payload": {
            "habit_id": "int",
            "user_id": "int",
            "fields": "dict",
            "updated_at": "datetime",
        },
    },
    HABITS_HABIT_COMPLETED: {
        "version": "v1",
        "payload": {
            "habit_id": "int",
            "user_id": "int",
            "completed_on": "date",
            "value": "float",
            "notes": "str?",
            "streak_current": "int",
            "streak_longest": "int",
        },
    },
    HABITS_HABIT_DELETED: {
        "version": "v1",
        "payload": {
            "habit_id": "int",
            "user_id": "int",
            "deleted_at": "datetime",
        },
    },
}

__all__ = [
    "EVENT_CATALOG",
    "HABITS_HABIT_CREATED",
    "HABITS_HABIT_UPDATED",
    "HABITS_HABIT_COMPLETED",
    "HABITS_HABIT_DELETED",
]
