"""Habit domain errors.

Each error is a ``ValueError`` whose message is the stable error code that
controllers map to an HTTP status, the same ``ValueError("code")`` convention
the services already use for validation failures.
"""

from __future__ import annotations


class HabitError(ValueError):
    code = "habit_error"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(self.code)
        self.detail = detail


class HabitNotFound(HabitError):
    code = "not_found"


class AlreadyCompletedToday(HabitError):
    code = "already_completed_today"


class StorageFailure(HabitError):
    code = "storage_error"


class InvalidInput(HabitError):
    code = "validation_error"


ERROR_STATUS = {
    HabitNotFound.code: 404,
    AlreadyCompletedToday.code: 409,
    StorageFailure.code: 503,
    InvalidInput.code: 400,
}
