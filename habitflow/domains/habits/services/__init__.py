"""Habit services: CRUD, completion recording, and stats with outbox events."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Dict, List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import selectinload

from habitflow.core.utils.dates import as_day
from habitflow.domains.analytics.services import aggregator
from habitflow.domains.categories.models.category_models import Category
from habitflow.domains.habits.errors import (
    AlreadyCompletedToday,
    HabitNotFound,
    InvalidInput,
    StorageFailure,
)
from habitflow.domains.habits.events import (
    HABITS_HABIT_COMPLETED,
    HABITS_HABIT_CREATED,
    HABITS_HABIT_DELETED,
    HABITS_HABIT_UPDATED,
)
from habitflow.domains.habits.models.habit_models import (
    DUPLICATE_DAY_CONSTRAINT,
    FREQUENCIES,
    PRIORITIES,
    Habit,
    HabitCompletion,
)
from habitflow.domains.habits.recorder import record_completion
from habitflow.extensions import db
from habitflow.platform.outbox import enqueue as enqueue_outbox

logger = logging.getLogger(__name__)


def _ensure_category(category_id: int) -> None:
    if db.session.get(Category, category_id) is None:
        raise ValueError("invalid_category")


def _check_choices(frequency: str | None, priority: str | None) -> None:
    if frequency is not None and frequency not in FREQUENCIES:
        raise InvalidInput(f"frequency={frequency}")
    if priority is not None and priority not in PRIORITIES:
        raise InvalidInput(f"priority={priority}")


def create_habit(
    user_id: int,
    *,
    name: str,
    category_id: int,
    description: str | None = None,
    frequency: str | None = None,
    priority: str | None = None,
    target: int | None = None,
) -> Habit:
    name_norm = (name or "").strip()
    if not name_norm:
        raise InvalidInput("name")
    frequency = frequency or "daily"
    priority = priority or "medium"
    _check_choices(frequency, priority)
    _ensure_category(category_id)

    habit = Habit(
        user_id=user_id,
        category_id=category_id,
        name=name_norm,
        description=(description or "").strip() or None,
        frequency=frequency,
        priority=priority,
        target=target or 1,
        streak_current=0,
        streak_longest=0,
    )
    db.session.add(habit)
    db.session.flush()
    enqueue_outbox(
        HABITS_HABIT_CREATED,
        {
            "habit_id": habit.id,
            "user_id": user_id,
            "name": habit.name,
            "category_id": habit.category_id,
            "frequency": habit.frequency,
            "priority": habit.priority,
            "created_at": habit.created_at.isoformat(),
        },
        user_id=user_id,
    )
    db.session.commit()
    return habit


def list_habits(user_id: int) -> List[Habit]:
    """The user's habits, newest first."""
    return (
        Habit.query.filter_by(user_id=user_id)
        .options(selectinload(Habit.completions))
        .order_by(Habit.created_at.desc(), Habit.id.desc())
        .all()
    )


def get_habit(user_id: int, habit_id: int) -> Optional[Habit]:
    return (
        Habit.query.filter_by(id=habit_id, user_id=user_id)
        .options(selectinload(Habit.completions))
        .first()
    )


def update_habit(user_id: int, habit_id: int, **fields) -> Optional[Habit]:
    habit = Habit.query.filter_by(id=habit_id, user_id=user_id).first()
    if not habit:
        return None

    if fields.get("category_id") is not None:
        _ensure_category(fields["category_id"])
    _check_choices(fields.get("frequency"), fields.get("priority"))
    if "name" in fields and not (fields["name"] or "").strip():
        raise InvalidInput("name")

    # Streak counters and the completion log are owned by the recorder.
    allowed = (
        "name",
        "description",
        "category_id",
        "frequency",
        "priority",
        "target",
        "is_active",
    )
    changed: Dict[str, object] = {}
    for key in allowed:
        if key in fields:
            val = fields[key]
            if val is None and key != "description":
                continue
            if isinstance(val, str):
                val = val.strip()
            if key == "description":
                val = val or None
            setattr(habit, key, val)
            changed[key] = val
    enqueue_outbox(
        HABITS_HABIT_UPDATED,
        {
            "habit_id": habit.id,
            "user_id": user_id,
            "fields": changed,
            "updated_at": datetime.utcnow().isoformat(),
        },
        user_id=user_id,
    )
    db.session.commit()
    return habit


def delete_habit(user_id: int, habit_id: int) -> bool:
    habit = Habit.query.filter_by(id=habit_id, user_id=user_id).first()
    if not habit:
        return False
    db.session.delete(habit)
    enqueue_outbox(
        HABITS_HABIT_DELETED,
        {
            "habit_id": habit_id,
            "user_id": user_id,
            "deleted_at": datetime.utcnow().isoformat(),
        },
        user_id=user_id,
    )
    db.session.commit()
    return True


def _is_duplicate_day(exc: IntegrityError) -> bool:
    """True when the violation is the one-completion-per-day key."""
    diag = getattr(exc.orig, "diag", None)
    if getattr(diag, "constraint_name", None) == DUPLICATE_DAY_CONSTRAINT:
        return True
    message = str(exc.orig)
    # sqlite names the columns instead of the constraint
    return DUPLICATE_DAY_CONSTRAINT in message or (
        "UNIQUE" in message
        and f"{HabitCompletion.__tablename__}.habit_id" in message
        and f"{HabitCompletion.__tablename__}.completed_on" in message
    )


def complete_habit(
    user_id: int,
    habit_id: int,
    *,
    value: float | None = None,
    notes: str | None = None,
    today: Optional[date] = None,
) -> Habit:
    """Record today's completion for the habit and persist it atomically.

    The habit row is locked for the duration of the transaction and the
    per-day unique key backs the duplicate check, so two racing requests
    for the same habit and day cannot both succeed.
    """
    habit = (
        Habit.query.filter_by(id=habit_id, user_id=user_id)
        .options(selectinload(Habit.completions))
        .with_for_update(of=Habit)
        .populate_existing()
        .first()
    )
    if not habit:
        raise HabitNotFound(str(habit_id))

    day = as_day(today or date.today())
    try:
        completion = record_completion(habit, day, value=value, notes=notes)
    except AlreadyCompletedToday:
        logger.info("Habit %s already completed on %s", habit_id, day.isoformat())
        raise

    enqueue_outbox(
        HABITS_HABIT_COMPLETED,
        {
            "habit_id": habit.id,
            "user_id": user_id,
            "completed_on": day.isoformat(),
            "value": completion.value,
            "notes": completion.notes,
            "streak_current": habit.streak_current,
            "streak_longest": habit.streak_longest,
        },
        user_id=user_id,
    )
    try:
        db.session.commit()
    except IntegrityError as exc:
        db.session.rollback()
        if not _is_duplicate_day(exc):
            logger.exception("Integrity error persisting completion for habit %s", habit_id)
            raise StorageFailure(str(exc)) from exc
        logger.info("Concurrent completion for habit %s on %s rejected", habit_id, day.isoformat())
        raise AlreadyCompletedToday(day.isoformat()) from exc
    except SQLAlchemyError as exc:
        db.session.rollback()
        logger.exception("Failed to persist completion for habit %s", habit_id)
        raise StorageFailure(str(exc)) from exc

    logger.info(
        "Habit %s completed on %s (streak %s/%s)",
        habit_id,
        day.isoformat(),
        habit.streak_current,
        habit.streak_longest,
    )
    return habit


def get_habit_stats(user_id: int, habit_id: int, today: Optional[date] = None) -> Optional[dict]:
    habit = get_habit(user_id, habit_id)
    if not habit:
        return None
    return aggregator.habit_stats(habit, today or date.today())
