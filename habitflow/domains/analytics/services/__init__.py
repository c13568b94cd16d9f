"""Analytics services: load the user's habit snapshot and aggregate it."""

from __future__ import annotations

import logging
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import selectinload

from habitflow.domains.analytics.services import aggregator
from habitflow.domains.habits.models.habit_models import Habit

logger = logging.getLogger(__name__)


def load_habits(user_id: int, *, active_only: bool = True) -> List[Habit]:
    """Snapshot of the user's habits with completions and category resolved."""
    query = Habit.query.filter_by(user_id=user_id)
    if active_only:
        query = query.filter_by(is_active=True)
    return (
        query.options(selectinload(Habit.completions))
        .order_by(Habit.id.asc())
        .all()
    )


def get_dashboard(user_id: int, today: Optional[date] = None) -> dict:
    return aggregator.dashboard(load_habits(user_id), today or date.today())


def get_streaks(user_id: int) -> List[dict]:
    return aggregator.streaks(load_habits(user_id))


def get_progress(
    user_id: int, period_days: int = aggregator.DEFAULT_PERIOD_DAYS, today: Optional[date] = None
) -> List[dict]:
    habits = load_habits(user_id)
    logger.debug("Progress report for user %s over %s days (%s habits)", user_id, period_days, len(habits))
    return aggregator.progress(habits, period_days, today=today or date.today())
