"""Tests for Habits domain services: CRUD, completion recording and stats."""

from datetime import date, timedelta

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

pytestmark = pytest.mark.integration

from habitflow.core.users.models import User
from habitflow.domains.habits import recorder
from habitflow.domains.habits import services as habit_services
from habitflow.domains.habits.errors import AlreadyCompletedToday, HabitNotFound, StorageFailure
from habitflow.domains.habits.models.habit_models import Habit, HabitCompletion
from habitflow.domains.habits.services import (
    complete_habit,
    create_habit,
    delete_habit,
    get_habit,
    get_habit_stats,
    list_habits,
    update_habit,
)
from habitflow.extensions import db
from habitflow.platform.outbox.models import OutboxMessage

DAY = date(2026, 5, 1)


@pytest.fixture
def habit(app, user, category):
    return create_habit(user.id, name="Meditate", category_id=category.id)


# ============== Habit CRUD Tests ==============


class TestHabitService:
    def test_create_habit_defaults(self, app, user, category):
        habit = create_habit(user.id, name="  Stretch ", category_id=category.id)

        assert habit.id is not None
        assert habit.name == "Stretch"
        assert habit.frequency == "daily"
        assert habit.priority == "medium"
        assert habit.target == 1
        assert habit.is_active is True
        assert (habit.streak_current, habit.streak_longest) == (0, 0)
        assert habit.completions == []
        assert habit.category.name == "Health & Fitness"

    def test_create_habit_blank_name_fails(self, app, user, category):
        with pytest.raises(ValueError, match="validation_error"):
            create_habit(user.id, name="   ", category_id=category.id)

    def test_create_habit_unknown_category_fails(self, app, user):
        with pytest.raises(ValueError, match="invalid_category"):
            create_habit(user.id, name="Run", category_id=999)

    def test_create_habit_bad_frequency_fails(self, app, user, category):
        with pytest.raises(ValueError, match="validation_error"):
            create_habit(user.id, name="Run", category_id=category.id, frequency="hourly")

    def test_list_habits_newest_first_and_scoped_to_user(self, app, user, category):
        first = create_habit(user.id, name="First", category_id=category.id)
        second = create_habit(user.id, name="Second", category_id=category.id)
        other = User(email="other@example.com", password_hash="x")
        db.session.add(other)
        db.session.commit()
        create_habit(other.id, name="Not mine", category_id=category.id)

        habits = list_habits(user.id)

        assert [h.id for h in habits] == [second.id, first.id]

    def test_update_habit_ignores_streak_fields(self, app, user, habit):
        updated = update_habit(
            user.id, habit.id, priority="high", is_active=False, streak_current=99
        )

        assert updated.priority == "high"
        assert updated.is_active is False
        assert updated.streak_current == 0

    def test_update_habit_not_found(self, app, user):
        assert update_habit(user.id, 99999, name="Nope") is None

    def test_delete_habit_removes_completions(self, app, user, habit):
        complete_habit(user.id, habit.id, today=DAY)
        habit_id = habit.id

        assert delete_habit(user.id, habit_id) is True
        assert db.session.get(Habit, habit_id) is None
        assert HabitCompletion.query.filter_by(habit_id=habit_id).count() == 0

    def test_delete_habit_not_found(self, app, user):
        assert delete_habit(user.id, 99999) is False


# ============== Completion Tests ==============


class TestCompleteHabit:
    def test_first_completion_persists(self, app, user, habit):
        result = complete_habit(user.id, habit.id, today=DAY)

        stored = HabitCompletion.query.filter_by(habit_id=habit.id).all()
        assert len(stored) == 1
        assert stored[0].completed_on == DAY
        assert stored[0].value == 1
        assert (result.streak_current, result.streak_longest) == (1, 1)

    def test_same_day_twice_is_rejected(self, app, user, habit):
        complete_habit(user.id, habit.id, today=DAY, value=3, notes="ok")

        with pytest.raises(AlreadyCompletedToday):
            complete_habit(user.id, habit.id, today=DAY)

        reloaded = get_habit(user.id, habit.id)
        assert len(reloaded.completions) == 1
        assert reloaded.completions[0].value == 3
        assert reloaded.completions[0].notes == "ok"
        assert (reloaded.streak_current, reloaded.streak_longest) == (1, 1)

    def test_end_to_end_scenario(self, app, user, habit):
        complete_habit(user.id, habit.id, today=DAY)
        with pytest.raises(AlreadyCompletedToday):
            complete_habit(user.id, habit.id, today=DAY)
        result = complete_habit(user.id, habit.id, today=DAY + timedelta(days=1))

        assert [c.completed_on for c in result.completions] == [DAY, DAY + timedelta(days=1)]
        assert (result.streak_current, result.streak_longest) == (2, 2)

    def test_defaults_to_server_today(self, app, user, habit):
        complete_habit(user.id, habit.id)

        assert get_habit(user.id, habit.id).completions[0].completed_on == date.today()

    def test_other_users_habit_is_not_found(self, app, user, habit):
        other = User(email="intruder@example.com", password_hash="x")
        db.session.add(other)
        db.session.commit()

        with pytest.raises(HabitNotFound, match="not_found"):
            complete_habit(other.id, habit.id, today=DAY)

    def test_completion_event_emitted(self, app, user, habit):
        complete_habit(user.id, habit.id, today=DAY, value=2)

        message = OutboxMessage.query.filter_by(event_type="habits.habit.completed").one()
        assert message.user_id == user.id
        assert message.payload["habit_id"] == habit.id
        assert message.payload["completed_on"] == DAY.isoformat()
        assert message.payload["value"] == 2
        assert message.payload["streak_current"] == 1

    def test_storage_failure_leaves_habit_unchanged(self, app, user, habit, monkeypatch):
        def _fail():
            raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

        monkeypatch.setattr(db.session, "commit", _fail)

        with pytest.raises(StorageFailure, match="storage_error"):
            complete_habit(user.id, habit.id, today=DAY)

        monkeypatch.undo()
        reloaded = get_habit(user.id, habit.id)
        assert reloaded.completions == []
        assert (reloaded.streak_current, reloaded.streak_longest) == (0, 0)
        assert OutboxMessage.query.filter_by(event_type="habits.habit.completed").count() == 0

    def test_racing_duplicate_hits_unique_key(self, app, user, habit, monkeypatch):
        complete_habit(user.id, habit.id, today=DAY)
        # the second request read the habit before the first one committed
        monkeypatch.setattr(recorder, "completed_on", lambda habit, day: None)

        with pytest.raises(AlreadyCompletedToday, match="already_completed_today"):
            complete_habit(user.id, habit.id, today=DAY)

        monkeypatch.undo()
        reloaded = get_habit(user.id, habit.id)
        assert len(reloaded.completions) == 1
        assert (reloaded.streak_current, reloaded.streak_longest) == (1, 1)
        assert OutboxMessage.query.filter_by(event_type="habits.habit.completed").count() == 1

    def test_other_integrity_errors_are_storage_failures(self, app, user, habit, monkeypatch):
        def _enqueue_without_type(event_type, payload, user_id=None):
            message = OutboxMessage(event_type=None, payload=payload, user_id=user_id)
            db.session.add(message)
            return message

        monkeypatch.setattr(habit_services, "enqueue_outbox", _enqueue_without_type)

        with pytest.raises(StorageFailure, match="storage_error"):
            complete_habit(user.id, habit.id, today=DAY)

        monkeypatch.undo()
        reloaded = get_habit(user.id, habit.id)
        assert reloaded.completions == []
        assert (reloaded.streak_current, reloaded.streak_longest) == (0, 0)

    @pytest.mark.parametrize(
        "message, expected",
        [
            ('duplicate key value violates unique constraint "ux_habits_completion_habit_day"', True),
            (
                "UNIQUE constraint failed: habits_habit_completion.habit_id, "
                "habits_habit_completion.completed_on",
                True,
            ),
            ("NOT NULL constraint failed: platform_outbox.event_type", False),
            ('duplicate key value violates unique constraint "platform_outbox_pkey"', False),
        ],
    )
    def test_duplicate_day_detection(self, message, expected):
        exc = IntegrityError("INSERT", {}, Exception(message))

        assert habit_services._is_duplicate_day(exc) is expected


# ============== Stats Tests ==============


class TestHabitStats:
    def test_stats_for_habit(self, app, user, habit):
        for offset in (40, 2, 1):
            complete_habit(user.id, habit.id, today=DAY - timedelta(days=offset))

        stats = get_habit_stats(user.id, habit.id, today=DAY)

        assert stats["total_completions"] == 3
        assert stats["current_streak"] == 3
        assert stats["longest_streak"] == 3
        assert stats["completion_rate"] == pytest.approx(2 / 30 * 100)
        assert len(stats["recent_completions"]) == 3

    def test_stats_not_found(self, app, user):
        assert get_habit_stats(user.id, 99999) is None
