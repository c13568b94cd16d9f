"""Tests for the completion recorder's day guard and streak counters."""

from datetime import date, datetime, timedelta

import pytest

pytestmark = pytest.mark.unit

from habitflow.domains.habits.errors import AlreadyCompletedToday
from habitflow.domains.habits.models.habit_models import Habit
from habitflow.domains.habits.recorder import completed_on, record_completion

TODAY = date(2026, 3, 14)


def _habit(**overrides) -> Habit:
    fields = {"name": "Read", "streak_current": 0, "streak_longest": 0, "is_active": True}
    fields.update(overrides)
    return Habit(**fields)


def test_first_completion_defaults_value_and_starts_streak():
    habit = _habit()

    completion = record_completion(habit, TODAY)

    assert completion.completed_on == TODAY
    assert completion.value == 1
    assert completion.notes is None
    assert habit.completions == [completion]
    assert (habit.streak_current, habit.streak_longest) == (1, 1)


def test_value_and_notes_are_kept():
    habit = _habit()

    completion = record_completion(habit, TODAY, value=2.5, notes="  ran 5k  ")

    assert completion.value == 2.5
    assert completion.notes == "ran 5k"


@pytest.mark.parametrize("value", [0, -3])
def test_non_positive_value_falls_back_to_one(value):
    habit = _habit()

    completion = record_completion(habit, TODAY, value=value)

    assert completion.value == 1


def test_second_completion_same_day_is_rejected_without_mutation():
    habit = _habit()
    record_completion(habit, TODAY)

    with pytest.raises(AlreadyCompletedToday, match="already_completed_today"):
        record_completion(habit, TODAY, value=5)

    assert len(habit.completions) == 1
    assert (habit.streak_current, habit.streak_longest) == (1, 1)


def test_time_of_day_is_ignored_for_the_day_guard():
    habit = _habit()
    record_completion(habit, datetime(2026, 3, 14, 7, 30))

    with pytest.raises(AlreadyCompletedToday):
        record_completion(habit, datetime(2026, 3, 14, 23, 59))

    assert habit.completions[0].completed_on == TODAY


def test_streak_is_a_counter_that_ignores_gaps():
    habit = _habit()
    record_completion(habit, TODAY)
    record_completion(habit, TODAY + timedelta(days=10))

    assert (habit.streak_current, habit.streak_longest) == (2, 2)


def test_longest_tracks_maximum_current_across_recordings():
    habit = _habit(streak_current=0, streak_longest=4)
    observed = []

    for offset in range(6):
        record_completion(habit, TODAY + timedelta(days=offset))
        assert habit.streak_longest >= habit.streak_current
        observed.append(habit.streak_current)

    assert habit.streak_current == 6
    assert habit.streak_longest == max(observed + [4])


def test_longest_not_raised_while_current_is_below_it():
    habit = _habit(streak_current=1, streak_longest=9)

    record_completion(habit, TODAY)

    assert (habit.streak_current, habit.streak_longest) == (2, 9)


def test_scenario_day_then_repeat_then_next_day():
    habit = _habit()

    record_completion(habit, TODAY)
    assert len(habit.completions) == 1
    assert habit.completions[0].value == 1
    assert (habit.streak_current, habit.streak_longest) == (1, 1)

    with pytest.raises(AlreadyCompletedToday):
        record_completion(habit, TODAY)
    assert len(habit.completions) == 1
    assert (habit.streak_current, habit.streak_longest) == (1, 1)

    record_completion(habit, TODAY + timedelta(days=1))
    assert len(habit.completions) == 2
    assert (habit.streak_current, habit.streak_longest) == (2, 2)


def test_completed_on_lookup():
    habit = _habit()
    record_completion(habit, TODAY)

    assert completed_on(habit, TODAY) is habit.completions[0]
    assert completed_on(habit, TODAY - timedelta(days=1)) is None
