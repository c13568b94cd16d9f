"""Habit DTOs and schemas."""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

Frequency = Literal["daily", "weekly", "monthly"]
Priority = Literal["low", "medium", "high"]


class HabitCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    category_id: int
    frequency: Frequency = "daily"
    priority: Priority = "medium"
    target: int = Field(default=1, ge=1)


class HabitUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=500)
    category_id: Optional[int] = None
    frequency: Optional[Frequency] = None
    priority: Optional[Priority] = None
    target: Optional[int] = Field(default=None, ge=1)
    is_active: Optional[bool] = None


class CompletionCreate(BaseModel):
    # Non-positive values are accepted and replaced with the default of 1.
    value: Optional[float] = None
    notes: Optional[str] = Field(default=None, max_length=2048)


class CategorySummary(BaseModel):
    id: int
    name: str
    color: str
    icon: str

    model_config = ConfigDict(from_attributes=True)


class CompletionResponse(BaseModel):
    completed_on: date
    value: float
    notes: Optional[str]

    model_config = ConfigDict(from_attributes=True)


class StreakResponse(BaseModel):
    current: int
    longest: int


class HabitResponse(BaseModel):
    id: int
    name: str
    description: Optional[str]
    category: Optional[CategorySummary]
    frequency: str
    priority: str
    target: int
    is_active: bool
    streak: StreakResponse
    completions: List[CompletionResponse]
    created_at: datetime


class HabitStatsResponse(BaseModel):
    total_completions: int
    current_streak: int
    longest_streak: int
    completion_rate: float
    recent_completions: List[CompletionResponse]


def serialize_habit(habit) -> dict:
    return HabitResponse(
        id=habit.id,
        name=habit.name,
        description=habit.description,
        category=CategorySummary.model_validate(habit.category) if habit.category else None,
        frequency=habit.frequency,
        priority=habit.priority,
        target=habit.target,
        is_active=habit.is_active,
        streak=StreakResponse(current=habit.streak_current, longest=habit.streak_longest),
        completions=[CompletionResponse.model_validate(c) for c in habit.completions],
        created_at=habit.created_at,
    ).model_dump(mode="json")
