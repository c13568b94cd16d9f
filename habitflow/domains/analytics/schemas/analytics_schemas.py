"""Analytics response schemas."""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel


class CategoryRef(BaseModel):
    id: int
    name: str
    color: str


class DashboardResponse(BaseModel):
    total_habits: int
    completed_today: int
    current_streaks: int
    average_completion: float


class StreakEntry(BaseModel):
    habit_id: int
    habit_name: str
    category: Optional[CategoryRef]
    current_streak: int
    longest_streak: int


class ProgressEntry(BaseModel):
    habit_id: int
    habit_name: str
    completions: int
    completion_rate: float
    streak: int


class ExportCompletion(BaseModel):
    completed_on: date
    value: float
    notes: Optional[str]


class ExportRow(BaseModel):
    name: str
    category: Optional[str]
    frequency: str
    priority: str
    current_streak: int
    longest_streak: int
    total_completions: int
    created_at: datetime
    completions: List[ExportCompletion]


class ExportResponse(BaseModel):
    data: List[ExportRow]
    exported_at: datetime
