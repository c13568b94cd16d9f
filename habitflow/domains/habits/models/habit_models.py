"""Habits models with prefixed tables."""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy.orm import Mapped, mapped_column, relationship

from habitflow.domains.categories.models.category_models import Category
from habitflow.extensions import db

FREQUENCIES = ("daily", "weekly", "monthly")
PRIORITIES = ("low", "medium", "high")
DUPLICATE_DAY_CONSTRAINT = "ux_habits_completion_habit_day"


class Habit(db.Model):
    __tablename__ = "habits_habit"
    __table_args__ = (
        db.Index("ix_habits_habit_user_created_at", "user_id", "created_at"),
        db.Index("ix_habits_habit_user_category", "user_id", "category_id"),
        db.CheckConstraint("streak_current >= 0", name="ck_habits_habit_streak_current_nonneg"),
        db.CheckConstraint(
            "streak_current <= streak_longest", name="ck_habits_habit_streak_le_longest"
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int] = mapped_column(db.ForeignKey("user.id"), index=True, nullable=False)
    category_id: Mapped[int] = mapped_column(
        db.ForeignKey("categories_category.id"), index=True, nullable=False
    )
    name: Mapped[str] = mapped_column(db.String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(db.String(500))
    frequency: Mapped[str] = mapped_column(db.String(16), nullable=False, default="daily")
    priority: Mapped[str] = mapped_column(db.String(16), nullable=False, default="medium")
    target: Mapped[int] = mapped_column(nullable=False, default=1)
    streak_current: Mapped[int] = mapped_column(nullable=False, default=0)
    streak_longest: Mapped[int] = mapped_column(nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(default=True)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)

    category: Mapped[Category] = relationship(Category, lazy="joined")
    completions: Mapped[list["HabitCompletion"]] = relationship(
        "HabitCompletion",
        back_populates="habit",
        cascade="all, delete-orphan",
        order_by="HabitCompletion.id",
    )


class HabitCompletion(db.Model):
    __tablename__ = "habits_habit_completion"
    __table_args__ = (
        db.UniqueConstraint("habit_id", "completed_on", name=DUPLICATE_DAY_CONSTRAINT),
        db.Index("ix_habits_completion_habit_completed_on", "habit_id", "completed_on"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    habit_id: Mapped[int] = mapped_column(
        db.ForeignKey("habits_habit.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    completed_on: Mapped[date] = mapped_column(nullable=False)
    value: Mapped[float] = mapped_column(db.Float, nullable=False, default=1)
    notes: Mapped[str | None] = mapped_column(db.Text)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)

    habit: Mapped[Habit] = relationship("Habit", back_populates="completions")
