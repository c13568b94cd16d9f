"""Category model shared by all users' habits."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column

from habitflow.extensions import db


class Category(db.Model):
    __tablename__ = "categories_category"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(db.String(50), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(db.String(200))
    color: Mapped[str] = mapped_column(db.String(16), nullable=False, default="#3B82F6")
    icon: Mapped[str] = mapped_column(db.String(32), nullable=False, default="category")
    is_default: Mapped[bool] = mapped_column(default=False)
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)
