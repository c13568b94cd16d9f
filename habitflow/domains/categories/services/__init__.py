"""Category services: CRUD and default seeding with outbox events."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from habitflow.domains.categories.events import (
    CATEGORIES_CATEGORY_CREATED,
    CATEGORIES_CATEGORY_DELETED,
    CATEGORIES_CATEGORY_UPDATED,
)
from habitflow.domains.categories.models.category_models import Category
from habitflow.domains.habits.models.habit_models import Habit
from habitflow.extensions import db
from habitflow.platform.outbox import enqueue as enqueue_outbox

DEFAULT_CATEGORIES = (
    {
        "name": "Health & Fitness",
        "description": "Physical health and fitness related habits",
        "color": "#10B981",
        "icon": "heart",
    },
    {
        "name": "Productivity",
        "description": "Work and productivity habits",
        "color": "#3B82F6",
        "icon": "briefcase",
    },
    {
        "name": "Learning",
        "description": "Education and skill development",
        "color": "#8B5CF6",
        "icon": "book",
    },
    {
        "name": "Mindfulness",
        "description": "Mental health and mindfulness practices",
        "color": "#F59E0B",
        "icon": "brain",
    },
    {
        "name": "Social",
        "description": "Social and relationship habits",
        "color": "#EF4444",
        "icon": "users",
    },
    {
        "name": "Personal Care",
        "description": "Self-care and personal hygiene",
        "color": "#06B6D4",
        "icon": "user",
    },
)


def list_categories() -> List[Category]:
    return Category.query.order_by(Category.name.asc()).all()


def get_category(category_id: int) -> Optional[Category]:
    return db.session.get(Category, category_id)


def create_category(
    *,
    name: str,
    description: str | None = None,
    color: str | None = None,
    icon: str | None = None,
    is_default: bool = False,
) -> Category:
    name_norm = (name or "").strip()
    if not name_norm:
        raise ValueError("validation_error")
    if Category.query.filter_by(name=name_norm).first():
        raise ValueError("duplicate")

    category = Category(
        name=name_norm,
        description=(description or "").strip() or None,
        color=color or "#3B82F6",
        icon=(icon or "").strip() or "category",
        is_default=is_default,
    )
    db.session.add(category)
    db.session.flush()
    enqueue_outbox(
        CATEGORIES_CATEGORY_CREATED,
        {"category_id": category.id, "name": category.name, "is_default": category.is_default},
        user_id=None,
    )
    db.session.commit()
    return category


def update_category(category_id: int, **fields) -> Optional[Category]:
    category = get_category(category_id)
    if not category:
        return None

    if "name" in fields and fields["name"] is not None:
        name_norm = fields["name"].strip()
        clash = Category.query.filter(Category.name == name_norm, Category.id != category.id).first()
        if clash:
            raise ValueError("duplicate")
        fields["name"] = name_norm

    changed: Dict[str, object] = {}
    for key in ("name", "description", "color", "icon"):
        if key in fields:
            val = fields[key]
            if val is None and key != "description":
                continue
            if isinstance(val, str):
                val = val.strip()
            setattr(category, key, val)
            changed[key] = val
    enqueue_outbox(
        CATEGORIES_CATEGORY_UPDATED,
        {"category_id": category.id, "fields": changed},
        user_id=None,
    )
    db.session.commit()
    return category


def delete_category(category_id: int) -> bool:
    category = get_category(category_id)
    if not category:
        return False
    if Habit.query.filter_by(category_id=category_id).first():
        raise ValueError("in_use")
    db.session.delete(category)
    enqueue_outbox(
        CATEGORIES_CATEGORY_DELETED,
        {"category_id": category_id, "deleted_at": datetime.utcnow().isoformat()},
        user_id=None,
    )
    db.session.commit()
    return True


def seed_default_categories() -> int:
    """Insert or refresh the built-in categories. Returns how many were created."""
    created = 0
    for defaults in DEFAULT_CATEGORIES:
        category = Category.query.filter_by(name=defaults["name"]).first()
        if category:
            category.description = defaults["description"]
            category.color = defaults["color"]
            category.icon = defaults["icon"]
            category.is_default = True
            continue
        db.session.add(Category(is_default=True, **defaults))
        created += 1
    db.session.commit()
    return created
