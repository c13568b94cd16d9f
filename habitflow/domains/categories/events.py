"""Categories domain event catalog."""

from __future__ import annotations

CATEGORIES_CATEGORY_CREATED = "categories.category.created"
CATEGORIES_CATEGORY_UPDATED = "categories.category.updated"
CATEGORIES_CATEGORY_DELETED = "categories.category.deleted"

EVENT_CATALOG = {
    CATEGORIES_CATEGORY_CREATED: {
        "version": "v1",
        "payload": {"category_id": "int", "name": "str", "is_default": "bool"},
    },
    CATEGORIES_CATEGORY_UPDATED: {
        "version": "v1",
        "payload": {"category_id": "int", "fields": "dict"},
    },
    CATEGORIES_CATEGORY_DELETED: {
        "version": "v1",
        "payload": {"category_id": "int", "deleted_at": "datetime"},
    },
}

__all__ = [
    "EVENT_CATALOG",
    "CATEGORIES_CATEGORY_CREATED",
    "CATEGORIES_CATEGORY_UPDATED",
    "CATEGORIES_CATEGORY_DELETED",
]
