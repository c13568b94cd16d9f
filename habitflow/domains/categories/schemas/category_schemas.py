"""Category DTOs and schemas."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    description: Optional[str] = Field(default=None, max_length=200)
    color: str = Field(default="#3B82F6", pattern=_COLOR_PATTERN)
    icon: str = Field(default="category", max_length=32)


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    description: Optional[str] = Field(default=None, max_length=200)
    color: Optional[str] = Field(default=None, pattern=_COLOR_PATTERN)
    icon: Optional[str] = Field(default=None, max_length=32)


class CategoryResponse(BaseModel):
    id: int
    name: str
    description: Optional[str]
    color: str
    icon: str
    is_default: bool

    model_config = ConfigDict(from_attributes=True)
