"""Request bodies for the auth endpoints."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

MIN_PASSWORD_LENGTH = 8


def _normalize_email(value: str) -> str:
    return value.strip().lower()


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=MIN_PASSWORD_LENGTH, max_length=128)
    name: Optional[str] = Field(default=None, max_length=255)

    normalize_email = field_validator("email")(_normalize_email)

    @field_validator("password")
    @classmethod
    def password_mixes_letters_and_digits(cls, value: str) -> str:
        if not any(ch.isalpha() for ch in value) or not any(ch.isdigit() for ch in value):
            raise ValueError("password needs at least one letter and one digit")
        return value

    @field_validator("name")
    @classmethod
    def blank_name_is_none(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None


class LoginRequest(BaseModel):
    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=1, max_length=128)

    normalize_email = field_validator("email")(_normalize_email)
