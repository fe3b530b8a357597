"""Cached copies of session identity."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class CachedUserEntry(BaseModel):
    """Derived, non-authoritative mirror of the session identity."""

    id: int | str
    name: str = ""
    role: str = ""
    email: str = ""
    last_activity: int = Field(default=0, ge=0)

    @field_validator("name", "role", "email", mode="before")
    @classmethod
    def none_to_empty(cls, value):
        return "" if value is None else value
