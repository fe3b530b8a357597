"""Schemas for store settings updates."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class StoreSettingsUpdate(BaseModel):
    store_name: Optional[str] = Field(default=None, min_length=1, max_length=120)
    currency_symbol: Optional[str] = Field(default=None, min_length=1, max_length=8)

    @field_validator("store_name", "currency_symbol")
    @classmethod
    def strip_value(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v
