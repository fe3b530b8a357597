"""Store-wide display settings merged over config defaults."""

from __future__ import annotations

from typing import Any, Dict

from flask import current_app

from storefront.core.store.models import StoreSetting
from storefront.extensions import db

SETTING_KEYS = ("store_name", "currency_symbol")


def default_settings() -> Dict[str, Any]:
    return {
        "store_name": current_app.config.get("STORE_NAME", "Storefront"),
        "currency_symbol": current_app.config.get("CURRENCY_SYMBOL", "$"),
    }


def get_store_settings() -> Dict[str, Any]:
    """Merge stored settings with config defaults."""
    settings = default_settings()
    for row in StoreSetting.query.filter(StoreSetting.key.in_(SETTING_KEYS)).all():
        if row.value is not None:
            settings[row.key] = row.value
    return settings


def set_store_settings(values: Dict[str, Any]) -> Dict[str, Any]:
    """Upsert known keys and return the merged settings. Commits."""
    existing = {
        row.key: row
        for row in StoreSetting.query.filter(StoreSetting.key.in_(SETTING_KEYS)).all()
    }
    for key, value in values.items():
        if key not in SETTING_KEYS or value is None:
            continue
        row = existing.get(key)
        if row:
            row.value = value
        else:
            db.session.add(StoreSetting(key=key, value=value))
    db.session.commit()
    return get_store_settings()
