"""One-time notices kept in the session between requests."""

from __future__ import annotations

from typing import Optional

from flask import session

from storefront.core.auth.constants import SESSION_FLASH_MESSAGE, SESSION_FLASH_TYPE


def set_flash(flash_type: str, message: str) -> None:
    session[SESSION_FLASH_MESSAGE] = message
    session[SESSION_FLASH_TYPE] = flash_type


def peek_flash() -> Optional[dict]:
    message = session.get(SESSION_FLASH_MESSAGE)
    if not message:
        return None
    return {"type": session.get(SESSION_FLASH_TYPE) or "info", "message": message}


def pop_flash() -> Optional[dict]:
    """Return the pending flash and clear it so it is shown only once."""
    flash = peek_flash()
    session.pop(SESSION_FLASH_MESSAGE, None)
    session.pop(SESSION_FLASH_TYPE, None)
    return flash
