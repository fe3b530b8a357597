"""Keep a cache copy of the signed-in user's session identity fresh."""

from __future__ import annotations

import logging
import time
from typing import Any, Mapping, Optional

from pydantic import ValidationError

from storefront.core.auth.constants import (
    SESSION_USER_EMAIL,
    SESSION_USER_ID,
    SESSION_USER_NAME,
    SESSION_USER_ROLE,
)
from storefront.core.cache.schemas import CachedUserEntry

logger = logging.getLogger(__name__)

DEFAULT_USER_TTL_SECONDS = 3600


def user_cache_key(user_id: Any) -> str:
    return f"user_{user_id}"


def entry_from_session(session_data: Mapping[str, Any], now: Optional[int] = None) -> CachedUserEntry:
    """Rebuild the cached entry from session fields."""
    return CachedUserEntry(
        id=session_data[SESSION_USER_ID],
        name=session_data.get(SESSION_USER_NAME),
        role=session_data.get(SESSION_USER_ROLE),
        email=session_data.get(SESSION_USER_EMAIL),
        last_activity=int(time.time()) if now is None else now,
    )


def refresh_cached_user(
    cache,
    session_data: Mapping[str, Any],
    ttl_seconds: int = DEFAULT_USER_TTL_SECONDS,
) -> Optional[CachedUserEntry]:
    """Touch ``last_activity`` on the cached entry, or recreate it from the session.

    Returns the stored entry, or ``None`` when the cache is disabled or failing.
    Never raises: the session stays the source of truth for the request.
    """
    if cache is None:
        return None
    user_id = session_data.get(SESSION_USER_ID)
    if user_id is None:
        return None

    key = user_cache_key(user_id)
    now = int(time.time())
    try:
        cached = cache.get(key)
        entry: Optional[CachedUserEntry] = None
        if cached:
            try:
                entry = CachedUserEntry.model_validate(cached)
                entry.last_activity = now
            except ValidationError:
                logger.warning("Replacing malformed cache entry %s", key)
        if entry is None:
            entry = entry_from_session(session_data, now=now)
        cache.set(key, entry.model_dump(), ttl_seconds)
        return entry
    except Exception as exc:
        logger.warning("Cache unavailable, using session only for user %s: %s", user_id, exc)
        return None


def forget_cached_user(cache, user_id: Any) -> bool:
    """Drop the mirror for ``user_id``; best-effort."""
    if cache is None or user_id is None:
        return False
    try:
        cache.delete(user_cache_key(user_id))
        return True
    except Exception as exc:
        logger.warning("Failed to clear cached user %s: %s", user_id, exc)
        return False
