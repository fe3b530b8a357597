"""Credential checks and session identity lifecycle."""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import urlparse

from flask import session

from storefront.core.auth.constants import (
    SESSION_REDIRECT_AFTER_LOGIN,
    SESSION_USER_EMAIL,
    SESSION_USER_ID,
    SESSION_USER_NAME,
    SESSION_USER_ROLE,
)
from storefront.core.users.models import User

logger = logging.getLogger(__name__)


def authenticate_user(email: str, password: str) -> Optional[User]:
    user = User.query.filter_by(email=email.strip().lower()).first()
    if not user or not user.is_active:
        return None
    if not user.check_password(password):
        return None
    return user


def safe_redirect_target(target: Optional[str], default: str) -> str:
    """Only same-site relative paths are honoured after login."""
    if not target:
        return default
    parsed = urlparse(target)
    if parsed.scheme or parsed.netloc or not target.startswith("/") or target.startswith("//"):
        return default
    return target


def start_session(user: User, default_redirect: str) -> str:
    """Replace the session with ``user``'s identity; returns where to send them next."""
    target = safe_redirect_target(session.get(SESSION_REDIRECT_AFTER_LOGIN), default_redirect)
    session.clear()
    session[SESSION_USER_ID] = user.id
    session[SESSION_USER_NAME] = user.name
    session[SESSION_USER_ROLE] = user.role
    session[SESSION_USER_EMAIL] = user.email
    logger.info("User %s signed in", user.id)
    return target


def end_session() -> Optional[int]:
    """Clear the session; returns the id that was signed in, if any."""
    user_id = session.get(SESSION_USER_ID)
    session.clear()
    if user_id is not None:
        logger.info("User %s signed out", user_id)
    return user_id
