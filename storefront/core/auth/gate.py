"""Session-based authentication and role gate."""

from __future__ import annotations

from typing import Iterable, Optional

from flask import current_app, request, session

from storefront.core.auth.constants import (
    MSG_FORBIDDEN,
    MSG_LOGIN_REQUIRED,
    SESSION_REDIRECT_AFTER_LOGIN,
    SESSION_USER_ID,
    SESSION_USER_ROLE,
)
from storefront.core.cache.client import get_cache
from storefront.core.cache.session_mirror import DEFAULT_USER_TTL_SECONDS, refresh_cached_user
from storefront.core.web.flash import set_flash
from storefront.core.web.responses import redirect_to


def requested_uri() -> str:
    """Path plus query string of the current request."""
    if request.query_string:
        return request.full_path
    return request.path


def is_authenticated() -> bool:
    return session.get(SESSION_USER_ID) is not None


def role_allowed(role: Optional[str], allowed_roles: Optional[Iterable[str]]) -> bool:
    """An empty allow-list admits every role; otherwise the role must be listed."""
    allowed = set(allowed_roles or ())
    if not allowed:
        return True
    return role is not None and role in allowed


def require_identity() -> None:
    """Send an anonymous visitor to the login page and halt.

    Only GET targets are remembered; a form post cannot be replayed after login.
    """
    if is_authenticated():
        return
    if request.method == "GET":
        session[SESSION_REDIRECT_AFTER_LOGIN] = requested_uri()
    else:
        session.pop(SESSION_REDIRECT_AFTER_LOGIN, None)
    set_flash("error", MSG_LOGIN_REQUIRED)
    redirect_to(current_app.config.get("LOGIN_URL", "/login"))


def authorize(allowed_roles: Optional[Iterable[str]] = None, cache=None) -> None:
    """Refresh the cached user entry, then enforce the role allow-list."""
    refresh_cached_user(
        cache if cache is not None else get_cache(),
        session,
        ttl_seconds=current_app.config.get("CACHE_USER_TTL_SECONDS", DEFAULT_USER_TTL_SECONDS),
    )

    if not role_allowed(session.get(SESSION_USER_ROLE), allowed_roles):
        set_flash("error", MSG_FORBIDDEN)
        redirect_to(current_app.config.get("DEFAULT_REDIRECT_URL", "/dashboard"))


def check_auth(allowed_roles: Optional[Iterable[str]] = None, cache=None) -> bool:
    """Gate the current request; redirects (and halts) unless the user may proceed.

    ``cache`` defaults to the app cache; pass one explicitly to reuse a client.
    """
    require_identity()
    authorize(allowed_roles, cache=cache)
    return True
