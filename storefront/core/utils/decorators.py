"""Reusable decorators for controllers."""

from __future__ import annotations

from functools import wraps
from typing import Callable, Iterable, Optional, TypeVar

from flask import current_app

from storefront.core.auth.csrf import submitted_csrf_token, validate_csrf_token
from storefront.core.auth.gate import check_auth
from storefront.core.web.responses import json_response

F = TypeVar("F", bound=Callable)

CSRF_FAILED = {"ok": False, "error": "csrf_failed"}


def csrf_failed_response():
    return json_response(CSRF_FAILED, 403)


def login_required(roles: Optional[Iterable[str]] = None):
    """Require a signed-in session, optionally limited to ``roles``."""

    def decorator(fn: F) -> F:
        @wraps(fn)
        def wrapper(*args, **kwargs):  # type: ignore[misc]
            check_auth(roles)
            return fn(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


def csrf_protected(fn: F) -> F:
    """Validate the CSRF token from the form field or X-CSRF-Token header."""

    @wraps(fn)
    def wrapper(*args, **kwargs):  # type: ignore[misc]
        if not current_app.config.get("CSRF_ENABLED", True):
            return fn(*args, **kwargs)
        if not validate_csrf_token(submitted_csrf_token()):
            return csrf_failed_response()
        return fn(*args, **kwargs)

    return wrapper  # type: ignore[return-value]
