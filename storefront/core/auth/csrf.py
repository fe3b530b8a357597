"""Lightweight CSRF token helpers using the session."""

from __future__ import annotations

import secrets

from flask import request, session

from storefront.core.auth.constants import CSRF_FORM_FIELD, CSRF_HEADER, SESSION_CSRF_TOKEN

STATE_CHANGING_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})


def generate_csrf_token() -> str:
    """Return a stable CSRF token per-session."""
    token = session.get(SESSION_CSRF_TOKEN)
    if not token:
        token = secrets.token_hex(32)
        session[SESSION_CSRF_TOKEN] = token
    return token


def validate_csrf_token(token: str) -> bool:
    """Validate a provided CSRF token against the session."""
    expected = session.get(SESSION_CSRF_TOKEN)
    if not token or not expected:
        return False
    return secrets.compare_digest(str(token), str(expected))


def submitted_csrf_token() -> str:
    """Token echoed back by the client, from the form field or header."""
    return request.form.get(CSRF_FORM_FIELD) or request.headers.get(CSRF_HEADER) or ""
