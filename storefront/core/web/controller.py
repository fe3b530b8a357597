"""Base controller for server-rendered pages.

Subclasses implement ``get``/``post``/... like any ``MethodView``. Class
attributes declare the gate that runs before the handler body:

- ``auth_required``: require a signed-in session.
- ``allowed_roles``: restrict to these roles (implies ``auth_required``).
- ``csrf_exempt``: skip the CSRF check on state-changing methods.

Helpers that end the request (``redirect``, ``response``, a failed
``validate_csrf`` or ``check_auth``) raise through ``flask.abort`` with the
prepared response, so code after them never runs.
"""

from __future__ import annotations

import uuid
from typing import Any, Iterable, NoReturn, Optional, Sequence

from flask import current_app, request
from flask.views import MethodView

from storefront.core.audit.services import create_audit_log
from storefront.core.auth.csrf import (
    STATE_CHANGING_METHODS,
    generate_csrf_token,
    submitted_csrf_token,
    validate_csrf_token,
)
from storefront.core.auth.gate import authorize, check_auth, require_identity
from storefront.core.cache.client import get_cache
from storefront.core.utils.decorators import csrf_failed_response
from storefront.core.web.flash import set_flash
from storefront.core.web.responses import halt, redirect_to, render_view, send_json
from storefront.extensions import db


class BaseController(MethodView):
    auth_required: bool = False
    allowed_roles: Sequence[str] = ()
    csrf_exempt: bool = False

    def __init__(self) -> None:
        self.cache = get_cache()

    def dispatch_request(self, **kwargs: Any):
        gated = self.auth_required or bool(self.allowed_roles)
        # Identity, then CSRF, then the cache refresh and role check.
        if gated:
            require_identity()
        if request.method in STATE_CHANGING_METHODS and not self.csrf_exempt:
            self.validate_csrf()
        if gated:
            authorize(self.allowed_roles, cache=self.cache)
        return super().dispatch_request(**kwargs)

    # Rendering and responses

    def view(self, name: str, data: Optional[dict] = None) -> str:
        return render_view(name, data)

    def response(self, data: Any, status_code: int = 200) -> NoReturn:
        send_json(data, status_code)

    def redirect(self, url: str) -> NoReturn:
        redirect_to(url)

    def is_post(self) -> bool:
        return request.method == "POST"

    def is_get(self) -> bool:
        return request.method == "GET"

    # Models and identifiers

    def model(self, name: str) -> Any:
        """Instantiate the mapped model class called ``name``."""
        for mapper in db.Model.registry.mappers:
            if mapper.class_.__name__ == name:
                return mapper.class_()
        raise LookupError(f"unknown model: {name}")

    def generate_uuid(self) -> str:
        return str(uuid.uuid4())

    # Security

    def generate_csrf_token(self) -> str:
        return generate_csrf_token()

    def validate_csrf(self) -> bool:
        if not current_app.config.get("CSRF_ENABLED", True):
            return True
        if not validate_csrf_token(submitted_csrf_token()):
            halt(csrf_failed_response())
        return True

    def check_auth(self, allowed_roles: Optional[Iterable[str]] = None) -> bool:
        return check_auth(allowed_roles, cache=self.cache)

    # Session notices and audit

    def set_flash(self, flash_type: str, message: str) -> None:
        set_flash(flash_type, message)

    def create_audit_log(self, module: str, action: str, details: str = "") -> Optional[int]:
        return create_audit_log(module, action, details)
