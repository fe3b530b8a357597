"""Admin pages: audit trail and store settings."""

from __future__ import annotations

from flask import Blueprint, request
from pydantic import ValidationError

from storefront.core.audit.services import list_audit_logs
from storefront.core.auth.constants import CSRF_FORM_FIELD, ROLE_ADMIN, ROLE_MANAGER
from storefront.core.store.schemas import StoreSettingsUpdate
from storefront.core.store.settings import get_store_settings, set_store_settings
from storefront.core.web.controller import BaseController

admin_bp = Blueprint("admin", __name__)


def _jsonable_errors(exc: ValidationError) -> list[dict]:
    errors = exc.errors()
    for err in errors:
        if "ctx" in err and isinstance(err["ctx"], dict):
            err["ctx"] = {k: str(v) for k, v in err["ctx"].items()}
    return errors


def _serialize_log(log) -> dict:
    return {
        "id": log.id,
        "module": log.module,
        "action": log.action,
        "details": log.details,
        "user_id": log.user_id,
        "created_at": log.created_at.isoformat() if log.created_at else None,
    }


class AuditLogController(BaseController):
    allowed_roles = (ROLE_ADMIN,)

    def get(self):
        module = request.args.get("module") or None
        try:
            limit = max(1, min(200, int(request.args.get("limit", 50))))
        except (TypeError, ValueError):
            limit = 50
        logs = list_audit_logs(module=module, limit=limit)
        if request.args.get("format") == "json":
            self.response({"ok": True, "logs": [_serialize_log(log) for log in logs]})
        return self.view("admin/audit_logs", {"logs": logs, "module": module})


class StoreSettingsController(BaseController):
    allowed_roles = (ROLE_ADMIN, ROLE_MANAGER)

    def get(self):
        return self.view("admin/settings", {"settings": get_store_settings()})

    def post(self):
        payload = request.get_json(silent=True)
        if payload is None:
            payload = request.form.to_dict()
        if not isinstance(payload, dict):
            self.response({"ok": False, "error": "bad_request"}, 400)
        payload.pop(CSRF_FORM_FIELD, None)
        try:
            data = StoreSettingsUpdate.model_validate(payload)
        except ValidationError as exc:
            self.response(
                {"ok": False, "error": "bad_request", "details": _jsonable_errors(exc)},
                400,
            )
        changes = data.model_dump(exclude_none=True)
        settings = set_store_settings(changes)
        self.create_audit_log(
            "settings",
            "update",
            ", ".join(f"{key}={value}" for key, value in sorted(changes.items())),
        )
        self.response({"ok": True, "settings": settings})


admin_bp.add_url_rule("/audit-logs", view_func=AuditLogController.as_view("audit_logs"))
admin_bp.add_url_rule("/settings", view_func=StoreSettingsController.as_view("settings"))
