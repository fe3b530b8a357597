"""Back-office landing page."""

from __future__ import annotations

from flask import Blueprint, session

from storefront.core.audit.services import list_audit_logs
from storefront.core.auth.constants import (
    ROLE_ADMIN,
    SESSION_USER_EMAIL,
    SESSION_USER_NAME,
    SESSION_USER_ROLE,
)
from storefront.core.web.controller import BaseController

dashboard_bp = Blueprint("dashboard", __name__)


class DashboardController(BaseController):
    auth_required = True

    def get(self):
        role = session.get(SESSION_USER_ROLE)
        recent = list_audit_logs(limit=5) if role == ROLE_ADMIN else []
        return self.view(
            "dashboard/index",
            {
                "user": {
                    "name": session.get(SESSION_USER_NAME),
                    "email": session.get(SESSION_USER_EMAIL),
                    "role": role,
                },
                "recent_activity": recent,
            },
        )


dashboard_bp.add_url_rule("/dashboard", view_func=DashboardController.as_view("index"))
