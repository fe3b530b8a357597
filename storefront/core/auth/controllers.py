"""Login and logout pages."""

from __future__ import annotations

from flask import Blueprint, current_app, request
from pydantic import ValidationError

from storefront.core.auth.auth_service import authenticate_user, end_session, start_session
from storefront.core.auth.constants import CSRF_FORM_FIELD
from storefront.core.auth.gate import is_authenticated
from storefront.core.auth.schemas import LoginRequest
from storefront.core.cache.session_mirror import forget_cached_user
from storefront.core.web.controller import BaseController
from storefront.extensions import limiter

auth_bp = Blueprint("auth", __name__)

MSG_BAD_CREDENTIALS = "Invalid email or password"


class LoginController(BaseController):
    decorators = [limiter.limit("10/minute", methods=["POST"])]

    def get(self):
        if is_authenticated():
            self.redirect(current_app.config["DEFAULT_REDIRECT_URL"])
        return self.view("auth/login", {"email": request.args.get("email", "")})

    def post(self):
        payload = request.form.to_dict()
        payload.pop(CSRF_FORM_FIELD, None)
        try:
            data = LoginRequest.model_validate(payload)
        except ValidationError:
            self.set_flash("error", MSG_BAD_CREDENTIALS)
            self.redirect(current_app.config["LOGIN_URL"])

        user = authenticate_user(data.email, data.password)
        if not user:
            self.create_audit_log("auth", "login_failed", data.email)
            self.set_flash("error", MSG_BAD_CREDENTIALS)
            self.redirect(current_app.config["LOGIN_URL"])

        target = start_session(user, current_app.config["DEFAULT_REDIRECT_URL"])
        self.create_audit_log("auth", "login", f"User {user.email} logged in")
        self.set_flash("success", f"Welcome back, {user.name or user.email}")
        self.redirect(target)


class LogoutController(BaseController):
    auth_required = True

    def post(self):
        self.create_audit_log("auth", "logout")
        user_id = end_session()
        forget_cached_user(self.cache, user_id)
        self.set_flash("success", "You have been logged out")
        self.redirect(current_app.config["LOGIN_URL"])


auth_bp.add_url_rule("/login", view_func=LoginController.as_view("login"))
auth_bp.add_url_rule("/logout", view_func=LogoutController.as_view("logout"))
