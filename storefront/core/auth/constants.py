"""Session keys and role names shared by the auth layer."""

from __future__ import annotations

# Session identity keys
SESSION_USER_ID = "user_id"
SESSION_USER_NAME = "user_name"
SESSION_USER_ROLE = "user_role"
SESSION_USER_EMAIL = "user_email"
SESSION_REDIRECT_AFTER_LOGIN = "redirect_after_login"

# CSRF
SESSION_CSRF_TOKEN = "csrf_token"
CSRF_FORM_FIELD = "csrf_token"
CSRF_HEADER = "X-CSRF-Token"

# Flash
SESSION_FLASH_MESSAGE = "flash_message"
SESSION_FLASH_TYPE = "flash_type"

# Roles
ROLE_ADMIN = "admin"
ROLE_MANAGER = "manager"
ROLE_CASHIER = "cashier"
ROLES = (ROLE_ADMIN, ROLE_MANAGER, ROLE_CASHIER)

MSG_LOGIN_REQUIRED = "Please login to continue"
MSG_FORBIDDEN = "You do not have permission to access this page"

__all__ = [
    "SESSION_USER_ID",
    "SESSION_USER_NAME",
    "SESSION_USER_ROLE",
    "SESSION_USER_EMAIL",
    "SESSION_REDIRECT_AFTER_LOGIN",
    "SESSION_CSRF_TOKEN",
    "CSRF_FORM_FIELD",
    "CSRF_HEADER",
    "SESSION_FLASH_MESSAGE",
    "SESSION_FLASH_TYPE",
    "ROLE_ADMIN",
    "ROLE_MANAGER",
    "ROLE_CASHIER",
    "ROLES",
    "MSG_LOGIN_REQUIRED",
    "MSG_FORBIDDEN",
]
