"""Authentication and role gate."""

from __future__ import annotations

import pytest
from flask import Blueprint

pytestmark = pytest.mark.integration

from conftest import DEFAULT_PASSWORD, login_as, prime_csrf
from storefront.core.auth.constants import (
    MSG_FORBIDDEN,
    MSG_LOGIN_REQUIRED,
    SESSION_REDIRECT_AFTER_LOGIN,
    SESSION_USER_ROLE,
)
from storefront.core.auth.gate import role_allowed
from storefront.core.cache.client import CACHE_EXTENSION_KEY
from storefront.core.cache.session_mirror import user_cache_key
from storefront.core.utils.decorators import login_required


def _flash(client):
    with client.session_transaction() as sess:
        return sess.get("flash_type"), sess.get("flash_message")


@pytest.mark.parametrize(
    "uri",
    ["/dashboard", "/admin/audit-logs", "/admin/audit-logs?module=auth&limit=5", "/admin/settings"],
)
def test_unauthenticated_redirects_to_login_and_keeps_uri(client, uri):
    resp = client.get(uri)

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/login")
    with client.session_transaction() as sess:
        assert sess[SESSION_REDIRECT_AFTER_LOGIN] == uri
    assert _flash(client) == ("error", MSG_LOGIN_REQUIRED)


def test_unauthenticated_post_redirects_before_csrf(client):
    resp = client.post("/logout")

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/login")
    with client.session_transaction() as sess:
        assert SESSION_REDIRECT_AFTER_LOGIN not in sess


def test_login_after_rejected_post_goes_to_default_page(client, admin):
    client.get("/admin/settings")
    client.post("/logout")
    token = prime_csrf(client)

    resp = client.post(
        "/login",
        data={"email": admin.email, "password": DEFAULT_PASSWORD, "csrf_token": token},
    )

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/dashboard")
    assert client.get(resp.headers["Location"]).status_code == 200


def test_bad_csrf_token_does_not_touch_user_cache(app, client, cashier):
    login_as(client, cashier)
    prime_csrf(client)

    resp = client.post("/logout", headers={"X-CSRF-Token": "b" * 64})

    assert resp.status_code == 403
    assert resp.get_json() == {"ok": False, "error": "csrf_failed"}
    assert app.extensions[CACHE_EXTENSION_KEY].get(user_cache_key(cashier.id)) is None


def test_valid_request_refreshes_user_cache(app, client, cashier):
    login_as(client, cashier)

    assert client.get("/dashboard").status_code == 200
    assert app.extensions[CACHE_EXTENSION_KEY].get(user_cache_key(cashier.id))["role"] == "cashier"


def test_identity_without_user_id_is_unauthenticated(client):
    with client.session_transaction() as sess:
        sess["user_name"] = "ghost"
        sess["user_role"] = "admin"

    resp = client.get("/admin/audit-logs")

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/login")


@pytest.mark.parametrize("role", ["cashier", "manager", "", "Admin", "superuser", None])
def test_role_restricted_page_denies_other_roles(client, cashier, role):
    login_as(client, cashier, **{SESSION_USER_ROLE: role})

    resp = client.get("/admin/audit-logs")

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/dashboard")
    assert _flash(client) == ("error", MSG_FORBIDDEN)


def test_admin_reaches_audit_log(client, admin):
    login_as(client, admin)

    resp = client.get("/admin/audit-logs")

    assert resp.status_code == 200
    assert b"Audit log" in resp.data


@pytest.mark.parametrize("role,status", [("admin", 200), ("manager", 200), ("cashier", 302)])
def test_settings_page_roles(client, cashier, role, status):
    login_as(client, cashier, **{SESSION_USER_ROLE: role})

    resp = client.get("/admin/settings")

    assert resp.status_code == status


def test_any_role_reaches_dashboard(client, cashier):
    login_as(client, cashier)

    resp = client.get("/dashboard")

    assert resp.status_code == 200
    assert b"Cas Cashier" in resp.data


def test_login_required_decorator(app, client, cashier):
    bp = Blueprint("gate_test", __name__)

    @bp.get("/gated")
    @login_required()
    def gated():
        return {"ok": True}

    @bp.get("/gated-admin")
    @login_required(roles={"admin"})
    def gated_admin():
        return {"ok": True}

    app.register_blueprint(bp)

    assert client.get("/gated").status_code == 302
    login_as(client, cashier)
    assert client.get("/gated").get_json() == {"ok": True}
    assert client.get("/gated-admin").status_code == 302


def test_login_returns_to_original_uri(client, admin):
    client.get("/admin/audit-logs?module=auth")
    token = prime_csrf(client)

    resp = client.post(
        "/login",
        data={"email": admin.email, "password": DEFAULT_PASSWORD, "csrf_token": token},
    )

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/admin/audit-logs?module=auth")
    follow = client.get("/admin/audit-logs?module=auth")
    assert follow.status_code == 200


@pytest.mark.unit
@pytest.mark.parametrize(
    "role,allowed,expected",
    [
        ("admin", None, True),
        ("admin", [], True),
        (None, [], True),
        ("admin", ["admin"], True),
        ("cashier", ["admin", "manager"], False),
        (None, ["admin"], False),
        ("", ["admin"], False),
    ],
)
def test_role_allowed(role, allowed, expected):
    assert role_allowed(role, allowed) is expected
