"""Admin pages and CLI commands."""

from __future__ import annotations

import pytest

pytestmark = pytest.mark.integration

from conftest import login_as, prime_csrf
from storefront.core.audit.models import AuditLog
from storefront.core.audit.services import create_audit_log
from storefront.core.store.models import StoreSetting
from storefront.core.store.settings import get_store_settings
from storefront.core.users.models import User
from storefront.extensions import db


def test_audit_log_json_listing(client, admin):
    create_audit_log("auth", "login", "a")
    create_audit_log("settings", "update", "b")
    login_as(client, admin)

    body = client.get("/admin/audit-logs?format=json&module=auth").get_json()

    assert body["ok"] is True
    assert [log["action"] for log in body["logs"]] == ["login"]


def test_audit_log_bad_limit_falls_back(client, admin):
    login_as(client, admin)

    assert client.get("/admin/audit-logs?limit=abc").status_code == 200


def test_settings_update_persists_and_audits(client, make_user):
    manager = make_user("manager@example.com", role="manager")
    login_as(client, manager)
    token = prime_csrf(client)

    resp = client.post(
        "/admin/settings",
        json={"store_name": "  Night Market ", "currency_symbol": "₩"},
        headers={"X-CSRF-Token": token},
    )

    assert resp.status_code == 200
    assert resp.get_json() == {
        "ok": True,
        "settings": {"store_name": "Night Market", "currency_symbol": "₩"},
    }
    assert StoreSetting.query.count() == 2
    record = AuditLog.query.filter_by(module="settings").one()
    assert record.details == "currency_symbol=₩, store_name=Night Market"
    assert record.user_id == manager.id


@pytest.mark.parametrize("payload", [{"store_name": "   "}, {"currency_symbol": "x" * 20}, ["not", "a", "dict"]])
def test_settings_update_rejects_invalid_payload(client, admin, payload):
    login_as(client, admin)
    token = prime_csrf(client)

    resp = client.post("/admin/settings", json=payload, headers={"X-CSRF-Token": token})

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "bad_request"
    assert StoreSetting.query.count() == 0


def test_store_settings_default_to_config(app):
    app.config["STORE_NAME"] = "Config Store"

    assert get_store_settings() == {"store_name": "Config Store", "currency_symbol": "$"}


def test_seed_admin_command_creates_and_promotes(app, cashier):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["seed-admin", "--email", "cashier@example.com", "--password", "n3wpassword"])

    assert result.exit_code == 0, result.output
    user = User.query.filter_by(email="cashier@example.com").one()
    db.session.refresh(user)
    assert user.role == "admin"
    assert user.check_password("n3wpassword")

    result = runner.invoke(args=["seed-admin", "--email", "Boss@Example.com", "--password", "pw123456", "--name", "Boss"])

    assert result.exit_code == 0, result.output
    assert User.query.filter_by(email="boss@example.com", role="admin").count() == 1
