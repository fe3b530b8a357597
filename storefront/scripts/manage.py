"""Flask CLI commands for local setup.

Usage:
    flask --app storefront.wsgi create-db
    flask --app storefront.wsgi seed-admin --email admin@example.com --password secret123
"""

from __future__ import annotations

import click
from flask.cli import with_appcontext

from storefront.core.audit.services import create_audit_log
from storefront.core.auth.constants import ROLE_ADMIN
from storefront.core.users.models import User
from storefront.extensions import db


def seed_admin_user(email: str, password: str, name: str | None = None) -> User:
    """Create the admin user, or promote and reset an existing account."""
    email = email.strip().lower()
    user = User.query.filter_by(email=email).first()
    if not user:
        user = User(email=email, name=name or "Admin")
        db.session.add(user)
    elif name:
        user.name = name
    user.set_password(password)
    user.role = ROLE_ADMIN
    user.is_active = True
    db.session.commit()
    create_audit_log("users", "seed_admin", email)
    return user


@click.command("create-db")
@with_appcontext
def create_db_command() -> None:
    """Create tables directly from the models (local development only)."""
    db.create_all()
    click.echo("Created database tables")


@click.command("seed-admin")
@click.option("--email", required=True, help="Admin email")
@click.option("--password", required=True, help="Admin password")
@click.option("--name", default="Admin", help="Admin display name")
@with_appcontext
def seed_admin_command(email: str, password: str, name: str) -> None:
    user = seed_admin_user(email, password, name)
    click.echo(f"Seeded admin user {user.email} with role {user.role}")


def register_commands(app) -> None:
    app.cli.add_command(create_db_command)
    app.cli.add_command(seed_admin_command)
