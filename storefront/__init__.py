"""Storefront application factory and bootstrap."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from flask import Flask, redirect

from storefront.config import config_by_name
from storefront.core.auth.csrf import generate_csrf_token
from storefront.core.cache.client import get_cache
from storefront.core.web.flash import pop_flash
from storefront.extensions import init_extensions


def create_app(config_name: Optional[str] = None) -> Flask:
    """Create and configure the Storefront Flask application."""
    env_name = (config_name or os.environ.get("APP_ENV") or "development").lower()
    project_root = Path(__file__).resolve().parent.parent
    instance_root = project_root / "instance"

    app = Flask(
        __name__,
        instance_path=str(instance_root),
        instance_relative_config=True,
        template_folder=str(Path(__file__).parent / "templates"),
    )
    config_cls = config_by_name.get(env_name, config_by_name["development"])
    app.config.from_object(config_cls)
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))
    # Emit non-ASCII text as-is in JSON bodies.
    app.json.ensure_ascii = False

    # Normalize sqlite path to absolute to avoid "unable to open database file"
    db_uri = app.config.get("SQLALCHEMY_DATABASE_URI") or ""
    if db_uri.startswith("sqlite:///"):
        db_path = Path(db_uri.replace("sqlite:///", "", 1))
        if not db_path.is_absolute():
            db_path = project_root / db_path
        db_path.parent.mkdir(parents=True, exist_ok=True)
        app.config["SQLALCHEMY_DATABASE_URI"] = f"sqlite:///{db_path}"

    init_extensions(app)
    _register_models()
    _register_blueprints(app)
    _register_error_handlers(app)
    _register_template_helpers(app)

    @app.get("/")
    def index():
        return redirect(app.config["DEFAULT_REDIRECT_URL"])

    @app.get("/health")
    def health():
        cache = get_cache()
        cache_ok = False
        if cache is not None:
            try:
                cache_ok = bool(cache.ping())
            except Exception as exc:
                app.logger.warning("Cache ping failed: %s", exc)
        return {"ok": True, "cache": cache_ok}, 200

    from storefront.scripts.manage import register_commands

    register_commands(app)

    return app


def _register_models() -> None:
    """Import model modules so metadata and the model registry are complete."""
    from storefront.core.audit import models as audit_models  # noqa: F401
    from storefront.core.store import models as store_models  # noqa: F401
    from storefront.core.users import models as user_models  # noqa: F401


def _register_blueprints(app: Flask) -> None:
    """Lazy import and register all controllers."""
    from storefront.core.admin.controllers import admin_bp
    from storefront.core.auth.controllers import auth_bp  # local import to avoid circulars
    from storefront.core.dashboard.controllers import dashboard_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(admin_bp, url_prefix="/admin")


def _register_error_handlers(app: Flask) -> None:
    """Basic JSON error responses."""
    from werkzeug.exceptions import HTTPException

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return {"ok": False, "error": exc.description}, exc.code

    @app.errorhandler(Exception)
    def _generic_error(exc: Exception):
        app.logger.exception("Unhandled error: %s", exc)
        # In debug/testing, surface the exception message to speed up diagnosis
        if app.debug or app.testing:
            return {"ok": False, "error": str(exc)}, 500
        return {"ok": False, "error": "unexpected_error"}, 500


def _register_template_helpers(app: Flask) -> None:
    """Expose CSRF tokens and one-time flash notices to templates."""

    @app.context_processor
    def inject_helpers():
        return {"csrf_token": generate_csrf_token, "get_flash": pop_flash}
