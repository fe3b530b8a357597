"""Response helpers that end the current request early."""

from __future__ import annotations

from typing import Any, NoReturn, Optional

from flask import abort, current_app, jsonify, redirect, render_template
from jinja2 import TemplateNotFound
from markupsafe import Markup
from werkzeug.wrappers import Response

from storefront.core.store.settings import get_store_settings

LAYOUT_TEMPLATE = "layouts/main.html"


def halt(response: Response) -> NoReturn:
    """Stop handling the request and send ``response`` as-is."""
    abort(response)


def json_response(data: Any, status_code: int = 200) -> Response:
    """Build a fresh JSON response; non-ASCII text is emitted unescaped."""
    resp = jsonify(data)
    resp.status_code = status_code
    return resp


def send_json(data: Any, status_code: int = 200) -> NoReturn:
    halt(json_response(data, status_code))


def redirect_to(url: str) -> NoReturn:
    halt(redirect(url))


def _layout_exists() -> bool:
    try:
        current_app.jinja_env.get_template(LAYOUT_TEMPLATE)
    except TemplateNotFound:
        return False
    return True


def render_view(name: str, data: Optional[dict] = None) -> str:
    """Render ``<name>.html`` with store settings, wrapped in the main layout when present."""
    context = dict(data or {})
    settings = get_store_settings()
    context["storeName"] = settings["store_name"]
    context["currencySymbol"] = settings["currency_symbol"]

    content = render_template(f"{name}.html", **context)
    if not _layout_exists():
        return content
    return render_template(LAYOUT_TEMPLATE, **{**context, "content": Markup(content)})
