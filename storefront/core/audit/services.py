"""Best-effort audit log writes."""

from __future__ import annotations

import logging
from typing import List, Optional

from flask import has_request_context, request, session

from storefront.core.audit.models import AuditLog
from storefront.core.auth.constants import SESSION_USER_ID
from storefront.extensions import db

logger = logging.getLogger(__name__)


def _request_actor() -> tuple[Optional[int], Optional[str]]:
    if not has_request_context():
        return None, None
    user_id = session.get(SESSION_USER_ID)
    try:
        user_id = int(user_id) if user_id is not None else None
    except (TypeError, ValueError):
        user_id = None
    return user_id, request.remote_addr


def create_audit_log(module: str, action: str, details: str = "") -> Optional[int]:
    """Append an audit entry and return its id; failures are logged, never raised."""
    try:
        user_id, ip_address = _request_actor()
        record = AuditLog(
            module=module,
            action=action,
            details=details or "",
            user_id=user_id,
            ip_address=ip_address,
        )
        db.session.add(record)
        db.session.commit()
        return record.id
    except Exception as exc:
        logger.exception("Failed to create audit log: %s", exc)
        try:
            db.session.rollback()
        except Exception:
            logger.exception("Rollback after audit failure also failed")
        return None


def list_audit_logs(module: Optional[str] = None, limit: int = 50) -> List[AuditLog]:
    """Newest audit entries first, optionally for one module."""
    query = AuditLog.query
    if module:
        query = query.filter_by(module=module)
    return query.order_by(AuditLog.created_at.desc(), AuditLog.id.desc()).limit(limit).all()
