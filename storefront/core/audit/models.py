"""Append-only audit trail."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column

from storefront.extensions import db


class AuditLog(db.Model):
    __tablename__ = "audit_log"
    __table_args__ = (
        db.Index("ix_audit_log_module_created_at", "module", "created_at"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    module: Mapped[str] = mapped_column(db.String(64), nullable=False, index=True)
    action: Mapped[str] = mapped_column(db.String(64), nullable=False)
    details: Mapped[str] = mapped_column(db.Text, nullable=False, default="")
    # No foreign key: entries outlive the accounts they mention.
    user_id: Mapped[int | None] = mapped_column(index=True)
    ip_address: Mapped[str | None] = mapped_column(db.String(64))
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, index=True)
