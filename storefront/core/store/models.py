"""Store configuration models."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column

from storefront.extensions import db


class StoreSetting(db.Model):
    __tablename__ = "store_setting"

    id: Mapped[int] = mapped_column(primary_key=True)
    key: Mapped[str] = mapped_column(db.String(64), unique=True, nullable=False)
    value: Mapped[str | None] = mapped_column(db.String(255))
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)
