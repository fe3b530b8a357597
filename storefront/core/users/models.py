"""User model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column

from storefront.core.auth.constants import ROLE_CASHIER
from storefront.extensions import bcrypt, db


class TimestampMixin:
    created_at: Mapped[datetime] = mapped_column(default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(default=datetime.utcnow, onupdate=datetime.utcnow)


class User(db.Model, TimestampMixin):
    __tablename__ = "user"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(db.String(255), nullable=False, default="")
    email: Mapped[str] = mapped_column(db.String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(db.String(255), nullable=False)
    role: Mapped[str] = mapped_column(db.String(32), nullable=False, default=ROLE_CASHIER)
    is_active: Mapped[bool] = mapped_column(default=True)

    def set_password(self, plain: str) -> None:
        self.password_hash = bcrypt.generate_password_hash(plain).decode("utf-8")

    def check_password(self, plain: str) -> bool:
        """False for a wrong password or an unreadable stored hash."""
        if not self.password_hash or not plain:
            return False
        try:
            return bcrypt.check_password_hash(self.password_hash, plain)
        except ValueError:
            return False
