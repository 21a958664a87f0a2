"""
Users Module

Identity records for callers. Credentials live with the auth provider;
only what the booking rules need is kept here.
"""

import uuid
from datetime import datetime
from enum import Enum as PyEnum

from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, DateTime, func

from database.engine import Base
from core.utils.datetime import now


def new_id() -> str:
    """Opaque identifier used by every entity."""
    return uuid.uuid4().hex


# ==================== User Role ===================== #
class UserRole(str, PyEnum):
    ADMIN = "admin"  # manages companies, positions and every interview
    USER = "user"  # books and manages their own interviews


class User(Base):
    """Authenticated caller identity."""

    __tablename__: str = "users"
    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(
        String(255), unique=True, nullable=False, index=True
    )
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default=UserRole.USER.value
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=now, server_default=func.now(), nullable=False
    )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    def __repr__(self) -> str:
        return f"<User {self.email} ({self.role})>"
