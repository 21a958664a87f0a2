"""
Positions Module

Job openings published by a company, each with an interview booking window.
"""

from datetime import datetime
from enum import Enum as PyEnum

from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import (
    String,
    Text,
    Integer,
    DateTime,
    ForeignKey,
    JSON,
    Index,
    func,
)

from database.engine import Base
from core.utils.datetime import now
from database.models.users import new_id


# ==================== Position Enums ===================== #
class WorkArrangement(str, PyEnum):
    """Where the work happens."""

    ON_SITE = "On-site"
    REMOTE = "Remote"
    HYBRID = "Hybrid"


class Position(Base):
    """An open position and the window during which interviews may be booked."""

    __tablename__: str = "positions"
    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    responsibilities: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    requirements: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    skills: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    opening_positions: Mapped[int] = mapped_column(Integer, nullable=False)
    salary_min: Mapped[int | None] = mapped_column(Integer, nullable=True)
    salary_max: Mapped[int | None] = mapped_column(Integer, nullable=True)
    work_arrangement: Mapped[str] = mapped_column(
        String(20), nullable=False, default=WorkArrangement.ON_SITE.value
    )
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    company_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("companies.id"), nullable=False, index=True
    )
    interview_start: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    interview_end: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=now, server_default=func.now(), nullable=False
    )

    __table_args__ = (
        Index("idx_positions_company_title", "company_id", "title"),
    )

    def __repr__(self) -> str:
        return f"<Position {self.title}>"
