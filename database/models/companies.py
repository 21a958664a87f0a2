"""
Companies Module

Hiring companies. A company owns its positions and, through them, the
interviews booked against it.
"""

from datetime import datetime
from enum import Enum as PyEnum

from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, Text, Integer, DateTime, JSON, func

from database.engine import Base
from core.utils.datetime import now
from database.models.users import new_id


# ==================== Company Enums ===================== #
class CompanySize(str, PyEnum):
    """Headcount buckets."""

    TINY = "1-10 employees"
    SMALL = "11-50 employees"
    MEDIUM = "51-200 employees"
    LARGE = "201-500 employees"
    XLARGE = "501-1000 employees"
    ENTERPRISE = "1000+ employees"


class Company(Base):
    """A company that publishes positions and receives interviews."""

    __tablename__: str = "companies"
    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    name: Mapped[str] = mapped_column(
        String(50), unique=True, nullable=False, index=True
    )
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    website: Mapped[str] = mapped_column(String(2048), nullable=False)
    description: Mapped[str] = mapped_column(String(500), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(30), nullable=True)
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    logo: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    company_size: Mapped[str | None] = mapped_column(String(30), nullable=True)
    overview: Mapped[str | None] = mapped_column(Text, nullable=True)
    founded_year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=now, server_default=func.now(), nullable=False
    )

    def __repr__(self) -> str:
        return f"<Company {self.name}>"
