"""
Interviews Module

Interview bookings made by users against a company's position.
"""

from datetime import datetime

from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import String, DateTime, ForeignKey, Index, func

from database.engine import Base
from core.utils.datetime import now
from database.models.users import new_id


class Interview(Base):
    """A booked interview slot."""

    __tablename__: str = "interviews"
    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=new_id)
    user_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("users.id"), nullable=False, index=True
    )
    company_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("companies.id"), nullable=False, index=True
    )
    position_id: Mapped[str] = mapped_column(
        String(32), ForeignKey("positions.id"), nullable=False, index=True
    )
    interview_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=now, server_default=func.now(), nullable=False
    )

    __table_args__ = (
        Index("idx_interviews_user_date", "user_id", "interview_date"),
    )

    def __repr__(self) -> str:
        return f"<Interview {self.id} on {self.interview_date}>"
