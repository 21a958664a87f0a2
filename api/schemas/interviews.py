"""Interview-related Pydantic schemas."""

from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, Field


class InterviewCreate(BaseModel):
    """Request model for booking an interview."""

    position: Optional[str] = Field(None, description="Position to interview for")
    interview_date: Optional[datetime] = Field(None, description="Interview date and time (ISO 8601)")
    company: Optional[str] = Field(
        None,
        description="Company id; required on /interviews, ignored when the company is in the path",
    )

    def to_fields(self) -> dict[str, Any]:
        return {"position_id": self.position, "interview_date": self.interview_date}


class InterviewUpdate(BaseModel):
    """Request model for rescheduling an interview."""

    position: Optional[str] = Field(None, description="New position of the same company")
    interview_date: Optional[datetime] = Field(None, description="New interview date and time")

    def to_fields(self) -> dict[str, Any]:
        fields: dict[str, Any] = {}
        if self.position is not None:
            fields["position_id"] = self.position
        if self.interview_date is not None:
            fields["interview_date"] = self.interview_date
        return fields
