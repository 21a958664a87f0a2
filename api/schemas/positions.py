"""Position-related Pydantic schemas."""

from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, Field, field_validator

from api.schemas.common import strip_string, strip_string_list


class Salary(BaseModel):
    """Salary range; bounds are checked against each other by the store."""

    min: int = Field(description="Lower bound, non-negative")
    max: int = Field(description="Upper bound, at least min")


def _flatten_salary(fields: dict[str, Any]) -> dict[str, Any]:
    """Split ``salary`` into its columns; an explicit null clears both."""
    if "salary" not in fields:
        return fields
    salary = fields.pop("salary")
    fields["salary_min"] = salary["min"] if salary is not None else None
    fields["salary_max"] = salary["max"] if salary is not None else None
    return fields


class PositionCreate(BaseModel):
    """Schema for creating a position under a company."""

    title: str = Field(description="Job title")
    description: Optional[str] = Field(None, description="Role description")
    responsibilities: list[str] = Field(default_factory=list, description="At most 50 items")
    requirements: list[str] = Field(default_factory=list, description="At most 50 items")
    skills: list[str] = Field(default_factory=list, description="Skills asked for")
    opening_positions: int = Field(description="Number of openings, at least 1")
    salary: Optional[Salary] = Field(None, description="Salary range")
    work_arrangement: Optional[str] = Field(None, description="On-site, Remote or Hybrid")
    location: str = Field(description="Work location")
    interview_start: datetime = Field(description="First bookable interview time (ISO 8601)")
    interview_end: datetime = Field(description="Last bookable interview time (ISO 8601)")

    @field_validator("title", "description", "location", mode="before")
    @classmethod
    def strip_strings(cls, v):
        """Strip whitespace from text fields."""
        return strip_string(v)

    @field_validator("responsibilities", "requirements", "skills", mode="before")
    @classmethod
    def strip_lists(cls, v):
        return strip_string_list(v)

    def to_fields(self) -> dict[str, Any]:
        """Store fields for this payload."""
        return _flatten_salary(self.model_dump(exclude_none=True))


class PositionUpdate(BaseModel):
    """Schema for updating a position. Only supplied fields change."""

    title: Optional[str] = Field(None, description="Job title")
    description: Optional[str] = Field(None, description="Role description")
    responsibilities: Optional[list[str]] = Field(None, description="Responsibilities")
    requirements: Optional[list[str]] = Field(None, description="Requirements")
    skills: Optional[list[str]] = Field(None, description="Skills")
    opening_positions: Optional[int] = Field(None, description="Number of openings")
    salary: Optional[Salary] = Field(None, description="Salary range")
    work_arrangement: Optional[str] = Field(None, description="Work arrangement")
    location: Optional[str] = Field(None, description="Work location")
    interview_start: Optional[datetime] = Field(None, description="Booking window start")
    interview_end: Optional[datetime] = Field(None, description="Booking window end")

    @field_validator("title", "description", "location", mode="before")
    @classmethod
    def strip_strings(cls, v):
        return strip_string(v)

    @field_validator("responsibilities", "requirements", "skills", mode="before")
    @classmethod
    def strip_lists(cls, v):
        return strip_string_list(v)

    def to_fields(self) -> dict[str, Any]:
        return _flatten_salary(self.model_dump(exclude_unset=True))
