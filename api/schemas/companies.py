"""Company-related Pydantic schemas."""

from typing import Optional
from pydantic import BaseModel, Field, field_validator

from api.schemas.common import strip_string, strip_string_list


class CompanyCreate(BaseModel):
    """Schema for creating a company."""

    name: str = Field(description="Company name, unique, at most 50 characters")
    address: str = Field(description="Street address")
    website: str = Field(description="Company website (http or https)")
    description: str = Field(description="Short description, at most 500 characters")
    phone: Optional[str] = Field(None, description="Contact phone number")
    tags: list[str] = Field(default_factory=list, description="Free-form tags")
    logo: Optional[str] = Field(None, description="Logo image URL")
    company_size: Optional[str] = Field(None, description="Headcount bucket, e.g. '11-50 employees'")
    overview: Optional[str] = Field(None, description="Long overview, at most 2000 characters")
    founded_year: Optional[int] = Field(None, description="Year the company was founded")

    @field_validator("name", "address", "website", "description", "phone", "logo", mode="before")
    @classmethod
    def strip_strings(cls, v):
        """Strip whitespace from text fields."""
        return strip_string(v)

    @field_validator("tags", mode="before")
    @classmethod
    def strip_tags(cls, v):
        return strip_string_list(v)


class CompanyUpdate(BaseModel):
    """Schema for updating a company. Only supplied fields change."""

    name: Optional[str] = Field(None, description="Company name")
    address: Optional[str] = Field(None, description="Street address")
    website: Optional[str] = Field(None, description="Company website")
    description: Optional[str] = Field(None, description="Short description")
    phone: Optional[str] = Field(None, description="Phone number")
    tags: Optional[list[str]] = Field(None, description="Tags")
    logo: Optional[str] = Field(None, description="Logo URL")
    company_size: Optional[str] = Field(None, description="Headcount bucket")
    overview: Optional[str] = Field(None, description="Overview")
    founded_year: Optional[int] = Field(None, description="Founded year")

    @field_validator("name", "address", "website", "description", "phone", "logo", mode="before")
    @classmethod
    def strip_strings(cls, v):
        return strip_string(v)

    @field_validator("tags", mode="before")
    @classmethod
    def strip_tags(cls, v):
        return strip_string_list(v)
