"""Common Pydantic schemas shared across the API."""

from typing import Any, Generic, Optional, TypeVar
from pydantic import BaseModel, Field


T = TypeVar("T")


class SuccessResponse(BaseModel, Generic[T]):
    """Success envelope."""

    success: bool = Field(default=True, description="Always true for successful calls")
    count: Optional[int] = Field(None, ge=0, description="Number of items when data is a list")
    data: T = Field(description="Requested resource(s)")


class FieldError(BaseModel):
    """A single violated field constraint."""

    field: str
    constraint: str
    message: str


class ErrorResponse(BaseModel):
    """Failure envelope."""

    success: bool = Field(default=False, description="Always false for failed calls")
    message: str = Field(description="Human readable description of the failure")
    errors: Optional[list[FieldError]] = Field(None, description="Field level violations")


def envelope(data: Any) -> dict[str, Any]:
    """Wrap a result in the success envelope; lists also carry their count."""
    if isinstance(data, list):
        return {"success": True, "count": len(data), "data": data}
    return {"success": True, "data": data}


def strip_string(v: Any) -> Any:
    """Strip surrounding whitespace from string inputs."""
    if isinstance(v, str):
        return v.strip()
    return v


def strip_string_list(v: Any) -> Any:
    """Strip each entry of a list of strings and drop empty ones."""
    if isinstance(v, list) and all(isinstance(item, str) for item in v):
        return [item.strip() for item in v if item.strip()]
    return v
