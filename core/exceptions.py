"""
Domain error taxonomy.

Every error carries the HTTP status the boundary should answer with and a
human readable message. The handlers in ``core.middleware.error_handling``
turn these into ``{"success": false, "message": ...}`` envelopes.
"""

from dataclasses import dataclass, asdict
from typing import Any, Optional


class RecruitingError(Exception):
    """Base class for all business-rule failures."""

    status_code: int = 400
    code: str = "BAD_REQUEST"

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class NotFound(RecruitingError):
    """Raised when an entity is absent from the store."""

    status_code = 404
    code = "NOT_FOUND"

    def __init__(self, entity: str, entity_id: Any, message: Optional[str] = None):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(message or f"No {entity} with the id of {entity_id}")


class InvalidReference(RecruitingError):
    """Raised when a child does not belong to the claimed parent."""

    code = "INVALID_REFERENCE"


class OutOfWindow(RecruitingError):
    """Raised when an interview date falls outside the booking window."""

    code = "OUT_OF_WINDOW"


class QuotaExceeded(RecruitingError):
    """Raised when a user already holds the maximum number of interviews."""

    code = "QUOTA_EXCEEDED"


class HasDependents(RecruitingError):
    """Raised when a delete is blocked by dependent records."""

    code = "HAS_DEPENDENTS"


class Unauthorized(RecruitingError):
    """Raised when an ownership check fails."""

    status_code = 401
    code = "UNAUTHORIZED"


class Forbidden(Unauthorized):
    """Raised when the caller's role does not allow the operation."""

    status_code = 403
    code = "FORBIDDEN"


@dataclass(frozen=True)
class Violation:
    """A single violated field constraint."""

    field: str
    constraint: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


class ValidationError(RecruitingError):
    """Raised by the store when a record violates its constraints."""

    code = "VALIDATION_ERROR"

    def __init__(self, violations: list[Violation]):
        self.violations = list(violations)
        message = "; ".join(v.message for v in self.violations) or "Validation failed"
        super().__init__(message, details=[v.to_dict() for v in self.violations])


class StoreFailure(RecruitingError):
    """Raised when the entity store fails unexpectedly."""

    status_code = 500
    code = "STORE_FAILURE"

    def __init__(self, message: str = "A database error occurred"):
        super().__init__(message)
