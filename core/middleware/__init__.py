"""
Core middleware package.

This package provides the request pipeline components:
- Error handling with sensitive data sanitization
- Structured logging with PII masking
- Authentication from bearer JWTs
- Authorization with role and ownership checks
"""

from core.middleware.error_handling import (
    ErrorHandlingMiddleware,
    setup_error_handlers,
    sanitize_error_message,
)

from core.middleware.logging import (
    StructuredLoggingMiddleware,
    setup_logging,
)

from core.middleware.authentication import (
    Principal,
    get_current_principal,
)

from core.middleware.authorization import (
    AccessDecision,
    Action,
    Permission,
    Resource,
    authorize,
    check_access,
    interview_scope,
    require_permission,
)

__all__ = [
    # Error handling
    "ErrorHandlingMiddleware",
    "setup_error_handlers",
    "sanitize_error_message",
    # Logging
    "StructuredLoggingMiddleware",
    "setup_logging",
    # Authentication
    "Principal",
    "get_current_principal",
    # Authorization
    "AccessDecision",
    "Action",
    "Permission",
    "Resource",
    "authorize",
    "check_access",
    "interview_scope",
    "require_permission",
]
