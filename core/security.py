"""
Security utilities.

Provides bearer token encoding/decoding and audit logging with PII masking
for every mutation of companies, positions and interviews.
"""

import json
import logging
from datetime import timedelta
from enum import Enum
from typing import Any, Dict, Optional, Set

import jwt

from core.config import settings
from core.utils.datetime import now

logger = logging.getLogger("security.audit")


class TokenError(Exception):
    """Raised when a bearer token cannot be decoded."""
    pass


class AuditAction(str, Enum):
    """Audit log action types."""
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    BOOK = "BOOK"
    RESCHEDULE = "RESCHEDULE"


class ResourceType(str, Enum):
    """Resource types for audit logging."""
    COMPANY = "COMPANY"
    POSITION = "POSITION"
    INTERVIEW = "INTERVIEW"


# PII fields that should be masked in logs
PII_FIELDS: Set[str] = {
    "email", "phone", "tel", "name", "address",
    "salary", "salary_min", "salary_max",
}


def create_access_token(
    subject: str,
    role: Optional[str] = None,
    expires_minutes: Optional[int] = None,
) -> str:
    """
    Create a signed access token for a user id.

    Token issuance belongs to the auth service; this is used by seed
    scripts and tests.
    """
    issued_at = now()
    expires = issued_at + timedelta(
        minutes=expires_minutes if expires_minutes is not None else settings.access_token_expire_minutes
    )
    payload: Dict[str, Any] = {
        "sub": subject,
        "iat": int(issued_at.timestamp()),
        "exp": int(expires.timestamp()),
    }
    if role:
        payload["role"] = role
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Dict[str, Any]:
    """
    Decode and verify an access token.

    Raises:
        TokenError: If the token is expired, malformed or missing a subject
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except jwt.ExpiredSignatureError as e:
        raise TokenError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise TokenError("Invalid token") from e

    if not payload.get("sub"):
        raise TokenError("Token missing subject")
    return payload


def mask_pii(data: Any, depth: int = 0) -> Any:
    """
    Recursively mask PII fields in data structures.

    Args:
        data: Data to mask (dict, list, or primitive)
        depth: Current recursion depth (max 10)

    Returns:
        Data with PII fields masked
    """
    if depth > 10:
        return "[MAX_DEPTH]"

    if isinstance(data, dict):
        masked = {}
        for key, value in data.items():
            if key.lower() in PII_FIELDS:
                if isinstance(value, str) and len(value) > 0:
                    # Partial masking: show first char and length indicator
                    masked[key] = f"{value[0]}***[{len(value)}]"
                else:
                    masked[key] = "[MASKED]"
            else:
                masked[key] = mask_pii(value, depth + 1)
        return masked
    elif isinstance(data, list):
        return [mask_pii(item, depth + 1) for item in data[:5]]  # Limit list items
    else:
        return data


def log_audit_event(
    action: AuditAction,
    resource_type: ResourceType,
    resource_id: Optional[str] = None,
    user_id: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Log an audit event as a single structured JSON line.

    Details are always passed through PII masking.
    """
    event = {
        "timestamp": now().isoformat(),
        "event_type": "AUDIT",
        "action": action.value,
        "resource_type": resource_type.value,
        "resource_id": str(resource_id) if resource_id else None,
        "user_id": user_id,
        "details": mask_pii(details) if details else None,
    }

    logger.info(json.dumps(event, default=str))
    return event
