"""
Authentication dependencies for resolving the caller identity.

Callers present a bearer JWT whose ``sub`` claim is a user id. The token is
verified with PyJWT, the User record is loaded, and the request proceeds
with a ``Principal``. Token issuance is handled by the auth provider.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import Unauthorized
from core.security import decode_token, TokenError
from database.engine import get_db
from database.models.users import User, UserRole

logger = logging.getLogger(__name__)

NOT_AUTHORIZED_MESSAGE = "Not authorized to access this route"

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Principal:
    """The authenticated caller."""
    id: str
    email: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN.value

    @classmethod
    def from_user(cls, user: User) -> "Principal":
        return cls(id=user.id, email=user.email, role=user.role)


async def resolve_principal(token: str, db: AsyncSession) -> Principal:
    """
    Verify a token and load the user it names.

    Raises:
        Unauthorized: If the token is invalid or the user no longer exists
    """
    try:
        payload = decode_token(token)
    except TokenError as e:
        logger.warning(f"Rejected bearer token: {str(e)}")
        raise Unauthorized(NOT_AUTHORIZED_MESSAGE) from e

    user = await db.get(User, payload["sub"])
    if not user:
        logger.warning("User not found for valid token")
        raise Unauthorized(NOT_AUTHORIZED_MESSAGE)

    return Principal.from_user(user)


async def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
) -> Principal:
    """Require an authenticated caller."""
    if credentials is None or not credentials.credentials:
        raise Unauthorized(NOT_AUTHORIZED_MESSAGE)
    return await resolve_principal(credentials.credentials, db)

