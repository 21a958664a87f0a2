"""
Authorization policy for checking role permissions and record ownership.

This module implements:
1. Role permissions (admin vs. user) per resource and action
2. Ownership checks for interview records
3. Role-scoped interview listings
4. FastAPI dependencies for route-level permission checks

Every decision is made before the store is touched for a mutation.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, Set

from fastapi import Depends

from core.exceptions import Forbidden, Unauthorized
from core.middleware.authentication import Principal, get_current_principal
from database.models.users import UserRole

logger = logging.getLogger(__name__)


class Resource(str, Enum):
    COMPANY = "company"
    POSITION = "position"
    INTERVIEW = "interview"


class Action(str, Enum):
    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


class Permission(str, Enum):
    """System-wide permissions."""

    # Company Management
    COMPANY_CREATE = "company:create"
    COMPANY_UPDATE = "company:update"
    COMPANY_DELETE = "company:delete"

    # Position Management
    POSITION_CREATE = "position:create"
    POSITION_UPDATE = "position:update"
    POSITION_DELETE = "position:delete"

    # Interview Booking
    INTERVIEW_CREATE = "interview:create"
    INTERVIEW_READ = "interview:read"
    INTERVIEW_UPDATE = "interview:update"
    INTERVIEW_DELETE = "interview:delete"
    INTERVIEW_MANAGE_ALL = "interview:manage_all"  # bypasses ownership


# Role to permission mapping
ROLE_PERMISSIONS: dict[UserRole, Set[Permission]] = {
    UserRole.ADMIN: set(Permission),
    UserRole.USER: {
        Permission.INTERVIEW_CREATE, Permission.INTERVIEW_READ,
        Permission.INTERVIEW_UPDATE, Permission.INTERVIEW_DELETE,
    },
}

# Permissions that only apply to records the caller owns
OWNERSHIP_SCOPED: Set[Permission] = {
    Permission.INTERVIEW_READ,
    Permission.INTERVIEW_UPDATE,
    Permission.INTERVIEW_DELETE,
}

ACTION_VERBS = {
    Action.CREATE: "create",
    Action.READ: "access",
    Action.UPDATE: "update",
    Action.DELETE: "delete",
}


@dataclass(frozen=True)
class AccessDecision:
    """Outcome of an access check."""
    allowed: bool
    reason: Optional[str] = None
    ownership: bool = False  # denial came from the ownership rule

    def raise_for_denial(self) -> None:
        if self.allowed:
            return
        if self.ownership:
            raise Unauthorized(self.reason)
        raise Forbidden(self.reason)


def get_role_permissions(role: str) -> Set[Permission]:
    """Get all permissions a role grants."""
    try:
        return ROLE_PERMISSIONS[UserRole(role)]
    except ValueError:
        return set()


def has_permission(principal: Principal, permission: Permission) -> bool:
    return permission in get_role_permissions(principal.role)


def check_access(
    principal: Principal,
    action: Action,
    resource: Resource,
    owner_id: Optional[str] = None,
) -> AccessDecision:
    """
    Decide whether a principal may perform an action on a resource.

    Args:
        principal: The authenticated caller
        action: Action being performed
        resource: Kind of entity acted upon
        owner_id: ``user_id`` of the target record, for ownership-scoped actions

    Returns:
        AccessDecision
    """
    permission = Permission(f"{Resource(resource).value}:{Action(action).value}")
    verb = ACTION_VERBS[Action(action)]

    if not has_permission(principal, permission):
        logger.warning(
            f"User {principal.id} with role {principal.role} lacks permission {permission.value}"
        )
        return AccessDecision(
            allowed=False,
            reason=f"User role {principal.role} is not authorized to {verb} this {resource.value}",
        )

    if permission in OWNERSHIP_SCOPED and not has_permission(principal, Permission.INTERVIEW_MANAGE_ALL):
        if owner_id != principal.id:
            logger.warning(f"User {principal.id} attempted to {verb} a record owned by {owner_id}")
            return AccessDecision(
                allowed=False,
                reason=f"User {principal.id} is not authorized to {verb} this {resource.value}",
                ownership=True,
            )

    return AccessDecision(allowed=True)


def authorize(
    principal: Principal,
    action: Action,
    resource: Resource,
    owner_id: Optional[str] = None,
) -> None:
    """
    Enforce ``check_access``.

    Raises:
        Forbidden: If the role does not allow the action
        Unauthorized: If the caller does not own the record
    """
    check_access(principal, action, resource, owner_id).raise_for_denial()


def interview_scope(principal: Principal, company_id: Optional[str] = None) -> dict[str, Any]:
    """
    Equality filters for the interviews a principal may list.

    Users see only their own interviews. Admins see all of them, or those
    of one company when ``company_id`` is given.
    """
    if not has_permission(principal, Permission.INTERVIEW_MANAGE_ALL):
        return {"user_id": principal.id}
    if company_id:
        return {"company_id": company_id}
    return {}


def require_permission(*required_permissions: Permission) -> Callable:
    """
    Dependency to require specific permissions.

    Args:
        required_permissions: Required permissions

    Returns:
        FastAPI dependency resolving to the authenticated principal
    """
    async def dependency(
        principal: Principal = Depends(get_current_principal),
    ) -> Principal:
        granted = get_role_permissions(principal.role)
        for permission in required_permissions:
            if permission not in granted:
                logger.warning(
                    f"User {principal.id} with role {principal.role} lacks permission "
                    f"{permission.value}"
                )
                raise Forbidden(
                    f"User role {principal.role} is not authorized to access this route"
                )
        return principal

    return dependency
