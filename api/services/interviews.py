"""Interview service functions."""

from typing import Any, Dict, List, Mapping, Optional
import logging

from api.services.booking import BookingValidator
from api.services.positions import company_summary
from core.exceptions import NotFound
from core.middleware.authentication import Principal
from core.middleware.authorization import Action, Resource, authorize, interview_scope
from core.security import AuditAction, ResourceType, log_audit_event
from core.utils.datetime import to_iso
from database.models.companies import Company
from database.models.interviews import Interview
from database.models.positions import Position
from database.models.users import User
from database.store import EntityStore

logger = logging.getLogger(__name__)


def serialize_interview(
    interview: Interview,
    company: Optional[Company] = None,
    position: Optional[Position] = None,
    user: Optional[User] = None,
) -> Dict[str, Any]:
    return {
        "id": interview.id,
        "interview_date": to_iso(interview.interview_date),
        "user_id": interview.user_id,
        "company_id": interview.company_id,
        "position_id": interview.position_id,
        "company": company_summary(company),
        "position": {
            "id": position.id,
            "title": position.title,
            "description": position.description,
            "interview_start": to_iso(position.interview_start),
            "interview_end": to_iso(position.interview_end),
        } if position else None,
        "user": {"id": user.id, "name": user.name, "email": user.email} if user else None,
        "created_at": to_iso(interview.created_at) if interview.created_at else None,
    }


class _Related:
    """Per-call cache for the records an interview points at."""

    def __init__(self, store: EntityStore):
        self.store = store
        self._cache: Dict[tuple, Any] = {}

    async def get(self, kind: type, entity_id: str) -> Any:
        key = (kind, entity_id)
        if key not in self._cache:
            self._cache[key] = await self.store.find_by_id(kind, entity_id)
        return self._cache[key]

    async def serialize(self, interview: Interview) -> Dict[str, Any]:
        return serialize_interview(
            interview,
            company=await self.get(Company, interview.company_id),
            position=await self.get(Position, interview.position_id),
            user=await self.get(User, interview.user_id),
        )


async def _load_owned(
    store: EntityStore,
    principal: Principal,
    interview_id: str,
    action: Action,
) -> Interview:
    interview = await store.find_by_id(Interview, interview_id)
    if not interview:
        raise NotFound("interview", interview_id)
    authorize(principal, action, Resource.INTERVIEW, owner_id=interview.user_id)
    return interview


async def list_interviews(
    store: EntityStore,
    principal: Principal,
    company_id: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    List interviews visible to the caller, soonest first.

    Users only see their own. Admins see every interview, or those of
    ``company_id`` when given.
    """
    interviews = await store.find(
        Interview,
        order_by=[Interview.interview_date, Interview.id],
        **interview_scope(principal, company_id),
    )
    related = _Related(store)
    return [await related.serialize(interview) for interview in interviews]


async def get_interview(store: EntityStore, principal: Principal, interview_id: str) -> Dict[str, Any]:
    interview = await _load_owned(store, principal, interview_id, Action.READ)
    return await _Related(store).serialize(interview)


async def create_interview(
    store: EntityStore,
    principal: Principal,
    company_id: str,
    fields: Mapping[str, Any],
) -> Dict[str, Any]:
    """Book an interview for the caller at ``company_id``."""
    authorize(principal, Action.CREATE, Resource.INTERVIEW)
    interview = await BookingValidator(store).book(principal, company_id, fields)

    log_audit_event(
        AuditAction.BOOK, ResourceType.INTERVIEW, interview.id,
        user_id=principal.id,
        details={"position_id": interview.position_id, "interview_date": to_iso(interview.interview_date)},
    )
    return await _Related(store).serialize(interview)


async def update_interview(
    store: EntityStore,
    principal: Principal,
    interview_id: str,
    fields: Mapping[str, Any],
) -> Dict[str, Any]:
    """Move an interview to another date or position of the same company."""
    interview = await _load_owned(store, principal, interview_id, Action.UPDATE)
    interview = await BookingValidator(store).reschedule(interview, fields)

    log_audit_event(
        AuditAction.RESCHEDULE, ResourceType.INTERVIEW, interview.id,
        user_id=principal.id,
        details={"position_id": interview.position_id, "interview_date": to_iso(interview.interview_date)},
    )
    return await _Related(store).serialize(interview)


async def delete_interview(store: EntityStore, principal: Principal, interview_id: str) -> Dict[str, Any]:
    interview = await _load_owned(store, principal, interview_id, Action.DELETE)
    async with store.transaction():
        await store.delete_by_id(Interview, interview.id)

    log_audit_event(
        AuditAction.DELETE, ResourceType.INTERVIEW, interview.id, user_id=principal.id,
    )
    return {}
