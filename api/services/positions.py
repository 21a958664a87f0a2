"""Position service functions."""

from typing import Any, Dict, List, Mapping, Optional
import logging

from api.services.booking import BookingValidator
from api.services.integrity import IntegrityGuard
from core.exceptions import NotFound
from core.middleware.authentication import Principal
from core.security import AuditAction, ResourceType, log_audit_event
from core.utils.datetime import to_iso
from database.models.companies import Company
from database.models.positions import Position
from database.store import EntityStore

logger = logging.getLogger(__name__)

WINDOW_FIELDS = frozenset({"interview_start", "interview_end"})


def company_summary(company: Optional[Company]) -> Optional[Dict[str, Any]]:
    if not company:
        return None
    return {"id": company.id, "name": company.name, "phone": company.phone}


def serialize_position(position: Position, company: Optional[Company] = None) -> Dict[str, Any]:
    salary = None
    if position.salary_min is not None and position.salary_max is not None:
        salary = {"min": position.salary_min, "max": position.salary_max}

    return {
        "id": position.id,
        "title": position.title,
        "description": position.description,
        "responsibilities": list(position.responsibilities or []),
        "requirements": list(position.requirements or []),
        "skills": list(position.skills or []),
        "opening_positions": position.opening_positions,
        "salary": salary,
        "work_arrangement": position.work_arrangement,
        "location": position.location,
        "company_id": position.company_id,
        "company": company_summary(company),
        "interview_start": to_iso(position.interview_start),
        "interview_end": to_iso(position.interview_end),
        "created_at": to_iso(position.created_at) if position.created_at else None,
    }


async def _with_companies(store: EntityStore, positions: List[Position]) -> List[Dict[str, Any]]:
    companies: Dict[str, Optional[Company]] = {}
    for position in positions:
        if position.company_id not in companies:
            companies[position.company_id] = await store.find_by_id(Company, position.company_id)
    return [serialize_position(p, companies[p.company_id]) for p in positions]


async def list_positions(store: EntityStore, company_id: Optional[str] = None) -> List[Dict[str, Any]]:
    """List positions ordered by title, optionally only those of one company."""
    filters = {"company_id": company_id} if company_id else {}
    positions = await store.find(Position, order_by=[Position.title, Position.id], **filters)
    return await _with_companies(store, positions)


async def get_position(store: EntityStore, position_id: str) -> Dict[str, Any]:
    position = await store.find_by_id(Position, position_id)
    if not position:
        raise NotFound("position", position_id)
    company = await store.find_by_id(Company, position.company_id)
    return serialize_position(position, company)


async def create_position(
    store: EntityStore,
    principal: Principal,
    company_id: str,
    fields: Mapping[str, Any],
) -> Dict[str, Any]:
    """Create a position under an existing company."""
    async with store.transaction():
        company = await store.find_by_id(Company, company_id)
        if not company:
            raise NotFound("company", company_id)

        position = await store.create(Position, {**fields, "company_id": company.id})

    log_audit_event(
        AuditAction.CREATE, ResourceType.POSITION, position.id,
        user_id=principal.id, details={"company_id": company.id, "title": position.title},
    )
    return serialize_position(position, company)


async def update_position(
    store: EntityStore,
    principal: Principal,
    position_id: str,
    fields: Mapping[str, Any],
) -> Dict[str, Any]:
    """
    Update a position; the merged record is validated as a whole.

    A new booking window must still include every interview already booked.
    """
    changes = {key: value for key, value in fields.items() if key != "company_id"}
    async with store.transaction():
        position = await store.update(Position, position_id, changes)
        if not position:
            raise NotFound("position", position_id)
        if WINDOW_FIELDS & changes.keys():
            await BookingValidator(store).check_window_covers_bookings(position)
        company = await store.find_by_id(Company, position.company_id)

    log_audit_event(
        AuditAction.UPDATE, ResourceType.POSITION, position.id,
        user_id=principal.id, details={"fields": sorted(changes)},
    )
    return serialize_position(position, company)


async def delete_position(
    store: EntityStore,
    principal: Principal,
    position_id: str,
) -> Dict[str, Any]:
    """Delete a position unless interviews reference it."""
    position = await IntegrityGuard(store).delete_position(position_id)

    log_audit_event(
        AuditAction.DELETE, ResourceType.POSITION, position.id,
        user_id=principal.id, details={"company_id": position.company_id},
    )
    return {}
