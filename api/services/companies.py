"""Company service functions."""

from typing import Any, Dict, List, Mapping
import logging

from api.services.integrity import IntegrityGuard
from core.exceptions import NotFound
from core.middleware.authentication import Principal
from core.security import AuditAction, ResourceType, log_audit_event
from core.utils.datetime import to_iso
from database.models.companies import Company
from database.store import EntityStore

logger = logging.getLogger(__name__)


def serialize_company(company: Company) -> Dict[str, Any]:
    return {
        "id": company.id,
        "name": company.name,
        "address": company.address,
        "website": company.website,
        "description": company.description,
        "phone": company.phone,
        "tags": list(company.tags or []),
        "logo": company.logo,
        "company_size": company.company_size,
        "overview": company.overview,
        "founded_year": company.founded_year,
        "created_at": to_iso(company.created_at) if company.created_at else None,
    }


async def list_companies(store: EntityStore) -> List[Dict[str, Any]]:
    """List all companies ordered by name."""
    companies = await store.find(Company, order_by=[Company.name, Company.id])
    return [serialize_company(company) for company in companies]


async def get_company(store: EntityStore, company_id: str) -> Dict[str, Any]:
    company = await store.find_by_id(Company, company_id)
    if not company:
        raise NotFound("company", company_id)
    return serialize_company(company)


async def create_company(
    store: EntityStore,
    principal: Principal,
    fields: Mapping[str, Any],
) -> Dict[str, Any]:
    """Create a company."""
    async with store.transaction():
        company = await store.create(Company, fields)

    log_audit_event(
        AuditAction.CREATE, ResourceType.COMPANY, company.id,
        user_id=principal.id, details={"name": company.name},
    )
    return serialize_company(company)


async def update_company(
    store: EntityStore,
    principal: Principal,
    company_id: str,
    fields: Mapping[str, Any],
) -> Dict[str, Any]:
    """Update a company; the merged record is validated as a whole."""
    async with store.transaction():
        company = await store.update(Company, company_id, fields)
        if not company:
            raise NotFound("company", company_id)

    log_audit_event(
        AuditAction.UPDATE, ResourceType.COMPANY, company.id,
        user_id=principal.id, details={"fields": sorted(fields)},
    )
    return serialize_company(company)


async def delete_company(
    store: EntityStore,
    principal: Principal,
    company_id: str,
) -> Dict[str, Any]:
    """Delete a company and its positions unless interviews reference it."""
    company = await IntegrityGuard(store).delete_company(company_id)

    log_audit_event(
        AuditAction.DELETE, ResourceType.COMPANY, company.id,
        user_id=principal.id, details={"name": company.name},
    )
    return {}
