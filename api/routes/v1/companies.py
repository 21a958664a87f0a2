"""
Company endpoints.

Also hosts the company-scoped position and interview collections.
"""

from fastapi import APIRouter, Depends, Path, status

from api.dependencies import get_store
from api.schemas.common import envelope
from api.schemas.companies import CompanyCreate, CompanyUpdate
from api.schemas.interviews import InterviewCreate
from api.schemas.positions import PositionCreate
from api.services import aggregation, companies as company_service
from api.services import interviews as interview_service
from api.services import positions as position_service
from core.middleware.authentication import Principal, get_current_principal
from core.middleware.authorization import Permission, require_permission
from database.store import EntityStore

router = APIRouter(prefix="/companies", tags=["companies"])


@router.get(
    "",
    summary="List Companies",
    description="List all companies ordered by name. Public.",
)
async def list_companies(store: EntityStore = Depends(get_store)):
    return envelope(await company_service.list_companies(store))


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create Company",
    description="Create a company. Requires company:create permission.",
)
async def create_company(
    request: CompanyCreate,
    principal: Principal = Depends(require_permission(Permission.COMPANY_CREATE)),
    store: EntityStore = Depends(get_store),
):
    fields = request.model_dump(exclude_none=True)
    return envelope(await company_service.create_company(store, principal, fields))


@router.get(
    "/tags",
    summary="List Company Tags",
    description="Distinct tags across all companies, case-insensitively deduplicated and sorted.",
)
async def list_tags(store: EntityStore = Depends(get_store)):
    return envelope(await aggregation.distinct_tags(store))


@router.get(
    "/{company_id}",
    summary="Get Company",
    description="Get a single company. Public.",
)
async def get_company(
    company_id: str = Path(..., description="Company ID"),
    store: EntityStore = Depends(get_store),
):
    return envelope(await company_service.get_company(store, company_id))


@router.put(
    "/{company_id}",
    summary="Update Company",
    description="Update a company. Requires company:update permission.",
)
async def update_company(
    request: CompanyUpdate,
    company_id: str = Path(..., description="Company ID"),
    principal: Principal = Depends(require_permission(Permission.COMPANY_UPDATE)),
    store: EntityStore = Depends(get_store),
):
    fields = request.model_dump(exclude_unset=True)
    return envelope(await company_service.update_company(store, principal, company_id, fields))


@router.delete(
    "/{company_id}",
    summary="Delete Company",
    description=(
        "Delete a company and its positions. Refused while any interview "
        "references the company. Requires company:delete permission."
    ),
)
async def delete_company(
    company_id: str = Path(..., description="Company ID"),
    principal: Principal = Depends(require_permission(Permission.COMPANY_DELETE)),
    store: EntityStore = Depends(get_store),
):
    return envelope(await company_service.delete_company(store, principal, company_id))


@router.get(
    "/{company_id}/positions",
    summary="List Company Positions",
    description="List the positions of one company ordered by title. Public.",
)
async def list_company_positions(
    company_id: str = Path(..., description="Company ID"),
    store: EntityStore = Depends(get_store),
):
    return envelope(await position_service.list_positions(store, company_id=company_id))


@router.post(
    "/{company_id}/positions",
    status_code=status.HTTP_201_CREATED,
    summary="Create Position",
    description="Create a position under an existing company. Requires position:create permission.",
)
async def create_position(
    request: PositionCreate,
    company_id: str = Path(..., description="Company ID"),
    principal: Principal = Depends(require_permission(Permission.POSITION_CREATE)),
    store: EntityStore = Depends(get_store),
):
    return envelope(
        await position_service.create_position(store, principal, company_id, request.to_fields())
    )


@router.get(
    "/{company_id}/interviews",
    summary="List Company Interviews",
    description=(
        "Admins see every interview of the company. Other users see only "
        "their own interviews."
    ),
)
async def list_company_interviews(
    company_id: str = Path(..., description="Company ID"),
    principal: Principal = Depends(get_current_principal),
    store: EntityStore = Depends(get_store),
):
    return envelope(await interview_service.list_interviews(store, principal, company_id=company_id))


@router.post(
    "/{company_id}/interviews",
    status_code=status.HTTP_201_CREATED,
    summary="Book Interview",
    description=(
        "Book an interview for the caller. The date must fall inside the "
        "position's booking window and non-admin users may hold at most "
        "MAX_INTERVIEWS_PER_USER interviews."
    ),
)
async def book_interview(
    request: InterviewCreate,
    company_id: str = Path(..., description="Company ID"),
    principal: Principal = Depends(get_current_principal),
    store: EntityStore = Depends(get_store),
):
    return envelope(
        await interview_service.create_interview(store, principal, company_id, request.to_fields())
    )
