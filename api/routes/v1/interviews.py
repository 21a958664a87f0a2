"""
Interview booking and management endpoints.

Users book, list, reschedule and cancel their own interviews. Admins can
act on every interview.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Path, Query, status

from api.dependencies import get_store
from api.schemas.common import envelope
from api.schemas.interviews import InterviewCreate, InterviewUpdate
from api.services import interviews as interview_service
from core.exceptions import ValidationError, Violation
from core.middleware.authentication import Principal, get_current_principal
from database.store import EntityStore

router = APIRouter(prefix="/interviews", tags=["interviews"])


@router.get(
    "",
    summary="List Interviews",
    description=(
        "List interviews soonest first. Users see their own; admins see all, "
        "or one company's when company_id is given."
    ),
)
async def list_interviews(
    company_id: Optional[str] = Query(None, description="Filter by company (admins only)"),
    principal: Principal = Depends(get_current_principal),
    store: EntityStore = Depends(get_store),
):
    return envelope(await interview_service.list_interviews(store, principal, company_id=company_id))


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Book Interview",
    description="Book an interview; the company is taken from the request body.",
)
async def book_interview(
    request: InterviewCreate,
    principal: Principal = Depends(get_current_principal),
    store: EntityStore = Depends(get_store),
):
    if not request.company:
        raise ValidationError([Violation("company", "required", "Please add the company")])
    return envelope(
        await interview_service.create_interview(store, principal, request.company, request.to_fields())
    )


@router.get(
    "/{interview_id}",
    summary="Get Interview",
    description="Get one interview. Only its owner or an admin may read it.",
)
async def get_interview(
    interview_id: str = Path(..., description="Interview ID"),
    principal: Principal = Depends(get_current_principal),
    store: EntityStore = Depends(get_store),
):
    return envelope(await interview_service.get_interview(store, principal, interview_id))


@router.put(
    "/{interview_id}",
    summary="Reschedule Interview",
    description=(
        "Change the date or position of an interview. The booking window is "
        "checked again. Only its owner or an admin may update it."
    ),
)
async def update_interview(
    request: InterviewUpdate,
    interview_id: str = Path(..., description="Interview ID"),
    principal: Principal = Depends(get_current_principal),
    store: EntityStore = Depends(get_store),
):
    return envelope(
        await interview_service.update_interview(store, principal, interview_id, request.to_fields())
    )


@router.delete(
    "/{interview_id}",
    summary="Cancel Interview",
    description="Delete an interview. Only its owner or an admin may delete it.",
)
async def delete_interview(
    interview_id: str = Path(..., description="Interview ID"),
    principal: Principal = Depends(get_current_principal),
    store: EntityStore = Depends(get_store),
):
    return envelope(await interview_service.delete_interview(store, principal, interview_id))
