"""
Interview booking rules.

A booking is admitted only after, in order: the company exists, the position
exists and belongs to that company, the date lies inside the position's
booking window, and a non-admin caller is under their interview quota.
Existence checks run first so a bad id never surfaces as a window error.
"""

import logging
from datetime import datetime
from typing import Any, Mapping, Optional

from core.config import settings
from core.exceptions import (
    InvalidReference,
    NotFound,
    OutOfWindow,
    QuotaExceeded,
    ValidationError,
    Violation,
)
from core.middleware.authentication import Principal
from core.utils.datetime import ensure_utc, is_within, to_iso
from database.models.companies import Company
from database.models.interviews import Interview
from database.models.positions import Position
from database.models.users import User
from database.store import EntityStore

logger = logging.getLogger(__name__)

INVALID_POSITION_MESSAGE = "Invalid position or it does not belong to the company"
BOOKINGS_OUTSIDE_WINDOW_MESSAGE = (
    "Interview window must include the {count} interview(s) already booked for this position"
)


class BookingValidator:
    """Validates and persists interview bookings against one store."""

    def __init__(self, store: EntityStore, max_interviews_per_user: Optional[int] = None):
        self.store = store
        self.max_interviews_per_user = (
            max_interviews_per_user
            if max_interviews_per_user is not None
            else settings.max_interviews_per_user
        )

    async def book(
        self,
        principal: Principal,
        company_id: str,
        payload: Mapping[str, Any],
    ) -> Interview:
        """
        Admit and persist a new interview for the caller.

        The company always comes from ``company_id``; any company value in
        ``payload`` is ignored.

        Raises:
            NotFound: Company does not exist
            InvalidReference: Position missing or owned by another company
            ValidationError: No interview date given
            OutOfWindow: Date outside the position's booking window
            QuotaExceeded: Non-admin caller already holds the maximum
        """
        interview_date = ensure_utc(payload.get("interview_date"))

        async with self.store.transaction():
            company = await self.store.find_by_id(Company, company_id)
            if not company:
                raise NotFound("company", company_id)

            position = await self._owned_position(payload.get("position_id"), company.id)
            if interview_date is None:
                raise ValidationError([
                    Violation("interview_date", "required", "Please add Interview Date")
                ])
            self._check_window(position, interview_date)

            if not principal.is_admin:
                # Serializes concurrent bookings by the same user until commit
                await self.store.lock(User, principal.id)
                held = await self.store.count(Interview, user_id=principal.id)
                if held >= self.max_interviews_per_user:
                    logger.info(f"Booking quota reached for user {principal.id} ({held} interviews)")
                    raise QuotaExceeded(
                        f"User {principal.email} has already made "
                        f"{self.max_interviews_per_user} interviews"
                    )

            interview = await self.store.create(Interview, {
                "user_id": principal.id,
                "company_id": company.id,
                "position_id": position.id,
                "interview_date": interview_date,
            })

        logger.info(f"Interview {interview.id} booked by user {principal.id} for position {position.id}")
        return interview

    async def reschedule(self, interview: Interview, changes: Mapping[str, Any]) -> Interview:
        """
        Apply a position or date change to an existing interview.

        The ownership and window checks are repeated whenever either value
        changes. The quota is not, since the number of interviews stays the same.
        """
        position_id = changes.get("position_id") or interview.position_id
        interview_date = ensure_utc(changes.get("interview_date") or interview.interview_date)

        async with self.store.transaction():
            if position_id != interview.position_id or interview_date != ensure_utc(interview.interview_date):
                position = await self._owned_position(position_id, interview.company_id)
                self._check_window(position, interview_date)

            updated = await self.store.update(Interview, interview.id, {
                "position_id": position_id,
                "interview_date": interview_date,
            })
            if not updated:
                raise NotFound("interview", interview.id)

        logger.info(f"Interview {updated.id} rescheduled to {to_iso(interview_date)}")
        return updated

    async def check_window_covers_bookings(self, position: Position) -> None:
        """
        Refuse a booking window that leaves booked interviews outside it.

        Raises:
            OutOfWindow: An interview of the position falls outside its window
        """
        booked = await self.store.find(Interview, position_id=position.id)
        outside = [
            interview for interview in booked
            if not is_within(interview.interview_date, position.interview_start, position.interview_end)
        ]
        if outside:
            logger.info(f"Window change of position {position.id} would strand {len(outside)} interviews")
            raise OutOfWindow(BOOKINGS_OUTSIDE_WINDOW_MESSAGE.format(count=len(outside)))

    async def _owned_position(self, position_id: Any, company_id: str) -> Position:
        position = await self.store.find_by_id(Position, position_id)
        if not position or position.company_id != company_id:
            raise InvalidReference(INVALID_POSITION_MESSAGE)
        return position

    @staticmethod
    def _check_window(position: Position, interview_date: Optional[datetime]) -> None:
        if interview_date is None or not is_within(
            interview_date, position.interview_start, position.interview_end
        ):
            raise OutOfWindow(
                f"Interview date must be between {to_iso(position.interview_start)} "
                f"and {to_iso(position.interview_end)}"
            )
