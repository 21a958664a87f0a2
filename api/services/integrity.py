"""
Referential integrity for deletes along Company -> Position -> Interview.

A company or position referenced by any interview cannot be deleted.
Otherwise dependents are removed before their parent, inside one transaction.
"""

import logging

from core.exceptions import HasDependents, NotFound
from database.models.companies import Company
from database.models.interviews import Interview
from database.models.positions import Position
from database.store import EntityStore

logger = logging.getLogger(__name__)

COMPANY_HAS_INTERVIEWS = (
    "Cannot delete company. There are active interviews associated with this company."
)
POSITION_HAS_INTERVIEWS = (
    "Cannot delete position. There are active interviews associated with this position."
)


class IntegrityGuard:
    """Admits deletions that leave no dangling references."""

    def __init__(self, store: EntityStore):
        self.store = store

    async def delete_company(self, company_id: str) -> Company:
        """
        Delete a company and its positions.

        Raises:
            NotFound: Company does not exist
            HasDependents: Interviews still reference the company
        """
        async with self.store.transaction():
            company = await self.store.find_by_id(Company, company_id)
            if not company:
                raise NotFound("company", company_id)

            if await self.store.exists(Interview, company_id=company.id):
                logger.info(f"Delete of company {company.id} blocked by interviews")
                raise HasDependents(COMPANY_HAS_INTERVIEWS)

            positions = await self.store.delete_many(Position, company_id=company.id)
            await self.store.delete_by_id(Company, company.id)

        logger.info(f"Company {company.id} deleted with {positions} positions")
        return company

    async def delete_position(self, position_id: str) -> Position:
        """
        Delete a position.

        Raises:
            NotFound: Position does not exist
            HasDependents: Interviews still reference the position
        """
        async with self.store.transaction():
            position = await self.store.find_by_id(Position, position_id)
            if not position:
                raise NotFound("position", position_id)

            if await self.store.exists(Interview, position_id=position.id):
                logger.info(f"Delete of position {position.id} blocked by interviews")
                raise HasDependents(POSITION_HAS_INTERVIEWS)

            # Children before parent; matches nothing while the check above holds
            await self.store.delete_many(Interview, position_id=position.id)
            await self.store.delete_by_id(Position, position.id)

        logger.info(f"Position {position.id} deleted")
        return position
