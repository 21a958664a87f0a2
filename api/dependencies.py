"""FastAPI dependencies for dependency injection."""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from database.engine import get_db
from database.store import EntityStore


async def get_store(db: AsyncSession = Depends(get_db)) -> EntityStore:
    """Entity store bound to this request's session."""
    return EntityStore(db)
