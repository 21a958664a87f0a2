"""Distinct skill and tag listings."""

from database.models.companies import Company
from database.models.positions import Position
from database.store import EntityStore


async def distinct_skills(store: EntityStore) -> list[str]:
    """Every skill named by any position, one casing per value."""
    return await store.aggregate_distinct(Position, "skills")


async def distinct_tags(store: EntityStore) -> list[str]:
    """Every tag on any company, one casing per value."""
    return await store.aggregate_distinct(Company, "tags")
