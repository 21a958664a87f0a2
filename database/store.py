"""
Entity store over an async SQLAlchemy session.

One store wraps one session and is created per request. Components receive
the store explicitly; nothing here is a process-wide singleton. Every write
path runs the entity's validator from ``database.validation``, so create and
update enforce exactly the same rules.
"""

import functools
import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, AsyncIterator, Awaitable, Callable, Mapping, Optional, Sequence, TypeVar

from sqlalchemy import select, delete, func, inspect
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.exceptions import StoreFailure, ValidationError, Violation
from core.utils.datetime import ensure_utc
from database.models.companies import Company
from database.models.users import User
from database.validation import validate

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Fields that must be unique per kind, checked before hitting the constraint
UNIQUE_FIELDS: dict[type, tuple[str, ...]] = {
    Company: ("name",),
    User: ("email",),
}

# Fields the store always owns
PROTECTED_FIELDS = frozenset({"id", "created_at"})


def _store_operation(func_: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[Any]]:
    """Translate driver errors into the domain taxonomy."""

    @functools.wraps(func_)
    async def wrapper(*args, **kwargs):
        try:
            return await func_(*args, **kwargs)
        except IntegrityError as exc:
            logger.warning(f"Integrity error in store.{func_.__name__}: {type(exc.orig).__name__}")
            raise ValidationError([
                Violation("record", "integrity", "Database integrity constraint violated")
            ]) from exc
        except SQLAlchemyError as exc:
            logger.error(f"Store failure in store.{func_.__name__}", exc_info=True)
            raise StoreFailure() from exc

    return wrapper


def column_names(kind: type) -> list[str]:
    """Mapped column attribute names for a model class."""
    return [attr.key for attr in inspect(kind).column_attrs]


def _normalize(value: Any) -> Any:
    if isinstance(value, datetime):
        return ensure_utc(value)
    return value


class EntityStore:
    """
    Persistence for Company, Position, Interview and User records.

    Writes are flushed, not committed. Wrap a logical operation in
    ``transaction()`` to commit it as a unit.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    # ==================== Reads ==================== #

    @_store_operation
    async def find_by_id(self, kind: type[T], entity_id: Any) -> Optional[T]:
        if not isinstance(entity_id, str) or not entity_id:
            return None
        return await self.session.get(kind, entity_id)

    @_store_operation
    async def find(
        self,
        kind: type[T],
        order_by: Any = None,
        **filters: Any,
    ) -> list[T]:
        query = select(kind).where(*self._criteria(kind, filters))
        if order_by is not None:
            if isinstance(order_by, (list, tuple)):
                query = query.order_by(*order_by)
            else:
                query = query.order_by(order_by)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    @_store_operation
    async def count(self, kind: type, **filters: Any) -> int:
        query = select(func.count()).select_from(kind).where(*self._criteria(kind, filters))
        result = await self.session.execute(query)
        return result.scalar() or 0

    async def exists(self, kind: type, **filters: Any) -> bool:
        return await self.count(kind, **filters) > 0

    @_store_operation
    async def lock(self, kind: type[T], entity_id: Any) -> Optional[T]:
        """Load a row with ``SELECT ... FOR UPDATE`` for the rest of the transaction."""
        result = await self.session.execute(
            select(kind).where(kind.id == entity_id).with_for_update()
        )
        return result.scalar_one_or_none()

    @_store_operation
    async def aggregate_distinct(self, kind: type, field: str) -> list[str]:
        """
        Distinct string values of ``field`` across all records.

        List-valued fields are flattened. Values are deduplicated
        case-insensitively, keeping the first casing seen in insertion order,
        and returned sorted case-insensitively.
        """
        column = getattr(kind, field)
        result = await self.session.execute(
            select(column).order_by(kind.created_at, kind.id)
        )

        seen: dict[str, str] = {}
        for value in result.scalars().all():
            values = value if isinstance(value, list) else [value]
            for item in values:
                if not isinstance(item, str) or not item:
                    continue
                seen.setdefault(item.casefold(), item)

        return sorted(seen.values(), key=lambda item: (item.casefold(), item))

    # ==================== Writes ==================== #

    @_store_operation
    async def create(self, kind: type[T], fields: Mapping[str, Any]) -> T:
        values = self._clean(kind, fields)
        await self._check(kind, values)

        entity = kind(**values)
        self.session.add(entity)
        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    @_store_operation
    async def update(self, kind: type[T], entity_id: Any, fields: Mapping[str, Any]) -> Optional[T]:
        entity = await self.find_by_id(kind, entity_id)
        if entity is None:
            return None

        changes = self._clean(kind, fields)
        merged = {name: getattr(entity, name) for name in column_names(kind)}
        merged.update(changes)
        await self._check(kind, merged, exclude_id=entity.id)

        for name, value in changes.items():
            setattr(entity, name, value)
        await self.session.flush()
        return entity

    @_store_operation
    async def delete_by_id(self, kind: type, entity_id: Any) -> bool:
        if not isinstance(entity_id, str) or not entity_id:
            return False
        result = await self.session.execute(delete(kind).where(kind.id == entity_id))
        return (result.rowcount or 0) > 0

    @_store_operation
    async def delete_many(self, kind: type, **filters: Any) -> int:
        if not filters:
            raise ValueError("delete_many requires at least one filter")
        result = await self.session.execute(
            delete(kind).where(*self._criteria(kind, filters))
        )
        return result.rowcount or 0

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator["EntityStore"]:
        """Commit everything done inside the block, or roll all of it back."""
        try:
            yield self
            await self._commit()
        except Exception:
            await self.session.rollback()
            raise

    @_store_operation
    async def _commit(self) -> None:
        await self.session.commit()

    # ==================== Helpers ==================== #

    @staticmethod
    def _criteria(kind: type, filters: Mapping[str, Any]) -> Sequence[Any]:
        return [getattr(kind, name) == _normalize(value) for name, value in filters.items()]

    @staticmethod
    def _clean(kind: type, fields: Mapping[str, Any]) -> dict[str, Any]:
        allowed = set(column_names(kind)) - PROTECTED_FIELDS
        return {
            name: _normalize(value)
            for name, value in fields.items()
            if name in allowed
        }

    async def _check(self, kind: type, values: Mapping[str, Any], exclude_id: Optional[str] = None) -> None:
        violations = validate(kind, values)
        for field in UNIQUE_FIELDS.get(kind, ()):
            value = values.get(field)
            if value is None:
                continue
            query = select(kind.id).where(getattr(kind, field) == value)
            if exclude_id is not None:
                query = query.where(kind.id != exclude_id)
            result = await self.session.execute(query.limit(1))
            if result.scalar_one_or_none() is not None:
                violations.append(Violation(
                    field, "unique", f"A {kind.__name__.lower()} with this {field} already exists"
                ))
        if violations:
            raise ValidationError(violations)
