"""
Tests for the entity store.

Tests:
- Lookup, find, count and exists
- Create and update run the same validation
- Unique fields
- Bulk and single deletes
- Distinct aggregation
- Transactions and driver error translation
"""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from core.exceptions import StoreFailure, ValidationError
from database.models import Company, Interview, Position, User
from database.store import EntityStore, column_names


class TestReads:
    """Test lookups and predicates."""

    @pytest.mark.asyncio
    async def test_find_by_id(self, store, seeded):
        company = await store.find_by_id(Company, seeded["company"].id)
        assert company.name == "Acme Corp"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("bad_id", ["missing", "", None, 42])
    async def test_malformed_or_unknown_id_is_not_found(self, store, seeded, bad_id):
        assert await store.find_by_id(Company, bad_id) is None

    @pytest.mark.asyncio
    async def test_find_with_filters_and_order(self, store, seeded, position_fields, window_start, window_end):
        company_id = seeded["company"].id
        async with store.transaction():
            await store.create(Position, position_fields(company_id, window_start, window_end, title="Analyst"))

        positions = await store.find(Position, order_by=Position.title, company_id=company_id)
        assert [p.title for p in positions] == ["Analyst", "Backend Engineer"]

        assert await store.find(Position, company_id="nobody") == []

    @pytest.mark.asyncio
    async def test_count_and_exists(self, store, seeded):
        assert await store.count(User) == 3
        assert await store.count(User, role="admin") == 1
        assert await store.exists(Company, name="Acme Corp")
        assert not await store.exists(Interview, user_id=seeded["user"].id)


class TestWrites:
    """Test create, update and delete."""

    @pytest.mark.asyncio
    async def test_create_assigns_id_and_defaults(self, store, seeded, company_fields):
        async with store.transaction():
            company = await store.create(Company, company_fields(name="Globex", tags=None))

        assert len(company.id) == 32
        assert company.created_at is not None

    @pytest.mark.asyncio
    async def test_create_ignores_unknown_and_protected_keys(self, store, seeded, company_fields):
        async with store.transaction():
            company = await store.create(Company, company_fields(name="Initech", id="forced", colour="red"))

        assert company.id != "forced"
        assert not hasattr(company, "colour")

    @pytest.mark.asyncio
    async def test_create_rejects_invalid_record(self, store, seeded, company_fields):
        with pytest.raises(ValidationError) as exc_info:
            await store.create(Company, company_fields(name="Hooli", founded_year=1700))

        assert exc_info.value.violations[0].message == "Year must be later than 1800"
        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_create_rejects_duplicate_name(self, store, seeded, company_fields):
        with pytest.raises(ValidationError) as exc_info:
            await store.create(Company, company_fields())

        assert exc_info.value.violations[0].constraint == "unique"

    @pytest.mark.asyncio
    async def test_update_validates_merged_record(self, store, seeded, window_start):
        position_id = seeded["position"].id

        with pytest.raises(ValidationError) as exc_info:
            await store.update(Position, position_id, {"interview_end": window_start})

        assert exc_info.value.violations[0].message == "Interview end date must be after the start date"

    @pytest.mark.asyncio
    async def test_update_rejects_salary_inversion(self, store, seeded):
        with pytest.raises(ValidationError):
            await store.update(Position, seeded["position"].id, {"salary_max": 10})

    @pytest.mark.asyncio
    async def test_update_applies_changes(self, store, seeded):
        async with store.transaction():
            company = await store.update(Company, seeded["company"].id, {"tags": ["Retail"]})

        assert company.tags == ["Retail"]

    @pytest.mark.asyncio
    async def test_update_keeps_own_unique_value(self, store, seeded):
        async with store.transaction():
            company = await store.update(Company, seeded["company"].id, {"name": "Acme Corp"})

        assert company.name == "Acme Corp"

    @pytest.mark.asyncio
    async def test_update_missing_returns_none(self, store, seeded):
        assert await store.update(Company, "missing", {"name": "X"}) is None

    @pytest.mark.asyncio
    async def test_delete_by_id(self, store, seeded, fresh_store):
        async with store.transaction():
            assert await store.delete_by_id(Position, seeded["position"].id) is True
            assert await store.delete_by_id(Position, seeded["position"].id) is False

        async with fresh_store() as check:
            assert await check.find_by_id(Position, seeded["position"].id) is None

    @pytest.mark.asyncio
    async def test_delete_many_counts_and_is_idempotent(self, store, seeded):
        company_id = seeded["company"].id
        async with store.transaction():
            assert await store.delete_many(Position, company_id=company_id) == 1
            assert await store.delete_many(Position, company_id=company_id) == 0

    @pytest.mark.asyncio
    async def test_delete_many_requires_filter(self, store, seeded):
        with pytest.raises(ValueError):
            await store.delete_many(Position)


class TestAggregateDistinct:
    """Test case-insensitive distinct aggregation."""

    @pytest.mark.asyncio
    async def test_first_casing_kept_and_sorted(self, store, seeded, position_fields, window_start, window_end):
        company_id = seeded["company"].id
        async with store.transaction():
            await store.create(Position, position_fields(
                company_id, window_start, window_end, title="Data", skills=["python", "Airflow", "sql"],
            ))
            await store.create(Position, position_fields(
                company_id, window_start, window_end, title="Ops", skills=["AIRFLOW", "bash", ""],
            ))

        skills = await store.aggregate_distinct(Position, "skills")
        assert skills == ["Airflow", "bash", "Python", "SQL"]

    @pytest.mark.asyncio
    async def test_empty_collection(self, store):
        assert await store.aggregate_distinct(Company, "tags") == []


class TestTransactions:
    """Test commit, rollback and error translation."""

    @pytest.mark.asyncio
    async def test_rollback_on_error(self, store, seeded, fresh_store, company_fields):
        with pytest.raises(RuntimeError):
            async with store.transaction():
                await store.create(Company, company_fields(name="Vandelay"))
                raise RuntimeError("boom")

        async with fresh_store() as check:
            assert not await check.exists(Company, name="Vandelay")

    @pytest.mark.asyncio
    async def test_driver_errors_become_store_failures(self):
        session = AsyncMock()
        session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("connection lost"))
        store = EntityStore(session)

        with pytest.raises(StoreFailure) as exc_info:
            await store.count(Company)

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "A database error occurred"

    @pytest.mark.asyncio
    async def test_integrity_error_at_commit_is_a_validation_error(self):
        session = AsyncMock()
        session.commit.side_effect = IntegrityError(
            "INSERT INTO companies", {}, Exception("UNIQUE constraint failed: companies.name"),
        )
        store = EntityStore(session)

        with pytest.raises(ValidationError) as exc_info:
            async with store.transaction():
                pass

        assert exc_info.value.status_code == 400
        assert exc_info.value.violations[0].constraint == "integrity"
        session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_driver_error_at_commit_is_a_store_failure(self):
        session = AsyncMock()
        session.commit.side_effect = OperationalError("COMMIT", {}, Exception("connection lost"))
        store = EntityStore(session)

        with pytest.raises(StoreFailure):
            async with store.transaction():
                pass

        session.rollback.assert_awaited_once()

    def test_column_names(self):
        assert "interview_date" in column_names(Interview)
        assert "positions" not in column_names(Company)
