"""Shared fixtures and utilities for tests."""

import os
from contextlib import asynccontextmanager

# Settings and the application engine are built at import time
os.environ["APP_ENV"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["JWT_SECRET_KEY"] = "test-jwt-secret-key-min-32-chars-long-for-security"
os.environ["JWT_ALGORITHM"] = "HS256"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "60"
os.environ["MAX_INTERVIEWS_PER_USER"] = "3"
os.environ["JSON_LOGS"] = "true"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import database.models  # noqa: F401
from core.middleware.authentication import Principal
from core.security import create_access_token
from core.utils.datetime import add_days, now
from database.engine import Base, get_db
from database.models import Company, Interview, Position, User, UserRole
from database.store import EntityStore


@pytest_asyncio.fixture
async def engine():
    """In-memory database shared by every session of one test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def store(session_factory):
    async with session_factory() as session:
        yield EntityStore(session)


@pytest.fixture
def fresh_store(session_factory):
    """Store on a new session, for reading state written by another one."""
    @asynccontextmanager
    async def factory():
        async with session_factory() as session:
            yield EntityStore(session)
    return factory


@pytest.fixture
def window_start():
    """Day+1 at a fixed time so ISO bounds are predictable."""
    return add_days(now(), 1).replace(hour=9, minute=0, second=0, microsecond=0)


@pytest.fixture
def window_end(window_start):
    return add_days(window_start, 3)


def _company_fields(**overrides):
    fields = {
        "name": "Acme Corp",
        "address": "1 Main Street, Springfield",
        "website": "https://acme.example.com",
        "description": "Makes everything",
        "phone": "+1 555 010 2000",
        "tags": ["Manufacturing", "Tools"],
        "company_size": "51-200 employees",
        "founded_year": 1999,
    }
    fields.update(overrides)
    return fields


def _position_fields(company_id, start, end, **overrides):
    fields = {
        "title": "Backend Engineer",
        "description": "Build APIs",
        "responsibilities": ["Design services"],
        "requirements": ["3 years of Python"],
        "skills": ["Python", "SQL"],
        "opening_positions": 2,
        "salary_min": 50000,
        "salary_max": 90000,
        "work_arrangement": "Hybrid",
        "location": "Springfield",
        "company_id": company_id,
        "interview_start": start,
        "interview_end": end,
    }
    fields.update(overrides)
    return fields


@pytest_asyncio.fixture
async def seeded(store, window_start, window_end):
    """Users, one company and one position, committed."""
    async with store.transaction():
        admin = await store.create(User, {
            "name": "Ada Admin", "email": "admin@example.com", "role": UserRole.ADMIN.value,
        })
        user = await store.create(User, {
            "name": "Uma User", "email": "user@example.com", "role": UserRole.USER.value,
        })
        other = await store.create(User, {
            "name": "Otto Other", "email": "other@example.com", "role": UserRole.USER.value,
        })
        company = await store.create(Company, _company_fields())
        position = await store.create(Position, _position_fields(company.id, window_start, window_end))

    return {
        "admin": admin,
        "user": user,
        "other": other,
        "company": company,
        "position": position,
    }


@pytest.fixture
def admin(seeded):
    return Principal.from_user(seeded["admin"])


@pytest.fixture
def user(seeded):
    return Principal.from_user(seeded["user"])


@pytest.fixture
def other(seeded):
    return Principal.from_user(seeded["other"])


async def _add_interview(store, user_id, company_id, position_id, when):
    """Insert an interview directly, bypassing the booking rules."""
    async with store.transaction():
        return await store.create(Interview, {
            "user_id": user_id,
            "company_id": company_id,
            "position_id": position_id,
            "interview_date": when,
        })


def _auth_headers(principal):
    return {"Authorization": f"Bearer {create_access_token(principal.id, principal.role)}"}


@pytest_asyncio.fixture
async def client(session_factory):
    """HTTP client against the app with its sessions bound to the test database."""
    from api.main import app

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def company_fields():
    return _company_fields


@pytest.fixture
def position_fields():
    return _position_fields


@pytest.fixture
def add_interview():
    return _add_interview


@pytest.fixture
def auth_headers():
    return _auth_headers
