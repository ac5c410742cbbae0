"""Test configuration and fixtures."""

import os
from datetime import datetime
from uuid import uuid4

# Set up test database URL before importing casematch
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("INTEREST_EVENTS_ENABLED", "false")

import pytest
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from casematch.models import Base, Attorney, Case, CaseInterest, Client, InterestStatus


@pytest.fixture
async def engine(tmp_path):
    """Fresh on-disk SQLite database per test."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'casematch.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory):
    """Provide a database session for async tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def make_attorney(db_session):
    async def _make_attorney(
        attorney_id=None,
        counties=("Orange",),
        zip_codes=None,
        areas=("Family Law",),
    ):
        attorney = Attorney(
            id=attorney_id or str(uuid4()),
            counties_subscribed=[{"name": name, "state": "CA"} for name in counties],
            zip_codes_subscribed=dict(zip_codes or {}),
            areas_of_practice=list(areas),
        )
        db_session.add(attorney)
        await db_session.commit()
        return attorney

    return _make_attorney


@pytest.fixture
def make_case(db_session):
    async def _make_case(
        legal_category="Family Law",
        county="Orange",
        zip="92618",
        enable_conflict_checks=False,
        created_at=None,
        **fields,
    ):
        client = Client(
            id=str(uuid4()),
            first_name="Jane",
            last_name="Doe",
            zip_code=zip,
        )
        case = Case(
            id=str(uuid4()),
            legal_category=legal_category,
            county=county,
            zip=zip,
            ai_generated_heading="Custody dispute",
            ai_generated_summary="Parent seeks modified custody arrangement.",
            questionnaire_responses={"children": 2, "married": False},
            client_case_summary="My ex moved out of state with our kids.",
            enable_conflict_checks=enable_conflict_checks,
            created_at=created_at or datetime.utcnow(),
            client=client,
            **fields,
        )
        db_session.add(case)
        await db_session.commit()
        return case

    return _make_case


@pytest.fixture
def make_interest(db_session):
    """Insert an interest row directly, bypassing the state machine."""
    async def _make_interest(attorney_id, case_id, status=InterestStatus.AWAITING_ATTORNEY_CONFLICT_CHECK):
        interest = CaseInterest(
            id=str(uuid4()),
            attorney_id=attorney_id,
            case_id=case_id,
            status=status,
            interest_expressed_at=datetime.utcnow(),
            updated_at=datetime.utcnow(),
        )
        db_session.add(interest)
        await db_session.commit()
        return interest

    return _make_interest
