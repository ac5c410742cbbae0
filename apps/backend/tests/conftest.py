import pytest
from datetime import datetime, timedelta
from unittest.mock import AsyncMock
from uuid import uuid4

import jwt
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from casematch import InterestEventPublisher
from casematch.models import Base, Attorney, Case, Client
from app.api.deps import get_event_publisher
from app.config import settings
from app.database import get_db
from app.main import app


@pytest.fixture
async def session_factory(tmp_path):
    """Session factory bound to a throwaway SQLite database."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'backend.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
def redis_client():
    return AsyncMock()


@pytest.fixture
async def client(session_factory, redis_client):
    """HTTP client against the app with the database and Redis swapped out."""
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_event_publisher] = lambda: InterestEventPublisher(redis_client)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


def make_token(attorney_id, expires_in=timedelta(minutes=15), secret=None):
    payload = {"sub": attorney_id, "exp": datetime.utcnow() + expires_in}
    return jwt.encode(payload, secret or settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


@pytest.fixture
def auth_headers():
    def _auth_headers(attorney_id):
        return {"Authorization": f"Bearer {make_token(attorney_id)}"}

    return _auth_headers


@pytest.fixture
def seed(session_factory):
    """Insert an attorney profile or a case with its client."""
    class Seeder:
        async def attorney(self, attorney_id, counties=("Orange",), areas=("Family Law",)):
            async with session_factory() as session:
                session.add(Attorney(
                    id=attorney_id,
                    counties_subscribed=[{"name": name, "state": "CA"} for name in counties],
                    zip_codes_subscribed={},
                    areas_of_practice=list(areas),
                ))
                await session.commit()

        async def case(self, legal_category="Family Law", county="Orange", enable_conflict_checks=False):
            case_id = str(uuid4())
            async with session_factory() as session:
                session.add(Case(
                    id=case_id,
                    legal_category=legal_category,
                    county=county,
                    zip="92618",
                    ai_generated_heading="Custody dispute",
                    ai_generated_summary="Parent seeks modified custody arrangement.",
                    questionnaire_responses={"children": 2},
                    client_case_summary="My ex moved out of state with our kids.",
                    enable_conflict_checks=enable_conflict_checks,
                    client=Client(id=str(uuid4()), first_name="Jane", last_name="Doe", zip_code="92618"),
                ))
                await session.commit()
            return case_id

    return Seeder()
