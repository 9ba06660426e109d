import pytest
from typing import AsyncGenerator
from datetime import datetime, timezone

from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.database import Base
from app.api.deps import get_db  # Import from where routes actually use it
from app.models import Sport, Competition, Participant, Event, EventParticipant, Standing


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# Make PostgreSQL types work with SQLite
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.dialects.postgresql import JSONB

@compiles(JSONB, "sqlite")
def compile_jsonb_sqlite(type_, compiler, **kw):
    return "JSON"


@pytest.fixture(scope="function")
async def test_engine():
    """Create test database engine."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture(scope="function")
async def test_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async_session = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    async with async_session() as session:
        yield session


@pytest.fixture(scope="function")
async def client(test_session) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with overridden database dependency."""

    async def override_get_db():
        yield test_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


# --- Data Fixtures ---

@pytest.fixture
async def sample_sport(test_session) -> Sport:
    """Create a sample sport."""
    sport = Sport(id=1, key="football", name="Football")
    test_session.add(sport)
    await test_session.commit()
    await test_session.refresh(sport)
    return sport


@pytest.fixture
async def sample_competition(test_session, sample_sport) -> Competition:
    """Create a sample competition."""
    competition = Competition(
        id=10,
        sport_id=sample_sport.id,
        external_id="4328",
        name="Premier League",
        format="league",
    )
    test_session.add(competition)
    await test_session.commit()
    await test_session.refresh(competition)
    return competition


@pytest.fixture
async def sample_participants(test_session, sample_sport) -> list[Participant]:
    """Create sample teams."""
    participants = [
        Participant(id=101, sport_id=sample_sport.id, external_id="133604", name="Arsenal"),
        Participant(id=102, sport_id=sample_sport.id, external_id="133610", name="Chelsea"),
        Participant(id=103, sport_id=sample_sport.id, external_id="133602", name="Liverpool"),
    ]
    test_session.add_all(participants)
    await test_session.commit()
    return participants


@pytest.fixture
async def sample_event(test_session, sample_sport, sample_competition, sample_participants) -> Event:
    """Create a finished fixture with both sides."""
    event = Event(
        id=1000,
        sport_id=sample_sport.id,
        competition_id=sample_competition.id,
        external_id="2267073",
        season="2025-2026",
        round="1",
        starts_at_utc=datetime(2025, 8, 16, 14, 0, tzinfo=timezone.utc),
        venue="Emirates Stadium",
        status="finished",
        extra={"home_team": "Arsenal", "away_team": "Chelsea"},
    )
    test_session.add(event)
    test_session.add_all([
        EventParticipant(
            event_id=1000, participant_id=101, role="home", score=2, outcome="win", extra={}
        ),
        EventParticipant(
            event_id=1000, participant_id=102, role="away", score=1, outcome="loss", extra={}
        ),
    ])
    await test_session.commit()
    await test_session.refresh(event)
    return event


@pytest.fixture
async def sample_standings(test_session, sample_competition, sample_participants) -> list[Standing]:
    """Create a stored standings table."""
    rows = [
        Standing(
            competition_id=sample_competition.id,
            season="2025-2026",
            participant_id=101,
            rank=1,
            points=3,
            played=1,
            wins=1,
            draws=0,
            losses=0,
            scored=2,
            conceded=1,
            diff=1,
            extra={"team_name": "Arsenal"},
        ),
        Standing(
            competition_id=sample_competition.id,
            season="2025-2026",
            participant_id=102,
            rank=2,
            points=0,
            played=1,
            wins=0,
            draws=0,
            losses=1,
            scored=1,
            conceded=2,
            diff=-1,
            extra={"team_name": "Chelsea"},
        ),
    ]
    test_session.add_all(rows)
    await test_session.commit()
    return rows
