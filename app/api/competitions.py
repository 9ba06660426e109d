"""Competition endpoints: calendar events, standings table, team totals."""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.api.deps import get_db
from app.models import Competition, Event, EventParticipant
from app.schemas.event import EventListResponse, EventParticipantResponse, EventResponse
from app.schemas.standings import (
    StandingEntryResponse,
    StandingsResponse,
    TeamTotalResponse,
    TeamTotalsResponse,
)
from app.services.standings import read_standings, read_team_totals

router = APIRouter(prefix="/competitions", tags=["competitions"])


async def _ensure_competition_or_404(db: AsyncSession, competition_id: int) -> Competition:
    competition = await db.get(Competition, competition_id)
    if competition is None:
        raise HTTPException(status_code=404, detail="Competition not found")
    return competition


@router.get("/{competition_id}/events", response_model=EventListResponse)
async def get_competition_events(
    competition_id: int,
    season: str = Query(..., description="Season label, e.g. 2025-2026"),
    db: AsyncSession = Depends(get_db),
):
    """Get a competition's calendar for a season, ordered by start time."""
    await _ensure_competition_or_404(db, competition_id)

    result = await db.execute(
        select(Event)
        .where(Event.competition_id == competition_id, Event.season == season)
        .options(selectinload(Event.participants).selectinload(EventParticipant.participant))
        .order_by(Event.starts_at_utc, Event.id)
    )
    events = result.scalars().all()

    items = [
        EventResponse(
            id=e.id,
            competition_id=e.competition_id,
            external_id=e.external_id,
            season=e.season,
            round=e.round,
            stage=e.stage,
            starts_at_utc=e.starts_at_utc,
            venue=e.venue,
            status=e.status,
            metadata=e.extra or {},
            participants=[
                EventParticipantResponse(
                    participant_id=ep.participant_id,
                    name=ep.participant.name if ep.participant else None,
                    role=ep.role,
                    score=ep.score,
                    outcome=ep.outcome,
                )
                for ep in sorted(e.participants, key=lambda ep: ep.role != "home")
            ],
        )
        for e in events
    ]
    return EventListResponse(
        competition_id=competition_id, season=season, items=items, total=len(items)
    )


@router.get("/{competition_id}/standings", response_model=StandingsResponse)
async def get_competition_standings(
    competition_id: int,
    season: str = Query(..., description="Season label, e.g. 2025-2026"),
    db: AsyncSession = Depends(get_db),
):
    """
    Get the standings table for a competition season.

    A season without stored standings returns an empty table.
    """
    await _ensure_competition_or_404(db, competition_id)
    table = await read_standings(db, competition_id, season)
    return StandingsResponse(
        competition_id=competition_id,
        season=season,
        table=[StandingEntryResponse(**entry) for entry in table],
    )


@router.get("/{competition_id}/standings/teams", response_model=TeamTotalsResponse)
async def get_competition_team_totals(
    competition_id: int,
    season: str = Query(..., description="Season label, e.g. 2025"),
    db: AsyncSession = Depends(get_db),
):
    """Get team (constructor) totals summed from driver standings."""
    await _ensure_competition_or_404(db, competition_id)
    totals = await read_team_totals(db, competition_id, season)
    return TeamTotalsResponse(
        competition_id=competition_id,
        season=season,
        table=[TeamTotalResponse(rank=t.rank, team=t.team, points=t.points) for t in totals],
    )
