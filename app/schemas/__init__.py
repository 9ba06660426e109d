from app.schemas.sport import (
    SportResponse,
    SportListResponse,
    CompetitionResponse,
    CompetitionListResponse,
)
from app.schemas.event import EventResponse, EventListResponse, EventParticipantResponse
from app.schemas.standings import (
    StandingEntryResponse,
    StandingsResponse,
    TeamTotalResponse,
    TeamTotalsResponse,
)
from app.schemas.sync import SyncResponse, SyncStatus

__all__ = [
    "SportResponse",
    "SportListResponse",
    "CompetitionResponse",
    "CompetitionListResponse",
    "EventResponse",
    "EventListResponse",
    "EventParticipantResponse",
    "StandingEntryResponse",
    "StandingsResponse",
    "TeamTotalResponse",
    "TeamTotalsResponse",
    "SyncResponse",
    "SyncStatus",
]
