from datetime import datetime

from pydantic import BaseModel, Field


class EventParticipantResponse(BaseModel):
    participant_id: int
    name: str | None = None
    role: str
    score: int | None = None
    outcome: str | None = None


class EventResponse(BaseModel):
    id: int
    competition_id: int
    external_id: str | None = None
    season: str
    round: str | None = None
    stage: str | None = None
    starts_at_utc: datetime
    venue: str | None = None
    status: str | None = None
    metadata: dict = Field(default_factory=dict)
    participants: list[EventParticipantResponse] = []


class EventListResponse(BaseModel):
    competition_id: int
    season: str
    items: list[EventResponse]
    total: int
