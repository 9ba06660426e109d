from pydantic import BaseModel, Field


class StandingEntryResponse(BaseModel):
    rank: int
    participant_id: int
    participant_name: str | None = None
    points: float
    played: int | None = None
    wins: int | None = None
    draws: int | None = None
    losses: int | None = None
    scored: int | None = None
    conceded: int | None = None
    diff: int | None = None
    metadata: dict = Field(default_factory=dict)


class StandingsResponse(BaseModel):
    competition_id: int
    season: str
    table: list[StandingEntryResponse] = []


class TeamTotalResponse(BaseModel):
    rank: int
    team: str
    points: float


class TeamTotalsResponse(BaseModel):
    competition_id: int
    season: str
    table: list[TeamTotalResponse] = []
