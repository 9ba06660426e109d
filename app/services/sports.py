"""Sport and league definitions used by the sync services."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone

from app.config import get_settings
from app.services.standings import FOOTBALL_SCORING, WIN_ONLY_SCORING, ScoringRule


@dataclass(frozen=True)
class LeagueConfig:
    external_id: str  # Provider league id
    search_name: str  # Provider name for team search
    display_name: str
    format: str = "league"
    # Rounds to fetch one by one; empty means fetch the whole season at once
    rounds: tuple[int, ...] = ()
    # Rounds counted toward the table; None means every fetched round counts
    standings_rounds: tuple[int, ...] | None = None


@dataclass(frozen=True)
class SportConfig:
    key: str
    name: str
    scoring: ScoringRule
    season: Callable[[datetime | None], str]
    leagues: tuple[LeagueConfig, ...] = field(default_factory=tuple)


def football_season(now: datetime | None = None) -> str:
    return get_settings().football_season


def split_year_season(now: datetime | None = None, rollover_month: int = 7) -> str:
    """Season label like "2025-2026"; a new season starts in ``rollover_month``."""
    now = now or datetime.now(timezone.utc)
    start_year = now.year if now.month >= rollover_month else now.year - 1
    return f"{start_year}-{start_year + 1}"


def calendar_year_season(now: datetime | None = None) -> str:
    settings = get_settings()
    if settings.f1_season:
        return settings.f1_season
    now = now or datetime.now(timezone.utc)
    return str(now.year)


FOOTBALL = SportConfig(
    key="football",
    name="Football",
    scoring=FOOTBALL_SCORING,
    season=football_season,
    leagues=(
        LeagueConfig(
            external_id="4328",
            search_name="English Premier League",
            display_name="Premier League",
            rounds=tuple(range(1, 39)),
        ),
        # League phase (1-8) plus the knockout play-off round (32), which
        # is a calendar entry but does not count toward the table.
        LeagueConfig(
            external_id="4480",
            search_name="UEFA Champions League",
            display_name="Champions League",
            rounds=tuple(range(1, 9)) + (32,),
            standings_rounds=tuple(range(1, 9)),
        ),
    ),
)

BASKETBALL = SportConfig(
    key="basketball",
    name="Basketball",
    scoring=WIN_ONLY_SCORING,
    season=split_year_season,
    leagues=(
        LeagueConfig(external_id="4387", search_name="NBA", display_name="NBA"),
    ),
)

F1_SPORT_KEY = "f1"

LEAGUE_SPORTS: dict[str, SportConfig] = {
    FOOTBALL.key: FOOTBALL,
    BASKETBALL.key: BASKETBALL,
}

SPORT_KEYS = (*LEAGUE_SPORTS, F1_SPORT_KEY)


def get_sport_config(sport_key: str) -> SportConfig:
    try:
        return LEAGUE_SPORTS[sport_key]
    except KeyError:
        raise ValueError(f"Unknown league sport: {sport_key}") from None
