"""Standings calculation: league table aggregation, scoring rules, team totals, stored tables."""

import logging
from collections.abc import Callable, Hashable, Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models import Standing
from app.services.normalizer import MatchResult

logger = logging.getLogger(__name__)

CompetitionId = Hashable
ParticipantId = Hashable
EligibilityRule = Callable[[CompetitionId, Any], bool]


# ==================== Scoring rules ====================

@dataclass(frozen=True)
class ScoringRule:
    """Points awarded for a win, a draw and a loss."""

    win: int = 3
    draw: int = 1
    loss: int = 0

    def __post_init__(self) -> None:
        if min(self.win, self.draw, self.loss) < 0:
            raise ValueError("Scoring rule points must be non-negative")

    def __call__(self, home_score: int, away_score: int) -> tuple[int, int]:
        """Return (home_points, away_points) for a final score."""
        if home_score > away_score:
            return self.win, self.loss
        if away_score > home_score:
            return self.loss, self.win
        return self.draw, self.draw


FOOTBALL_SCORING = ScoringRule(win=3, draw=1, loss=0)
WIN_ONLY_SCORING = ScoringRule(win=1, draw=0, loss=0)


# ==================== Eligibility rules ====================

def all_rounds(competition_id: CompetitionId, round_: Any) -> bool:
    """Every round counts toward standings."""
    return True


def rounds_by_competition(
    rounds: Mapping[CompetitionId, Iterable[Any]],
) -> EligibilityRule:
    """
    Count only the listed rounds for the listed competitions.

    Competitions missing from the mapping count every round. Rounds are
    compared as given and as strings, so "7" matches 7.
    """
    allowed = {
        competition_id: {str(r) for r in competition_rounds}
        for competition_id, competition_rounds in rounds.items()
    }

    def rule(competition_id: CompetitionId, round_: Any) -> bool:
        competition_rounds = allowed.get(competition_id)
        if competition_rounds is None:
            return True
        return str(round_) in competition_rounds

    return rule


def round_cutoff(max_round: int) -> EligibilityRule:
    """Count integer rounds up to and including max_round (partial season)."""

    def rule(competition_id: CompetitionId, round_: Any) -> bool:
        try:
            return int(round_) <= max_round
        except (TypeError, ValueError):
            return False

    return rule


# ==================== Table rows ====================

@dataclass
class StandingsRow:
    participant_id: ParticipantId
    competition_id: CompetitionId
    season: str
    team_name: str = ""
    rank: int = 0
    played: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    scored: int = 0
    conceded: int = 0
    points: int = 0
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def diff(self) -> int:
        return self.scored - self.conceded

    def sort_key(self) -> tuple:
        return (-self.points, -self.diff, -self.scored, self.team_name, str(self.participant_id))

    def to_record(self) -> dict[str, Any]:
        """Plain dict for the standings upsert."""
        return {
            "competition_id": self.competition_id,
            "season": self.season,
            "participant_id": self.participant_id,
            "rank": self.rank,
            "points": self.points,
            "played": self.played,
            "wins": self.wins,
            "draws": self.draws,
            "losses": self.losses,
            "scored": self.scored,
            "conceded": self.conceded,
            "diff": self.diff,
            "metadata": dict(self.metadata),
        }


def _is_countable(result: MatchResult) -> bool:
    if result.home_score is None or result.away_score is None:
        return False
    if result.home_participant_id in (None, "") or result.away_participant_id in (None, ""):
        return False
    return True


def compute_standings(
    results: Iterable[MatchResult],
    competition_ids: Iterable[CompetitionId],
    eligibility_rule: EligibilityRule = all_rounds,
    scoring_rule: ScoringRule = FOOTBALL_SCORING,
    season: str = "",
) -> list[StandingsRow]:
    """
    Build ranked standings tables from match results.

    Results are partitioned by competition; results for competitions outside
    ``competition_ids``, unplayed results and rounds rejected by
    ``eligibility_rule`` are skipped. Each participant is ranked by points,
    goal difference, goals scored and finally display name. Ranks are unique
    and start at 1 in every competition.
    """
    recognized = set(competition_ids)
    tables: dict[CompetitionId, dict[ParticipantId, StandingsRow]] = {}
    skipped_unmapped = 0

    for result in results:
        if result.competition_id not in recognized:
            skipped_unmapped += 1
            continue
        if not _is_countable(result):
            continue
        if not eligibility_rule(result.competition_id, result.round):
            continue

        table = tables.setdefault(result.competition_id, {})

        home = table.get(result.home_participant_id)
        if home is None:
            home = StandingsRow(
                participant_id=result.home_participant_id,
                competition_id=result.competition_id,
                season=season,
                team_name=result.home_participant_name or "",
            )
            table[result.home_participant_id] = home

        away = table.get(result.away_participant_id)
        if away is None:
            away = StandingsRow(
                participant_id=result.away_participant_id,
                competition_id=result.competition_id,
                season=season,
                team_name=result.away_participant_name or "",
            )
            table[result.away_participant_id] = away

        home_score = result.home_score
        away_score = result.away_score

        home.played += 1
        away.played += 1
        home.scored += home_score
        home.conceded += away_score
        away.scored += away_score
        away.conceded += home_score

        if home_score > away_score:
            home.wins += 1
            away.losses += 1
        elif away_score > home_score:
            away.wins += 1
            home.losses += 1
        else:
            home.draws += 1
            away.draws += 1

        home_points, away_points = scoring_rule(home_score, away_score)
        home.points += home_points
        away.points += away_points

    if skipped_unmapped:
        logger.info(f"Skipped {skipped_unmapped} results for unmapped competitions")

    rows: list[StandingsRow] = []
    for table in tables.values():
        ranked = sorted(table.values(), key=StandingsRow.sort_key)
        for position, row in enumerate(ranked, 1):
            row.rank = position
            row.metadata = {"team_name": row.team_name}
            rows.append(row)

    return rows


# ==================== Team totals (driver championships) ====================

@dataclass(frozen=True)
class TeamTotal:
    rank: int
    team: str
    points: float


def compute_team_totals(entries: Iterable[tuple[str | None, float | None]]) -> list[TeamTotal]:
    """
    Sum points per team label and rank teams by total, then label.

    Used for constructor-style tables derived from driver standings; entries
    without a team label are ignored.
    """
    totals: dict[str, float] = {}
    for team, points in entries:
        if not team:
            continue
        totals[team] = totals.get(team, 0) + (points or 0)

    ranked = sorted(totals.items(), key=lambda item: (-item[1], item[0]))
    return [
        TeamTotal(rank=position, team=team, points=points)
        for position, (team, points) in enumerate(ranked, 1)
    ]


# ==================== Stored tables ====================

async def read_standings(db: AsyncSession, competition_id: int, season: str) -> list[dict]:
    """Read stored standings for a competition season, ordered by rank."""
    query = (
        select(Standing)
        .where(Standing.competition_id == competition_id, Standing.season == season)
        .options(selectinload(Standing.participant))
        .order_by(Standing.rank)
    )
    result = await db.execute(query)
    entries = result.scalars().all()

    return [{
        "rank": e.rank,
        "participant_id": e.participant_id,
        "participant_name": e.participant.name if e.participant else (e.extra or {}).get("team_name"),
        "points": e.points,
        "played": e.played,
        "wins": e.wins,
        "draws": e.draws,
        "losses": e.losses,
        "scored": e.scored,
        "conceded": e.conceded,
        "diff": e.diff,
        "metadata": e.extra or {},
    } for e in entries]


async def read_team_totals(db: AsyncSession, competition_id: int, season: str) -> list[TeamTotal]:
    """Team totals from stored standings whose metadata carries a "team" label."""
    result = await db.execute(
        select(Standing.extra, Standing.points).where(
            Standing.competition_id == competition_id,
            Standing.season == season,
        )
    )
    return compute_team_totals(
        ((extra or {}).get("team"), points) for extra, points in result.all()
    )
