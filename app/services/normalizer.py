"""
Match result normalization.

Converts raw provider match records (TheSportsDB-style ``intHomeScore`` /
``strHomeTeam`` keys by default) into canonical ``MatchResult`` records.
"""
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from app.utils.date_helpers import to_utc_datetime
from app.utils.numbers import parse_int, parse_score

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FieldMap:
    """Provider keys for the fields the normalizer extracts."""

    external_id: str = "idEvent"
    league_id: str = "idLeague"
    round: str = "intRound"
    date: str = "dateEvent"
    time: str = "strTime"
    venue: str = "strVenue"
    home_id: str = "idHomeTeam"
    away_id: str = "idAwayTeam"
    home_name: str = "strHomeTeam"
    away_name: str = "strAwayTeam"
    home_score: str = "intHomeScore"
    away_score: str = "intAwayScore"


SPORTSDB_FIELDS = FieldMap()


@dataclass(frozen=True)
class SourceMeta:
    """Where a batch of raw records came from."""

    competition_id: str
    season: str
    competition_name: str | None = None
    round: int | str | None = None  # Set when records were fetched per round
    fields: FieldMap = SPORTSDB_FIELDS


@dataclass(frozen=True)
class MatchResult:
    competition_id: Any
    round: int | str
    home_participant_id: Any
    away_participant_id: Any
    home_score: int | None = None
    away_score: int | None = None
    home_participant_name: str = ""
    away_participant_name: str = ""
    external_id: str | None = None
    season: str | None = None
    starts_at_utc: datetime | None = None
    venue: str | None = None
    competition_name: str | None = None

    @property
    def is_played(self) -> bool:
        return self.home_score is not None and self.away_score is not None

    @property
    def status(self) -> str:
        return "finished" if self.is_played else "scheduled"

    @property
    def outcomes(self) -> tuple[str | None, str | None]:
        """(home, away) outcome labels: win/loss/draw, or None when unplayed."""
        if not self.is_played:
            return None, None
        if self.home_score > self.away_score:
            return "win", "loss"
        if self.home_score < self.away_score:
            return "loss", "win"
        return "draw", "draw"


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _parse_round(value: Any) -> int | str:
    number = parse_int(value)
    if number is not None:
        return number
    text = _text(value)
    return text or 0


def normalize_record(raw: Mapping[str, Any], source: SourceMeta) -> MatchResult | None:
    """Normalize one raw record; None when it lacks identifying fields."""
    fields = source.fields

    external_id = _text(raw.get(fields.external_id))
    if not external_id:
        logger.debug(f"Dropping record without {fields.external_id}: {raw!r}")
        return None

    league_id = _text(raw.get(fields.league_id))
    if league_id and league_id != str(source.competition_id):
        logger.debug(f"Dropping event {external_id}: league {league_id} != {source.competition_id}")
        return None

    starts_at = to_utc_datetime(raw.get(fields.date), raw.get(fields.time))
    if starts_at is None:
        logger.debug(f"Dropping event {external_id}: missing or invalid date")
        return None

    home_id = _text(raw.get(fields.home_id))
    away_id = _text(raw.get(fields.away_id))
    if not home_id or not away_id:
        logger.debug(f"Dropping event {external_id}: missing participant id")
        return None

    if source.round is not None:
        round_ = source.round
    else:
        round_ = _parse_round(raw.get(fields.round))

    return MatchResult(
        competition_id=source.competition_id,
        round=round_,
        home_participant_id=home_id,
        away_participant_id=away_id,
        home_score=parse_score(raw.get(fields.home_score)),
        away_score=parse_score(raw.get(fields.away_score)),
        home_participant_name=_text(raw.get(fields.home_name)),
        away_participant_name=_text(raw.get(fields.away_name)),
        external_id=external_id,
        season=source.season,
        starts_at_utc=starts_at,
        venue=_text(raw.get(fields.venue)) or None,
        competition_name=source.competition_name,
    )


def normalize_results(raw_records: Iterable[Mapping[str, Any]], source: SourceMeta) -> list[MatchResult]:
    """
    Normalize a batch of raw match records.

    Records missing an external id, a date or either participant id are
    dropped; records without a usable score are kept (unplayed fixtures).

    Raises:
        TypeError: if raw_records is not an iterable collection of records
    """
    if raw_records is None or isinstance(raw_records, (str, bytes, Mapping)):
        raise TypeError(f"Expected an iterable of records, got {type(raw_records).__name__}")
    try:
        records = iter(raw_records)
    except TypeError as e:
        raise TypeError(f"Expected an iterable of records, got {type(raw_records).__name__}") from e

    results: list[MatchResult] = []
    dropped = 0
    for raw in records:
        if not isinstance(raw, Mapping):
            logger.debug(f"Dropping non-mapping record: {raw!r}")
            dropped += 1
            continue
        result = normalize_record(raw, source)
        if result is None:
            dropped += 1
            continue
        results.append(result)

    label = source.competition_name or source.competition_id
    if source.round is not None:
        logger.info(f"[{label}] round {source.round}: {len(results)} events ({dropped} dropped)")
    else:
        logger.info(f"[{label}] {len(results)} events ({dropped} dropped)")
    return results
