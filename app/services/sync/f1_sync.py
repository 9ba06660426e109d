"""
Formula 1 sync service.

Handles synchronization of drivers, constructors, race-weekend sessions and
driver standings from the Jolpica (Ergast-compatible) API.
"""
import logging
from datetime import datetime
from typing import Any

from app.models import Competition, Event, Participant, Standing
from app.services.jolpica_client import JolpicaClient, get_jolpica_client
from app.services.sports import F1_SPORT_KEY, calendar_year_season
from app.services.sync.base import (
    BaseSyncService,
    COMPETITION_KEY_FIELDS,
    EVENT_KEY_FIELDS,
    PARTICIPANT_KEY_FIELDS,
    STANDING_KEY_FIELDS,
)
from app.utils.date_helpers import to_utc_datetime, utcnow
from app.utils.numbers import parse_int, to_finite_float

logger = logging.getLogger(__name__)

COMPETITION_EXTERNAL_ID = "f1-wdc"
COMPETITION_NAME = "Formula 1 World Championship"

# (payload key, stage, title suffix)
F1_SESSIONS = (
    ("FirstPractice", "practice-1", "Practice 1"),
    ("SecondPractice", "practice-2", "Practice 2"),
    ("ThirdPractice", "practice-3", "Practice 3"),
    ("SprintQualifying", "sprint-qualifying", "Sprint Qualifying"),
    ("Sprint", "sprint", "Sprint"),
    ("Qualifying", "qualifying", "Qualifying"),
    ("Race", "race", None),
)


def build_race_sessions(race: dict[str, Any]) -> list[dict[str, Any]]:
    """Sessions of one race weekend that have a parseable start time."""
    race_name = race.get("raceName") or f"Round {race.get('round')}"
    sessions = []
    for key, stage, suffix in F1_SESSIONS:
        raw = {"date": race.get("date"), "time": race.get("time")} if key == "Race" else race.get(key)
        if not isinstance(raw, dict):
            continue
        starts_at = to_utc_datetime(raw.get("date"), raw.get("time"))
        if starts_at is None:
            continue
        sessions.append({
            "session_type": key,
            "stage": stage,
            "title": f"{race_name} - {suffix}" if suffix else race_name,
            "starts_at_utc": starts_at,
        })
    return sessions


class F1SyncService(BaseSyncService):
    """
    Service for syncing a Formula 1 season.

    Events and standings of the synced season are replaced rather than
    merged, because session ids are derived from round numbers that can
    move when the calendar changes.
    """

    def __init__(self, db, client: JolpicaClient | None = None):
        super().__init__(db, client or get_jolpica_client())

    async def sync_season(self, season: str | None = None, now: datetime | None = None) -> dict[str, Any]:
        """
        Sync drivers, constructors, sessions and driver standings for a season.

        Returns:
            Dict with counts for each entity type
        """
        season = season or calendar_year_season()
        now = now or utcnow()
        logger.info(f"Starting F1 sync for {season}")

        drivers = await self.client.get_drivers(season)
        races = await self.client.get_races(season)
        standings_list = await self.client.get_driver_standings(season)
        constructors = await self.client.get_constructors(season)

        sport_id = await self._upsert_sport(F1_SPORT_KEY, "Formula 1")
        await self._upsert(
            Competition,
            [{
                "sport_id": sport_id,
                "external_id": COMPETITION_EXTERNAL_ID,
                "name": COMPETITION_NAME,
                "country": None,
                "format": "season",
            }],
            COMPETITION_KEY_FIELDS,
        )
        competition_id = (
            await self._resolve_ids(Competition, sport_id, [COMPETITION_EXTERNAL_ID])
        )[COMPETITION_EXTERNAL_ID]

        driver_rows = self._driver_rows(sport_id, drivers)
        constructor_rows = self._constructor_rows(sport_id, constructors)
        await self._upsert(Participant, driver_rows, PARTICIPANT_KEY_FIELDS)
        await self._upsert(Participant, constructor_rows, PARTICIPANT_KEY_FIELDS)
        driver_ids = await self._resolve_ids(
            Participant, sport_id, [row["external_id"] for row in driver_rows]
        )

        events = self._event_rows(sport_id, competition_id, season, races, now)
        await self._replace_season(Event, [competition_id], season)
        await self._upsert(Event, events, EVENT_KEY_FIELDS)

        standings = self._standing_rows(competition_id, season, standings_list, driver_ids)
        await self._replace_season(Standing, [competition_id], season)
        await self._upsert(Standing, standings, STANDING_KEY_FIELDS)

        summary = {
            "season": season,
            "drivers": len(driver_rows),
            "constructors": len(constructor_rows),
            "events": len(events),
            "standings": len(standings),
        }
        logger.info(f"F1 sync complete: {summary}")
        return summary

    @staticmethod
    def _driver_rows(sport_id: int, drivers: list[dict[str, Any]]) -> list[dict[str, Any]]:
        rows = []
        for driver in drivers:
            external_id = driver.get("driverId")
            if not external_id:
                continue
            full_name = f"{driver.get('givenName') or ''} {driver.get('familyName') or ''}".strip()
            rows.append({
                "sport_id": sport_id,
                "external_id": external_id,
                "name": full_name or external_id,
                "participant_type": "driver",
                "short_name": driver.get("code"),
                "country": driver.get("nationality"),
            })
        return rows

    @staticmethod
    def _constructor_rows(sport_id: int, constructors: list[dict[str, Any]]) -> list[dict[str, Any]]:
        return [
            {
                "sport_id": sport_id,
                "external_id": constructor["constructorId"],
                "name": constructor.get("name") or constructor["constructorId"],
                "participant_type": "constructor",
                "short_name": None,
                "country": constructor.get("nationality"),
            }
            for constructor in constructors
            if constructor.get("constructorId")
        ]

    @staticmethod
    def _event_rows(
        sport_id: int,
        competition_id: int,
        season: str,
        races: list[dict[str, Any]],
        now: datetime,
    ) -> list[dict[str, Any]]:
        rows = []
        for race in races:
            circuit = race.get("Circuit") or {}
            location = circuit.get("Location") or {}
            for session in build_race_sessions(race):
                rows.append({
                    "sport_id": sport_id,
                    "competition_id": competition_id,
                    "external_id": f"{season}-round-{race.get('round')}-{session['session_type'].lower()}",
                    "season": season,
                    "round": str(race.get("round") or ""),
                    "stage": session["stage"],
                    "starts_at_utc": session["starts_at_utc"],
                    "venue": circuit.get("circuitName") or location.get("locality"),
                    "status": "finished" if session["starts_at_utc"] < now else "scheduled",
                    "metadata": {
                        "title": session["title"],
                        "session_type": session["session_type"],
                        "country": location.get("country"),
                        "locality": location.get("locality"),
                    },
                })
        return rows

    @staticmethod
    def _standing_rows(
        competition_id: int,
        season: str,
        standings_list: dict[str, Any],
        driver_ids: dict[str, int],
    ) -> list[dict[str, Any]]:
        played = parse_int(standings_list.get("round"))
        rows = []
        for standing in standings_list.get("DriverStandings") or []:
            driver_id = (standing.get("Driver") or {}).get("driverId")
            participant_id = driver_ids.get(driver_id)
            if participant_id is None:
                logger.warning(f"F1 standings: unmapped driver {driver_id!r}, skipped")
                continue
            constructors = standing.get("Constructors") or [{}]
            rows.append({
                "competition_id": competition_id,
                "season": season,
                "participant_id": participant_id,
                "rank": parse_int(standing.get("position")) or 0,
                "points": to_finite_float(standing.get("points")) or 0,
                "played": played,
                "wins": parse_int(standing.get("wins")) or 0,
                "draws": None,
                "losses": None,
                "scored": None,
                "conceded": None,
                "diff": None,
                "metadata": {"team": constructors[0].get("name")},
            })
        return rows
