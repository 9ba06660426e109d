"""
League sync service.

Handles synchronization of competitions, teams, fixtures and standings for
round-robin league sports (football, basketball) from TheSportsDB.
"""
import logging
from dataclasses import replace
from typing import Any

from sqlalchemy import select

from app.models import Competition, Event, EventParticipant, Participant, Standing
from app.services.normalizer import MatchResult, SourceMeta, normalize_results
from app.services.sportsdb_client import SportsDbClient, get_sportsdb_client
from app.services.sports import LeagueConfig, SportConfig, get_sport_config
from app.services.standings import compute_standings, rounds_by_competition
from app.services.sync.base import (
    BaseSyncService,
    COMPETITION_KEY_FIELDS,
    EVENT_KEY_FIELDS,
    EVENT_PARTICIPANT_KEY_FIELDS,
    PARTICIPANT_KEY_FIELDS,
    STANDING_KEY_FIELDS,
)

logger = logging.getLogger(__name__)


class LeagueSyncService(BaseSyncService):
    """
    Service for syncing league sports.

    Order of operations (each step reads back the internal ids the next
    step references):
    1. Sport and competitions
    2. Teams -> participants
    3. Fixtures -> events and event participants
    4. Standings computed from the finished fixtures
    """

    def __init__(self, db, client: SportsDbClient | None = None):
        super().__init__(db, client or get_sportsdb_client())

    async def fetch_league_teams(self, league: LeagueConfig) -> list[dict[str, Any]]:
        """Fetch a league's teams as participant seeds (external id + name)."""
        teams = await self.client.search_all_teams(league.search_name)
        rows = []
        for team in teams:
            external_id = str(team.get("idTeam") or "").strip()
            name = str(team.get("strTeam") or "").strip()
            if not external_id or not name:
                continue
            rows.append({
                "external_id": external_id,
                "name": name,
                "short_name": team.get("strTeamShort") or None,
                "country": team.get("strCountry") or None,
            })
        logger.info(f"[{league.display_name}] {len(rows)} teams")
        return rows

    async def fetch_league_results(self, league: LeagueConfig, season: str) -> list[MatchResult]:
        """Fetch and normalize a league's fixtures, per round or per season."""
        if not league.rounds:
            raw = await self.client.events_by_season(league.external_id, season)
            source = SourceMeta(
                competition_id=league.external_id,
                competition_name=league.display_name,
                season=season,
            )
            return normalize_results(raw, source)

        results: list[MatchResult] = []
        for round_ in league.rounds:
            raw = await self.client.events_by_round(league.external_id, round_, season)
            source = SourceMeta(
                competition_id=league.external_id,
                competition_name=league.display_name,
                season=season,
                round=round_,
            )
            results.extend(normalize_results(raw, source))
        return results

    async def sync_sport(self, sport_key: str, season: str | None = None) -> dict[str, Any]:
        """
        Full sync of one league sport.

        Returns:
            Dict with counts for each entity type
        """
        config = get_sport_config(sport_key)
        season = season or config.season(None)
        logger.info(f"Starting {config.name} sync for {season}")

        sport_id = await self._upsert_sport(config.key, config.name)
        competition_ids = await self._sync_competitions(config, sport_id)

        teams: list[dict[str, Any]] = []
        results: list[MatchResult] = []
        for league in config.leagues:
            logger.info(f"Syncing teams for {league.display_name}...")
            teams.extend(await self.fetch_league_teams(league))
            logger.info(f"Syncing events for {league.display_name}...")
            results.extend(await self.fetch_league_results(league, season))

        participant_ids = await self._sync_participants(sport_id, teams, results)
        event_ids = await self._sync_events(sport_id, competition_ids, results, season)
        event_participants = await self._sync_event_participants(
            competition_ids, participant_ids, event_ids, results
        )
        standings = await self._sync_standings(
            config, competition_ids, participant_ids, results, season
        )

        summary = {
            "season": season,
            "competitions": len(competition_ids),
            "participants": len(participant_ids),
            "events": len(event_ids),
            "event_participants": event_participants,
            "standings": standings,
        }
        logger.info(f"{config.name} sync complete: {summary}")
        return summary

    async def _sync_competitions(self, config: SportConfig, sport_id: int) -> dict[str, int]:
        rows = [
            {
                "sport_id": sport_id,
                "external_id": league.external_id,
                "name": league.display_name,
                "country": None,
                "format": league.format,
            }
            for league in config.leagues
        ]
        await self._upsert(Competition, rows, COMPETITION_KEY_FIELDS)
        return await self._resolve_ids(
            Competition, sport_id, [league.external_id for league in config.leagues]
        )

    async def _sync_participants(
        self,
        sport_id: int,
        teams: list[dict[str, Any]],
        results: list[MatchResult],
    ) -> dict[str, int]:
        """Upsert teams; fixture sides missing from the team lists are added too."""
        by_external: dict[str, dict[str, Any]] = {}
        for result in results:
            for external_id, name in (
                (result.home_participant_id, result.home_participant_name),
                (result.away_participant_id, result.away_participant_name),
            ):
                if external_id not in by_external and name:
                    by_external[external_id] = {"external_id": external_id, "name": name}
        for team in teams:
            by_external[team["external_id"]] = team

        rows = [
            {
                "sport_id": sport_id,
                "external_id": team["external_id"],
                "name": team["name"],
                "participant_type": "team",
                "short_name": team.get("short_name"),
                "country": team.get("country"),
            }
            for team in by_external.values()
        ]
        await self._upsert(Participant, rows, PARTICIPANT_KEY_FIELDS)
        return await self._resolve_ids(Participant, sport_id, by_external)

    async def _sync_events(
        self,
        sport_id: int,
        competition_ids: dict[str, int],
        results: list[MatchResult],
        season: str,
    ) -> dict[tuple[int, str], int]:
        rows = []
        for result in results:
            competition_id = competition_ids.get(result.competition_id)
            if competition_id is None:
                continue
            rows.append({
                "sport_id": sport_id,
                "competition_id": competition_id,
                "external_id": result.external_id,
                "season": season,
                "round": str(result.round),
                "stage": None,
                "starts_at_utc": result.starts_at_utc,
                "venue": result.venue,
                "status": result.status,
                "metadata": {
                    "league_id": result.competition_id,
                    "league_name": result.competition_name,
                    "home_team_id": result.home_participant_id,
                    "away_team_id": result.away_participant_id,
                    "home_team": result.home_participant_name,
                    "away_team": result.away_participant_name,
                },
            })
        await self._upsert(Event, rows, EVENT_KEY_FIELDS)

        if not competition_ids:
            return {}
        stored = await self.db.execute(
            select(Event.competition_id, Event.external_id, Event.id).where(
                Event.season == season,
                Event.competition_id.in_(list(competition_ids.values())),
            )
        )
        return {(row[0], row[1]): row[2] for row in stored.all()}

    async def _sync_event_participants(
        self,
        competition_ids: dict[str, int],
        participant_ids: dict[str, int],
        event_ids: dict[tuple[int, str], int],
        results: list[MatchResult],
    ) -> int:
        rows = []
        for result in results:
            competition_id = competition_ids.get(result.competition_id)
            event_id = event_ids.get((competition_id, result.external_id))
            home_id = participant_ids.get(result.home_participant_id)
            away_id = participant_ids.get(result.away_participant_id)
            if event_id is None or home_id is None or away_id is None:
                continue

            home_outcome, away_outcome = result.outcomes
            rows.append({
                "event_id": event_id,
                "participant_id": home_id,
                "role": "home",
                "score": result.home_score,
                "result_position": None,
                "outcome": home_outcome,
                "metadata": {},
            })
            rows.append({
                "event_id": event_id,
                "participant_id": away_id,
                "role": "away",
                "score": result.away_score,
                "result_position": None,
                "outcome": away_outcome,
                "metadata": {},
            })
        return await self._upsert(EventParticipant, rows, EVENT_PARTICIPANT_KEY_FIELDS)

    async def _sync_standings(
        self,
        config: SportConfig,
        competition_ids: dict[str, int],
        participant_ids: dict[str, int],
        results: list[MatchResult],
        season: str,
    ) -> int:
        """Compute standings on internal ids and replace the stored season tables."""
        internal_results = []
        unmapped = 0
        for result in results:
            home_id = participant_ids.get(result.home_participant_id)
            away_id = participant_ids.get(result.away_participant_id)
            if home_id is None or away_id is None:
                unmapped += 1
                continue
            internal_results.append(replace(
                result,
                competition_id=competition_ids.get(result.competition_id),
                home_participant_id=home_id,
                away_participant_id=away_id,
            ))
        if unmapped:
            logger.warning(f"{unmapped} results reference unmapped participants, skipped")

        eligibility = rounds_by_competition({
            competition_ids[league.external_id]: league.standings_rounds
            for league in config.leagues
            if league.standings_rounds is not None and league.external_id in competition_ids
        })
        rows = compute_standings(
            internal_results,
            competition_ids.values(),
            eligibility_rule=eligibility,
            scoring_rule=config.scoring,
            season=season,
        )
        await self._replace_season(Standing, competition_ids.values(), season)
        return await self._upsert(
            Standing, [row.to_record() for row in rows], STANDING_KEY_FIELDS
        )
