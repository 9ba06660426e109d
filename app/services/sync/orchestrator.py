"""
Sync orchestrator service.

Dispatches sync runs to the service responsible for each sport.
"""
import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.services.jolpica_client import JolpicaClient
from app.services.sportsdb_client import SportsDbClient
from app.services.sports import F1_SPORT_KEY, LEAGUE_SPORTS, SPORT_KEYS
from app.services.sync.f1_sync import F1SyncService
from app.services.sync.league_sync import LeagueSyncService

logger = logging.getLogger(__name__)


class SyncOrchestrator:
    """
    Orchestrates sync operations across all sync services.

    League sports (football, basketball) go through LeagueSyncService,
    Formula 1 through F1SyncService. A provider or database failure
    propagates and aborts the run for that sport.
    """

    def __init__(
        self,
        db: AsyncSession,
        sportsdb_client: SportsDbClient | None = None,
        jolpica_client: JolpicaClient | None = None,
    ):
        """
        Initialize the orchestrator with all sync services.

        Args:
            db: SQLAlchemy async session
            sportsdb_client: Optional TheSportsDB client (uses singleton if not provided)
            jolpica_client: Optional Jolpica client (uses singleton if not provided)
        """
        self.db = db
        self.league = LeagueSyncService(db, sportsdb_client)
        self.f1 = F1SyncService(db, jolpica_client)

    async def sync(self, sport_key: str, season: str | None = None) -> dict[str, Any]:
        """
        Run a full sync for one sport.

        Args:
            sport_key: "football", "basketball" or "f1"
            season: Season label; defaults to the sport's current season

        Returns:
            Dict with counts for each entity type
        """
        if sport_key == F1_SPORT_KEY:
            return await self.f1.sync_season(season)
        if sport_key in LEAGUE_SPORTS:
            return await self.league.sync_sport(sport_key, season)
        raise ValueError(f"Unknown sport: {sport_key}. Expected one of {', '.join(SPORT_KEYS)}")

    async def sync_all(self, sport_keys: list[str] | None = None) -> dict[str, dict[str, Any]]:
        """Sync several sports in order; the first failure aborts the rest."""
        results = {}
        for sport_key in sport_keys or SPORT_KEYS:
            results[sport_key] = await self.sync(sport_key)
        return results
