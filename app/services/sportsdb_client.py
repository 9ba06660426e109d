import logging
from typing import Any

from app.config import get_settings
from app.services.upstream_client import UpstreamClient

settings = get_settings()
logger = logging.getLogger(__name__)


class SportsDbClient(UpstreamClient):
    """Client for TheSportsDB v1 JSON API (https://www.thesportsdb.com)"""

    name = "TheSportsDB"

    def __init__(
        self,
        api_key: str | None = None,
        request_delay: float | None = None,
        **kwargs: Any,
    ):
        key = api_key or settings.sportsdb_api_key
        super().__init__(
            f"{settings.sportsdb_base_url.rstrip('/')}/{key}",
            request_delay=(
                settings.sportsdb_request_delay_seconds if request_delay is None else request_delay
            ),
            **kwargs,
        )

    async def search_all_teams(self, league_name: str) -> list[dict[str, Any]]:
        """Get all teams of a league by its provider search name."""
        data = await self.get_json("/search_all_teams.php", params={"l": league_name})
        return (data or {}).get("teams") or []

    async def events_by_round(self, league_id: str, round_: int, season: str) -> list[dict[str, Any]]:
        """Get events of one league round (matchday)."""
        data = await self.get_json(
            "/eventsround.php", params={"id": league_id, "r": round_, "s": season}
        )
        return (data or {}).get("events") or []

    async def events_by_season(self, league_id: str, season: str) -> list[dict[str, Any]]:
        """Get all events of a league season."""
        data = await self.get_json("/eventsseason.php", params={"id": league_id, "s": season})
        return (data or {}).get("events") or []


_sportsdb_client: SportsDbClient | None = None


def get_sportsdb_client() -> SportsDbClient:
    """Get singleton TheSportsDB client instance."""
    global _sportsdb_client
    if _sportsdb_client is None:
        _sportsdb_client = SportsDbClient()
    return _sportsdb_client
