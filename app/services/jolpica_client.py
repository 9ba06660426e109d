from typing import Any

from app.config import get_settings
from app.services.upstream_client import UpstreamClient

settings = get_settings()


class JolpicaClient(UpstreamClient):
    """Client for the Jolpica (Ergast-compatible) Formula 1 API."""

    name = "Jolpica"

    def __init__(self, **kwargs: Any):
        super().__init__(settings.jolpica_base_url, **kwargs)

    async def _mrdata(self, path: str) -> dict[str, Any]:
        data = await self.get_json(path)
        return (data or {}).get("MRData") or {}

    async def get_drivers(self, season: str) -> list[dict[str, Any]]:
        data = await self._mrdata(f"/{season}/drivers.json")
        return (data.get("DriverTable") or {}).get("Drivers") or []

    async def get_races(self, season: str) -> list[dict[str, Any]]:
        data = await self._mrdata(f"/{season}/races.json")
        return (data.get("RaceTable") or {}).get("Races") or []

    async def get_constructors(self, season: str) -> list[dict[str, Any]]:
        data = await self._mrdata(f"/{season}/constructors.json")
        return (data.get("ConstructorTable") or {}).get("Constructors") or []

    async def get_driver_standings(self, season: str) -> dict[str, Any]:
        """Latest driver standings list: {"round": ..., "DriverStandings": [...]}"""
        data = await self._mrdata(f"/{season}/driverStandings.json")
        lists = (data.get("StandingsTable") or {}).get("StandingsLists") or []
        return lists[0] if lists else {}


_jolpica_client: JolpicaClient | None = None


def get_jolpica_client() -> JolpicaClient:
    """Get singleton Jolpica client instance."""
    global _jolpica_client
    if _jolpica_client is None:
        _jolpica_client = JolpicaClient()
    return _jolpica_client
