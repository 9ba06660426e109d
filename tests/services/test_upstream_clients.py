from unittest.mock import AsyncMock, Mock, patch

import httpx
import pytest

from app.services.jolpica_client import JolpicaClient
from app.services.sportsdb_client import SportsDbClient
from app.services.upstream_client import UpstreamClient, UpstreamFetchError


def _response(payload=None, status_code=200):
    request = httpx.Request("GET", "https://example.com/test")
    response = Mock()
    response.status_code = status_code
    response.json = Mock(return_value=payload)
    if status_code >= 400:
        error_response = httpx.Response(status_code, request=request)
        response.raise_for_status = Mock(
            side_effect=httpx.HTTPStatusError("error", request=request, response=error_response)
        )
    else:
        response.raise_for_status = Mock()
    return response


@pytest.mark.asyncio
class TestUpstreamClientRequest:
    async def test_get_json_returns_payload(self):
        with patch(
            "app.services.upstream_client.httpx.AsyncClient.request",
            new=AsyncMock(return_value=_response({"events": []})),
        ) as request_mock:
            client = UpstreamClient("https://example.com/api/")
            data = await client.get_json("/events.php", params={"id": "1"})

        assert data == {"events": []}
        args, kwargs = request_mock.call_args
        assert args == ("GET", "https://example.com/api/events.php")
        assert kwargs["params"] == {"id": "1"}

    async def test_non_2xx_raises_fetch_error(self):
        with patch(
            "app.services.upstream_client.httpx.AsyncClient.request",
            new=AsyncMock(return_value=_response(status_code=429)),
        ):
            client = UpstreamClient("https://example.com")
            with pytest.raises(UpstreamFetchError) as exc_info:
                await client.get_json("/events.php")

        assert exc_info.value.status_code == 429
        assert exc_info.value.url == "https://example.com/events.php"

    async def test_network_error_raises_fetch_error_without_retry_by_default(self):
        request_mock = AsyncMock(side_effect=httpx.ConnectError("refused"))

        with patch("app.services.upstream_client.httpx.AsyncClient.request", new=request_mock):
            client = UpstreamClient("https://example.com", retry_attempts=1)
            with pytest.raises(UpstreamFetchError):
                await client.get_json("/events.php")

        assert request_mock.await_count == 1

    async def test_retry_on_transient_network_error_when_enabled(self):
        response = _response({"ok": True})
        request_mock = AsyncMock(side_effect=[httpx.ConnectTimeout("timeout"), response])

        with patch("app.services.upstream_client.httpx.AsyncClient.request", new=request_mock):
            client = UpstreamClient("https://example.com", retry_attempts=2)
            result = await client._make_request("get", "https://example.com/test")

        assert result is response
        assert request_mock.await_count == 2

    async def test_invalid_json_raises_fetch_error(self):
        response = _response()
        response.json = Mock(side_effect=ValueError("no json"))

        with patch(
            "app.services.upstream_client.httpx.AsyncClient.request",
            new=AsyncMock(return_value=response),
        ):
            client = UpstreamClient("https://example.com")
            with pytest.raises(UpstreamFetchError):
                await client.get_json("/events.php")

    async def test_delay_applied_after_success_and_failure(self):
        request_mock = AsyncMock(side_effect=[_response({}), _response(status_code=500)])
        sleep_mock = AsyncMock()

        with patch("app.services.upstream_client.httpx.AsyncClient.request", new=request_mock), \
                patch("app.services.upstream_client.asyncio.sleep", new=sleep_mock):
            client = UpstreamClient("https://example.com", request_delay=2.5, retry_attempts=1)
            await client.get_json("/a")
            with pytest.raises(UpstreamFetchError):
                await client.get_json("/b")

        assert sleep_mock.await_count == 2
        sleep_mock.assert_awaited_with(2.5)


@pytest.mark.asyncio
class TestProviderClients:
    async def test_sportsdb_events_by_round(self):
        client = SportsDbClient(api_key="123", request_delay=0)
        client.get_json = AsyncMock(return_value={"events": [{"idEvent": "1"}]})

        events = await client.events_by_round("4328", 5, "2025-2026")

        assert events == [{"idEvent": "1"}]
        client.get_json.assert_awaited_once_with(
            "/eventsround.php", params={"id": "4328", "r": 5, "s": "2025-2026"}
        )
        assert client.base_url.endswith("/123")

    async def test_sportsdb_null_events_become_empty_list(self):
        client = SportsDbClient(request_delay=0)
        client.get_json = AsyncMock(return_value={"events": None})

        assert await client.events_by_season("4387", "2025-2026") == []

    async def test_sportsdb_search_all_teams(self):
        client = SportsDbClient(request_delay=0)
        client.get_json = AsyncMock(return_value={"teams": [{"idTeam": "133604"}]})

        teams = await client.search_all_teams("English Premier League")

        assert teams == [{"idTeam": "133604"}]
        client.get_json.assert_awaited_once_with(
            "/search_all_teams.php", params={"l": "English Premier League"}
        )

    async def test_jolpica_driver_standings_first_list(self):
        client = JolpicaClient()
        client.get_json = AsyncMock(return_value={
            "MRData": {
                "StandingsTable": {
                    "StandingsLists": [{"round": "5", "DriverStandings": [{"position": "1"}]}]
                }
            }
        })

        standings = await client.get_driver_standings("2026")

        assert standings["round"] == "5"
        client.get_json.assert_awaited_once_with("/2026/driverStandings.json")

    async def test_jolpica_empty_standings(self):
        client = JolpicaClient()
        client.get_json = AsyncMock(return_value={"MRData": {"StandingsTable": {}}})

        assert await client.get_driver_standings("2027") == {}

    async def test_jolpica_races(self):
        client = JolpicaClient()
        client.get_json = AsyncMock(return_value={
            "MRData": {"RaceTable": {"Races": [{"round": "1"}]}}
        })

        assert await client.get_races("2026") == [{"round": "1"}]
