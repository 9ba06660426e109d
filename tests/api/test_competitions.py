import pytest
from httpx import AsyncClient

from app.models import Standing


@pytest.mark.asyncio
class TestSportsAPI:
    """Tests for /api/v1/sports endpoints."""

    async def test_get_sports(self, client: AsyncClient, sample_sport):
        response = await client.get("/api/v1/sports")
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["items"][0]["key"] == "football"

    async def test_get_sports_empty(self, client: AsyncClient):
        response = await client.get("/api/v1/sports")
        assert response.status_code == 200
        assert response.json() == {"items": [], "total": 0}

    async def test_get_sport_competitions(self, client: AsyncClient, sample_competition):
        response = await client.get("/api/v1/sports/football/competitions")
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["items"][0]["name"] == "Premier League"
        assert data["items"][0]["external_id"] == "4328"

    async def test_get_competitions_unknown_sport(self, client: AsyncClient):
        response = await client.get("/api/v1/sports/curling/competitions")
        assert response.status_code == 404
        assert response.json()["detail"] == "Sport not found"


@pytest.mark.asyncio
class TestCompetitionsAPI:
    """Tests for /api/v1/competitions endpoints."""

    async def test_get_events(self, client: AsyncClient, sample_event):
        response = await client.get(
            f"/api/v1/competitions/{sample_event.competition_id}/events?season=2025-2026"
        )
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        event = data["items"][0]
        assert event["external_id"] == "2267073"
        assert event["status"] == "finished"
        assert event["metadata"]["home_team"] == "Arsenal"
        assert [(p["role"], p["name"], p["score"]) for p in event["participants"]] == [
            ("home", "Arsenal", 2),
            ("away", "Chelsea", 1),
        ]

    async def test_get_events_other_season_empty(self, client: AsyncClient, sample_event):
        response = await client.get(
            f"/api/v1/competitions/{sample_event.competition_id}/events?season=2024-2025"
        )
        assert response.status_code == 200
        assert response.json()["items"] == []

    async def test_get_events_requires_season(self, client: AsyncClient, sample_competition):
        response = await client.get(f"/api/v1/competitions/{sample_competition.id}/events")
        assert response.status_code == 422

    async def test_get_standings(self, client: AsyncClient, sample_standings):
        response = await client.get("/api/v1/competitions/10/standings?season=2025-2026")
        assert response.status_code == 200
        data = response.json()
        assert data["season"] == "2025-2026"
        assert [row["participant_name"] for row in data["table"]] == ["Arsenal", "Chelsea"]
        assert data["table"][0]["points"] == 3
        assert data["table"][1]["diff"] == -1

    async def test_missing_standings_is_empty_table(self, client: AsyncClient, sample_competition):
        response = await client.get(
            f"/api/v1/competitions/{sample_competition.id}/standings?season=2025-2026"
        )
        assert response.status_code == 200
        assert response.json()["table"] == []

    async def test_standings_unknown_competition(self, client: AsyncClient):
        response = await client.get("/api/v1/competitions/999/standings?season=2025-2026")
        assert response.status_code == 404
        assert response.json()["detail"] == "Competition not found"

    async def test_get_team_totals(self, client: AsyncClient, test_session, sample_competition, sample_participants):
        test_session.add_all([
            Standing(
                competition_id=sample_competition.id, season="2026", participant_id=101,
                rank=1, points=25, extra={"team": "McLaren"},
            ),
            Standing(
                competition_id=sample_competition.id, season="2026", participant_id=102,
                rank=2, points=18, extra={"team": "Ferrari"},
            ),
            Standing(
                competition_id=sample_competition.id, season="2026", participant_id=103,
                rank=3, points=15.5, extra={"team": "McLaren"},
            ),
        ])
        await test_session.commit()

        response = await client.get(
            f"/api/v1/competitions/{sample_competition.id}/standings/teams?season=2026"
        )
        assert response.status_code == 200
        assert response.json()["table"] == [
            {"rank": 1, "team": "McLaren", "points": 40.5},
            {"rank": 2, "team": "Ferrari", "points": 18.0},
        ]


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "sports": ["football", "basketball", "f1"]}
