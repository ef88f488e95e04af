from unittest.mock import AsyncMock, patch

import httpx
import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from .. import main as backend_main
from ..main import _load_fixture, app
from ..statsapi import StatsApiClient

client = TestClient(app)


def _schedule_payload():
    return {
        "dates": [
            {
                "date": "2024-07-04",
                "games": [
                    {
                        "gamePk": 1,
                        "gameDate": "2024-07-04T23:05:00Z",
                        "status": {"detailedState": "In Progress"},
                        "teams": {
                            "away": {
                                "team": {"id": 147, "abbreviation": "NYY"},
                                "score": 2,
                            },
                            "home": {
                                "team": {"id": 111, "abbreviation": "BOS"},
                                "score": 3,
                            },
                        },
                        "linescore": {"currentInning": 7, "isTopInning": False},
                    }
                ],
            }
        ]
    }


def _status_error(status_code: int) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "https://statsapi.mlb.com/api/v1/schedule")
    response = httpx.Response(status_code, request=request)
    return httpx.HTTPStatusError("boom", request=request, response=response)


def test_read_main():
    response = client.get("/")
    assert response.status_code == 200
    payload = response.json()
    assert payload.get("service") == "diamond-score-backend"
    assert payload.get("status") == "ok"
    assert "/games/daily" in payload.get("endpoints", [])


class TestDailyGames:
    @patch.object(StatsApiClient, "get_schedule", new_callable=AsyncMock)
    def test_games_from_statsapi(self, mock_schedule):
        mock_schedule.return_value = _schedule_payload()

        r = client.get("/games/daily?date=2024-07-04")
        assert r.status_code == 200
        mock_schedule.assert_awaited_once_with("2024-07-04")
        (game,) = r.json()
        assert game["is_live"] is True
        assert game["status_with_inning"] == "In Progress – Bot 7"
        assert game["home"]["abbreviation"] == "BOS"
        assert game["leader"] == "home"

    @patch.object(StatsApiClient, "get_schedule", new_callable=AsyncMock)
    def test_default_date_is_today(self, mock_schedule):
        mock_schedule.return_value = {"dates": []}
        with patch.object(backend_main, "today_iso", return_value="2024-07-04"):
            r = client.get("/games/daily")
        assert r.status_code == 200
        assert r.json() == []
        mock_schedule.assert_awaited_once_with("2024-07-04")

    def test_invalid_date(self):
        r = client.get("/games/daily?date=July-4")
        assert r.status_code == 400

    def test_invalid_filter(self):
        r = client.get("/games/daily?date=2024-07-04&filter=postponed")
        assert r.status_code == 422

    @patch.object(StatsApiClient, "get_schedule", new_callable=AsyncMock)
    def test_timeout_maps_to_504(self, mock_schedule):
        mock_schedule.side_effect = httpx.ReadTimeout("slow")
        r = client.get("/games/daily?date=2024-07-04")
        assert r.status_code == 504

    @patch.object(StatsApiClient, "get_schedule", new_callable=AsyncMock)
    def test_status_error_maps_to_502(self, mock_schedule):
        mock_schedule.side_effect = _status_error(503)
        r = client.get("/games/daily?date=2024-07-04")
        assert r.status_code == 502
        assert "503" in r.json()["detail"]

    @patch.object(StatsApiClient, "get_schedule", new_callable=AsyncMock)
    def test_connect_error_maps_to_502(self, mock_schedule):
        mock_schedule.side_effect = httpx.ConnectError("refused")
        r = client.get("/games/daily?date=2024-07-04")
        assert r.status_code == 502

    @patch.object(StatsApiClient, "get_schedule", new_callable=AsyncMock)
    def test_unexpected_payload_maps_to_502(self, mock_schedule):
        mock_schedule.side_effect = TypeError("Expected dict response")
        r = client.get("/games/daily?date=2024-07-04")
        assert r.status_code == 502
        assert r.json()["detail"] == "Unexpected upstream format"

    @patch.object(StatsApiClient, "get_schedule", new_callable=AsyncMock)
    def test_start_time_in_requested_zone(self, mock_schedule):
        mock_schedule.return_value = _schedule_payload()
        r = client.get("/games/daily?date=2024-07-04&tz=America/Los_Angeles")
        assert r.status_code == 200
        assert r.json()[0]["start_time"] == "16:05"

    @patch.object(StatsApiClient, "get_schedule", new_callable=AsyncMock)
    def test_default_zone_today(self, mock_schedule):
        mock_schedule.return_value = {"dates": []}
        with patch.object(backend_main, "today_iso", return_value="2024-07-05") as today:
            r = client.get("/games/daily?tz=Asia/Tokyo")
        assert r.status_code == 200
        today.assert_called_once_with("Asia/Tokyo")

    def test_unknown_zone(self):
        r = client.get("/games/daily?date=2024-07-04&tz=Mars/Olympus")
        assert r.status_code == 400

    @patch.object(StatsApiClient, "get_schedule", new_callable=AsyncMock)
    def test_out_of_range_game_date_does_not_fail(self, mock_schedule):
        payload = _schedule_payload()
        payload["dates"][0]["games"][0]["gameDate"] = "9999-12-31T23:59:59-12:00"
        mock_schedule.return_value = payload
        r = client.get("/games/daily?date=2024-07-04")
        assert r.status_code == 200
        assert r.json()[0]["start_time"] == "9999-12-31T23:59:59-12:00"


class TestMockModeGames:
    """Tests for the games endpoint in mock mode."""

    @patch.object(backend_main, "MOCK_STATSAPI", True)
    def test_daily_games_mock_mode(self):
        r = client.get("/games/daily?date=2024-07-04")
        assert r.status_code == 200
        games = r.json()
        assert len(games) == 6
        assert games[1]["extras_label"] == "F/11"
        assert games[2]["doubleheader_label"] == "DH G1"
        assert games[4]["away"]["abbreviation"] == "D-backs"
        assert games[4]["home"]["score"] is None

    @pytest.mark.parametrize(
        "kind,expected",
        [("final", 2), ("live", 3), ("upcoming", 1), ("all", 6)],
    )
    @patch.object(backend_main, "MOCK_STATSAPI", True)
    def test_daily_games_filter(self, kind, expected):
        r = client.get(f"/games/daily?date=2024-07-04&filter={kind}")
        assert r.status_code == 200
        assert len(r.json()) == expected

    @patch.object(backend_main, "MOCK_STATSAPI", True)
    def test_unknown_fixture(self):
        r = client.get("/games/daily?fixture=nonexistent_fixture")
        assert r.status_code == 404

    def test_fixture_outside_directory_rejected(self, tmp_path, monkeypatch):
        fixtures = tmp_path / "fixtures"
        fixtures.mkdir()
        (fixtures / "schedule.json").write_text("{}", encoding="utf-8")
        (tmp_path / "secret.json").write_text("{}", encoding="utf-8")
        monkeypatch.setattr(backend_main, "FIXTURES_PATH", fixtures)

        assert _load_fixture("schedule") == {}
        with pytest.raises(HTTPException) as exc_info:
            _load_fixture("../secret")
        assert exc_info.value.status_code == 404

    def test_load_nonexistent_fixture_raises(self):
        with pytest.raises(HTTPException) as exc_info:
            _load_fixture("nonexistent_fixture")
        assert exc_info.value.status_code == 404  # type: ignore[union-attr]


class TestDateNavigation:
    def test_next(self):
        r = client.get("/games/daily/navigation?date=2024-07-04&direction=next")
        assert r.status_code == 200
        assert r.json() == {"date": "2024-07-05"}

    def test_prev_across_leap_day(self):
        r = client.get("/games/daily/navigation?date=2024-03-01&direction=prev")
        assert r.json() == {"date": "2024-02-29"}

    def test_today(self):
        with patch.object(backend_main, "today_iso", return_value="2024-07-04"):
            r = client.get("/games/daily/navigation?direction=today")
        assert r.json() == {"date": "2024-07-04"}

    def test_invalid_direction(self):
        r = client.get("/games/daily/navigation?date=2024-07-04&direction=sideways")
        assert r.status_code == 400

    def test_invalid_date(self):
        r = client.get("/games/daily/navigation?date=2024-13-01&direction=next")
        assert r.status_code == 400


class TestStandings:
    @patch.object(backend_main, "MOCK_STATSAPI", True)
    def test_standings_mock_mode(self):
        r = client.get("/standings?season=2024")
        assert r.status_code == 200
        data = r.json()
        assert [d["name"] for d in data][:3] == ["AL East", "AL Central", "AL West"]
        nyy = data[0]["teams"][0]
        assert nyy["division_clinched"] is True
        assert nyy["wildcard_clinched"] is False
        assert nyy["pct_display"] == "0.580"
        oak = data[2]["teams"][3]
        assert oak["abbreviation"] == "OAK"

    @patch.object(StatsApiClient, "get_standings", new_callable=AsyncMock)
    def test_default_season(self, mock_standings):
        mock_standings.return_value = {"records": []}
        with patch.object(backend_main, "today_iso", return_value="2025-02-10"):
            r = client.get("/standings")
        assert r.status_code == 200
        mock_standings.assert_awaited_once_with(2024)

    @patch.object(StatsApiClient, "get_standings", new_callable=AsyncMock)
    def test_standings_upstream_failure(self, mock_standings):
        mock_standings.side_effect = _status_error(500)
        r = client.get("/standings?season=2024")
        assert r.status_code == 502

    def test_season_validation(self):
        r = client.get("/standings?season=1200")
        assert r.status_code == 422


def test_team_links():
    r = client.get("/teams/147")
    assert r.status_code == 200
    data = r.json()
    assert data["url"] == "https://www.mlb.com/yankees"
    assert data["logo_urls"] == [
        "https://www.mlbstatic.com/team-logos/147.svg",
        "https://www.mlbstatic.com/team-logos/team-147.svg",
    ]


def test_team_links_unknown_team():
    r = client.get("/teams/1")
    assert r.status_code == 200
    assert r.json()["url"] is None
