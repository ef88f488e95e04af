"""
Diamond Score Backend API

API Design Notes:
- Query parameters that mirror MLB StatsAPI names keep its camelCase style so the
  JSON surface stays consistent with the upstream service.
- Internal Python code uses snake_case per PEP 8 conventions.
- Every response is recomputed from a fresh upstream payload; nothing is cached
  between requests.
"""

import json
import logging
import os
from pathlib import Path
from typing import Awaitable, Callable, List
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import httpx
from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel

from .dates import DISPLAY_TZ, add_days, current_season, parse_date, today_iso
from .games import GameFilter, GameSummary, extract_games, filter_games
from .playoffs import LeagueSeeding, compute_playoff_picture
from .standings import DivisionStanding, aggregate_standings
from .statsapi import StatsApiClient
from .teams import TeamLinks, team_links

logging.basicConfig(
    format="%(asctime)s %(levelname)s %(message)s",
    encoding="utf-8",
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
)

# Mock StatsAPI mode for testing
MOCK_STATSAPI = os.getenv("MOCK_STATSAPI", "").lower() in ("1", "true")
FIXTURES_PATH = Path(__file__).parent / "fixtures"


def _load_fixture(name: str) -> dict:
    """Load a JSON fixture file by name."""
    fixture_path = (FIXTURES_PATH / f"{name}.json").resolve()
    if fixture_path.parent != FIXTURES_PATH.resolve() or not fixture_path.exists():
        raise HTTPException(status_code=404, detail=f"Fixture '{name}' not found")
    return json.loads(fixture_path.read_text(encoding="utf-8"))


app = FastAPI()


class DateNavigation(BaseModel):
    date: str


@app.get("/")
def read_root():
    return {
        "service": "diamond-score-backend",
        "status": "ok",
        "endpoints": [
            "/games/daily",
            "/games/daily/navigation",
            "/standings",
            "/playoffs/picture",
            "/teams/{team_id}",
        ],
    }


async def _from_statsapi(
    fetch: Callable[[StatsApiClient], Awaitable[dict]], what: str
) -> dict:
    """Run one upstream call and map transport failures to HTTP errors."""
    try:
        async with StatsApiClient() as client:
            return await fetch(client)
    except httpx.TimeoutException:
        raise HTTPException(status_code=504, detail="StatsAPI timeout") from None
    except httpx.HTTPStatusError as exc:
        status = exc.response.status_code if exc.response is not None else 502
        raise HTTPException(
            status_code=502, detail=f"StatsAPI error: {status}"
        ) from exc
    except httpx.RequestError as exc:
        raise HTTPException(status_code=502, detail="StatsAPI request failed") from exc
    except (TypeError, ValueError) as exc:
        logging.error(f"Unexpected {what} payload from StatsAPI: {exc}")
        raise HTTPException(
            status_code=502, detail="Unexpected upstream format"
        ) from exc


def _validated_tz(value: str | None) -> str:
    if value is None:
        return DISPLAY_TZ
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError):
        raise HTTPException(
            status_code=400, detail=f"Unknown time zone: {value}"
        ) from None
    return value


def _validated_date(value: str | None, tz_name: str = DISPLAY_TZ) -> str:
    if value is None:
        return today_iso(tz_name)
    try:
        parse_date(value)
    except ValueError:
        raise HTTPException(
            status_code=400, detail="Date must be in YYYY-MM-DD format"
        ) from None
    return value


def _default_season() -> int:
    return current_season(parse_date(today_iso(DISPLAY_TZ)))


async def _get_schedule(day: str, fixture: str | None = None) -> dict:
    if MOCK_STATSAPI:
        return _load_fixture(fixture or "schedule")
    return await _from_statsapi(lambda c: c.get_schedule(day), "schedule")


async def _get_standings(season: int, fixture: str | None = None) -> dict:
    if MOCK_STATSAPI:
        return _load_fixture(fixture or "standings")
    return await _from_statsapi(lambda c: c.get_standings(season), "standings")


@app.get("/games/daily", response_model=List[GameSummary])
async def get_daily_games(
    date: str | None = Query(default=None, description="Day, e.g. 2025-07-04"),
    filter_: GameFilter = Query(
        default="all", alias="filter", description="all | live | upcoming | final"
    ),
    tz: str | None = Query(
        default=None, description="IANA zone for start times, e.g. Europe/Helsinki"
    ),
    fixture: str | None = Query(
        default=None, description="Mock fixture name (only when MOCK_STATSAPI=true)"
    ),
):
    tz_name = _validated_tz(tz)
    day = _validated_date(date, tz_name)
    payload = await _get_schedule(day, fixture)
    return filter_games(extract_games(payload, tz_name), filter_)


@app.get("/games/daily/navigation", response_model=DateNavigation)
def get_date_navigation(
    date: str | None = Query(default=None, description="Current day"),
    direction: str = Query(description="Navigation direction: 'prev', 'next' or 'today'"),
):
    """Resolve the day the scores view moves to."""
    if direction not in ["prev", "next", "today"]:
        raise HTTPException(
            status_code=400, detail="Direction must be 'prev', 'next' or 'today'"
        )
    if direction == "today":
        return {"date": today_iso(DISPLAY_TZ)}

    day = _validated_date(date)
    return {"date": add_days(day, -1 if direction == "prev" else 1)}


@app.get("/standings", response_model=List[DivisionStanding])
async def get_standings(
    season: int | None = Query(default=None, ge=1876, description="Season year"),
    fixture: str | None = Query(default=None),
):
    payload = await _get_standings(season or _default_season(), fixture)
    return aggregate_standings(payload)


@app.get("/playoffs/picture", response_model=List[LeagueSeeding])
async def get_playoff_picture(
    season: int | None = Query(default=None, ge=1876, description="Season year"),
    fixture: str | None = Query(default=None),
):
    """Seeds 1-6 per league (3 division leaders + 3 wild cards) and the rest."""
    payload = await _get_standings(season or _default_season(), fixture)
    return compute_playoff_picture(payload)


@app.get("/teams/{team_id}", response_model=TeamLinks)
def get_team_links(team_id: int):
    return team_links(team_id)
