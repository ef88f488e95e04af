"""Display state for the dashboard views.

Each view (scores, standings, playoffs) is a ``Panel`` that loads data for a
key (a date or a season). Loads may overlap when the user moves quickly
between dates; only the most recently issued load is ever committed to the
panel's state. The scores panel also cancels the superseded request, the
season panels let it finish and drop the result. Panels are independent: a
failure in one never touches another.

This is the client-side view model for a dashboard front end. The HTTP app in
``main`` is stateless per request and does not use it; a front end builds a
``Dashboard`` over its own ``StatsApiClient`` and renders the panel states.
"""

import asyncio
import logging
from datetime import date
from typing import Any, Awaitable, Callable

import httpx
from pydantic import BaseModel, ConfigDict

from .dates import DISPLAY_TZ, add_days, current_season, parse_date, today_iso
from .games import extract_games
from .playoffs import compute_playoff_picture
from .standings import aggregate_standings
from .statsapi import StatsApiClient

Loader = Callable[[Any], Awaitable[Any]]


class PanelState(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: Any = None
    data: Any = None
    error: str = ""
    loading: bool = False


def describe_error(exc: Exception, view: str) -> str:
    if isinstance(exc, httpx.HTTPStatusError):
        return f"Network {exc.response.status_code}"
    return str(exc) or f"Failed to load {view}"


class Panel:
    def __init__(self, name: str, loader: Loader, cancel_superseded: bool = False):
        self.name = name
        self.cancel_superseded = cancel_superseded
        self.state = PanelState()
        self._loader = loader
        self._generation = 0
        self._task: asyncio.Future | None = None

    def _superseded(self, generation: int) -> bool:
        if generation != self._generation:
            logging.debug(f"Discarding superseded {self.name} load (#{generation})")
            return True
        return False

    async def load(self, key: Any) -> bool:
        """Load ``key`` into the panel. Returns False if a newer load won."""
        self._generation += 1
        generation = self._generation
        if self.cancel_superseded and self._task is not None and not self._task.done():
            self._task.cancel()

        task = asyncio.ensure_future(self._loader(key))
        self._task = task
        self.state = self.state.model_copy(
            update={"key": key, "loading": True, "error": ""}
        )

        try:
            data = await task
        except asyncio.CancelledError:
            if self._superseded(generation):
                return False
            raise
        except (httpx.HTTPError, TypeError, ValueError) as exc:
            if self._superseded(generation):
                return False
            self.state = PanelState(key=key, error=describe_error(exc, self.name))
            return True
        except Exception as exc:
            # Unexpected failures still end the loading state, then propagate
            if generation == self._generation:
                self.state = PanelState(key=key, error=describe_error(exc, self.name))
            raise

        if self._superseded(generation):
            return False
        self.state = PanelState(key=key, data=data)
        return True


class Dashboard:
    """The three dashboard views over one StatsAPI client."""

    def __init__(
        self,
        client: StatsApiClient,
        tz_name: str = DISPLAY_TZ,
        today: date | None = None,
    ):
        self.client = client
        self.tz_name = tz_name
        self.date = today.isoformat() if today else today_iso(tz_name)
        self.season = current_season(parse_date(self.date))
        self.scores = Panel("scores", self._load_scores, cancel_superseded=True)
        self.standings = Panel("standings", self._load_standings)
        self.playoffs = Panel("playoffs", self._load_playoffs)

    async def _load_scores(self, day: str):
        return extract_games(await self.client.get_schedule(day))

    async def _load_standings(self, season: int):
        return aggregate_standings(await self.client.get_standings(season))

    async def _load_playoffs(self, season: int):
        return compute_playoff_picture(await self.client.get_standings(season))

    async def show_date(self, day: str) -> bool:
        parse_date(day)
        self.date = day
        return await self.scores.load(day)

    async def previous_day(self) -> bool:
        return await self.show_date(add_days(self.date, -1))

    async def next_day(self) -> bool:
        return await self.show_date(add_days(self.date, 1))

    async def show_today(self) -> bool:
        return await self.show_date(today_iso(self.tz_name))

    async def show_season(self, season: int) -> None:
        self.season = season
        await asyncio.gather(self.standings.load(season), self.playoffs.load(season))
