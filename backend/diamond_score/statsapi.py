import logging
import os

import httpx

STATSAPI_BASE_URL = os.getenv("STATSAPI_BASE_URL", "https://statsapi.mlb.com/api/v1")
STATSAPI_TIMEOUT_SECONDS = float(os.getenv("STATSAPI_TIMEOUT_SECONDS", "6"))

# American League, National League
LEAGUE_IDS = (103, 104)


class StatsApiClient:
    """Read-only client for the two StatsAPI resources the dashboard uses."""

    client: httpx.AsyncClient

    def __init__(
        self,
        base_url: str = STATSAPI_BASE_URL,
        timeout: float = STATSAPI_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.client = httpx.AsyncClient(
            base_url=base_url, timeout=timeout, transport=transport
        )

    async def __aenter__(self):
        return self

    async def __aexit__(self, exception_type, exception_value, exception_traceback):
        await self.client.aclose()

    async def _get_json(self, path: str, params: dict) -> dict:
        response = await self.client.get(path, params=params)

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logging.error(
                f"Request failed: {response.url}, {response.status_code}, {response.text}"
            )
            raise e

        data = response.json()
        if not isinstance(data, dict):
            raise TypeError(f"Expected dict response, got {type(data)}")
        return data

    async def get_schedule(self, date: str) -> dict:
        """Schedule for one day with linescore and team hydration."""
        return await self._get_json(
            "/schedule",
            {
                "sportId": 1,
                "date": date,
                "language": "en",
                "hydrate": "linescore,team,flags",
            },
        )

    async def get_standings(self, season: int) -> dict:
        return await self._get_json(
            "/standings",
            {
                "leagueId": ",".join(str(i) for i in LEAGUE_IDS),
                "season": season,
                "standingsTypes": "regularSeason",
            },
        )
