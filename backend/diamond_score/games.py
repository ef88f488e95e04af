"""Schedule game normalization.

StatsAPI schedule games arrive as nested ``teams``/``linescore``/``status``
objects hydrated to varying degrees. ``normalize_game`` flattens one game into
a ``GameSummary`` and derives the status labels the scoreboard shows. Missing
or malformed fields degrade to None or empty strings; nothing here raises on
upstream data.
"""

import re
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, computed_field

from .dates import DISPLAY_TZ, format_local_time
from .parsing import Parse
from .teams import fallback_label

GameFilter = Literal["all", "live", "upcoming", "final"]

FINAL_PATTERN = re.compile(r"final", re.IGNORECASE)
LIVE_PATTERN = re.compile(r"in progress|delayed|warmup", re.IGNORECASE)

REGULATION_INNINGS = 9


class TeamSide(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int | None = None
    name: str | None = None
    abbreviation: str
    record: str = ""
    score: int | None = None

    @computed_field
    def label(self) -> str:
        return fallback_label(self.abbreviation, self.name)


class Linescore(BaseModel):
    model_config = ConfigDict(frozen=True)

    current_inning: int | None = None
    is_top_inning: bool | None = None


class GameSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int | None = None
    game_date: str | None = None
    status: str = ""
    venue: str | None = None
    double_header: str | None = None
    series_game_number: int | None = None
    linescore: Linescore = Linescore()
    away: TeamSide
    home: TeamSide
    is_final: bool = False
    is_live: bool = False
    # First pitch as HH:MM in the viewer's zone
    start_time: str | None = None

    @computed_field
    def is_upcoming(self) -> bool:
        return not self.is_final and not self.is_live

    @computed_field
    def status_with_inning(self) -> str:
        base = self.status.strip()
        inning = self.linescore.current_inning
        if self.is_live and inning:
            half = "Top" if self.linescore.is_top_inning else "Bot"
            return f"{base} – {half} {inning}"
        return base

    @computed_field
    def extras_label(self) -> str | None:
        inning = self.linescore.current_inning
        if self.is_final and inning is not None and inning > REGULATION_INNINGS:
            return f"F/{inning}"
        return None

    @computed_field
    def doubleheader_label(self) -> str | None:
        if self.double_header == "Y":
            return f"DH G{self.series_game_number or ''}"
        return None

    @computed_field
    def leader(self) -> str | None:
        """Side currently ahead, only for games that have started."""
        if not (self.is_live or self.is_final):
            return None
        home, away = self.home.score, self.away.score
        if home is None or away is None or home == away:
            return None
        return "home" if home > away else "away"


def _team_side(game: dict, side: str, default_abbreviation: str) -> TeamSide:
    wrap = Parse.section(Parse.section(game, "teams"), side)
    team = Parse.section(wrap, "team")
    line_runs = Parse.section(
        Parse.section(Parse.section(game, "linescore"), "teams"), side
    ).get("runs")

    score = Parse.int_or_none(wrap.get("score"))
    if score is None:
        score = Parse.int_or_none(line_runs)

    abbreviation = (
        Parse.str_or_none(team.get("abbreviation"))
        or Parse.str_or_none(team.get("teamName"))
        or default_abbreviation
    )

    record = ""
    league_record = Parse.section(wrap, "leagueRecord")
    wins = Parse.int_or_none(league_record.get("wins"))
    losses = Parse.int_or_none(league_record.get("losses"))
    if wins is not None and losses is not None:
        record = f"{wins}-{losses}"

    return TeamSide(
        id=Parse.int_or_none(team.get("id")),
        name=Parse.str_or_none(team.get("name")),
        abbreviation=abbreviation,
        record=record,
        score=score,
    )


def normalize_game(game: Any, tz_name: str | None = None) -> GameSummary:
    """Flatten one StatsAPI schedule game into a ``GameSummary``.

    ``tz_name`` selects the zone for ``start_time`` and defaults to DISPLAY_TZ.
    """
    if not isinstance(game, dict):
        game = {}
    status = Parse.section(game, "status")
    detailed = Parse.str_or_none(status.get("detailedState")) or ""
    linescore = Parse.section(game, "linescore")

    is_final = bool(FINAL_PATTERN.search(detailed))
    # "Final" wins over any live wording so the two flags stay exclusive
    is_live = not is_final and bool(LIVE_PATTERN.search(detailed))

    game_date = Parse.str_or_none(game.get("gameDate"))
    top = linescore.get("isTopInning")
    return GameSummary(
        id=Parse.int_or_none(game.get("gamePk")),
        game_date=game_date,
        status=detailed or Parse.str_or_none(status.get("abstractGameState")) or "",
        venue=Parse.str_or_none(Parse.section(game, "venue").get("name")),
        double_header=Parse.str_or_none(game.get("doubleHeader")),
        series_game_number=Parse.int_or_none(game.get("seriesGameNumber")),
        linescore=Linescore(
            current_inning=Parse.int_or_none(linescore.get("currentInning")),
            is_top_inning=top if isinstance(top, bool) else None,
        ),
        away=_team_side(game, "away", "Away"),
        home=_team_side(game, "home", "Home"),
        is_final=is_final,
        is_live=is_live,
        start_time=(
            format_local_time(game_date, tz_name or DISPLAY_TZ) if game_date else None
        ),
    )


def extract_games(payload: Any, tz_name: str | None = None) -> list[GameSummary]:
    """Normalize the games of the first date in a schedule payload."""
    dates = payload.get("dates") if isinstance(payload, dict) else None
    if not isinstance(dates, list) or not dates:
        return []
    first = dates[0] if isinstance(dates[0], dict) else {}
    games = first.get("games")
    if not isinstance(games, list):
        return []
    return [normalize_game(g, tz_name) for g in games]


def filter_games(games: list[GameSummary], kind: str) -> list[GameSummary]:
    if kind == "all":
        return list(games)
    if kind == "final":
        return [g for g in games if g.is_final]
    if kind == "live":
        return [g for g in games if g.is_live]
    if kind == "upcoming":
        return [g for g in games if not g.is_final and not g.is_live]
    raise ValueError(f"Unknown game filter: {kind}")
