import re
from typing import Any

from pydantic import BaseModel, ConfigDict, computed_field

from .clinch import parse_clinch_flags
from .parsing import Parse
from .teams import fallback_label

# StatsAPI division IDs are stable, so prefer them over name parsing
DIVISION_SHORT_BY_ID = {
    200: "AL West",
    201: "AL East",
    202: "AL Central",
    203: "NL West",
    204: "NL East",
    205: "NL Central",
}

_AMERICAN = re.compile(r"^American League", re.IGNORECASE)
_NATIONAL = re.compile(r"^National League", re.IGNORECASE)
_SPACES = re.compile(r"\s+")


class TeamRecord(BaseModel):
    """One team row of the standings view."""

    model_config = ConfigDict(frozen=True)

    id: int | None = None
    name: str | None = None
    abbreviation: str = ""
    wins: int | None = None
    losses: int | None = None
    pct: float | None = None
    games_back: str = ""
    division_clinched: bool = False
    wildcard_clinched: bool = False

    @computed_field
    def pct_display(self) -> str:
        return "" if self.pct is None else f"{self.pct:.3f}"

    @computed_field
    def label(self) -> str:
        return fallback_label(self.abbreviation, self.name)


class DivisionStanding(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    teams: list[TeamRecord]


def shorten_league_name(name: Any) -> str:
    """'American League East' -> 'AL East'."""
    if not isinstance(name, str) or not name:
        return ""
    short = _AMERICAN.sub("AL", name)
    short = _NATIONAL.sub("NL", short)
    return _SPACES.sub(" ", short).strip()


def division_label(record: Any) -> str:
    division = Parse.section(record, "division")
    division_id = Parse.int_or_none(division.get("id"))
    if division_id in DIVISION_SHORT_BY_ID:
        return DIVISION_SHORT_BY_ID[division_id]
    from_name = shorten_league_name(division.get("name"))
    if from_name:
        return from_name
    from_league = shorten_league_name(Parse.section(record, "league").get("name"))
    return from_league or "Division"


def team_abbreviation(team: dict) -> str:
    abbreviation = Parse.str_or_none(team.get("abbreviation"))
    if abbreviation:
        return abbreviation
    code = Parse.str_or_none(team.get("teamCode"))
    return code.upper() if code else ""


def parse_team_record(team_record: Any) -> TeamRecord:
    if not isinstance(team_record, dict):
        team_record = {}
    team = Parse.section(team_record, "team")
    flags = parse_clinch_flags(team_record)
    games_back = team_record.get("gamesBack")
    return TeamRecord(
        id=Parse.int_or_none(team.get("id")),
        name=Parse.str_or_none(team.get("name")),
        abbreviation=team_abbreviation(team),
        wins=Parse.int_or_none(team_record.get("wins")),
        losses=Parse.int_or_none(team_record.get("losses")),
        pct=Parse.float_or_none(team_record.get("winningPercentage")),
        games_back="" if games_back is None else str(games_back),
        division_clinched=flags.division_clinched,
        # a division winner shows the division badge only
        wildcard_clinched=flags.playoff_clinched and not flags.division_clinched,
    )


def standings_records(payload: Any) -> list[dict]:
    records = payload.get("records") if isinstance(payload, dict) else None
    if not isinstance(records, list):
        return []
    return [r for r in records if isinstance(r, dict)]


def team_records(record: dict) -> list:
    entries = record.get("teamRecords")
    return entries if isinstance(entries, list) else []


def aggregate_standings(payload: Any) -> list[DivisionStanding]:
    """Group a StatsAPI standings payload by division.

    Division and team order are kept exactly as upstream returns them."""
    return [
        DivisionStanding(
            name=division_label(record),
            teams=[parse_team_record(tr) for tr in team_records(record)],
        )
        for record in standings_records(payload)
    ]
