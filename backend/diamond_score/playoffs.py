"""Playoff seeding per league.

Seeds 1-3 go to the division leaders ordered by winning percentage, the
remaining teams follow by percentage and the top three of them hold the wild
cards. Teams outside the field get a games-back figure measured against the
team holding the last seed (the cutoff) instead of their division leader.

Percentage ties keep upstream order. StatsAPI documents no secondary key for
this view, so none is invented here.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, computed_field

from .clinch import parse_clinch_flags
from .parsing import Parse
from .standings import TeamRecord, parse_team_record, standings_records, team_records

PLAYOFF_FIELD = 6

AMERICAN_LEAGUE_ID = 103
NATIONAL_LEAGUE_ID = 104


class SeededTeam(TeamRecord):
    division_rank: int | None = None
    playoff_clinched: bool = False
    seed: int = 0
    is_division_leader: bool = False
    gb_playoffs: float | None = None

    @computed_field
    def in_field(self) -> bool:
        return 0 < self.seed <= PLAYOFF_FIELD

    @computed_field
    def gb_display(self) -> str:
        return "—" if self.gb_playoffs is None else f"{self.gb_playoffs:.1f}"


class LeagueSeeding(BaseModel):
    model_config = ConfigDict(frozen=True)

    league: str
    teams: list[SeededTeam]


def league_short(league: Any) -> str:
    league = league if isinstance(league, dict) else {}
    league_id = Parse.int_or_none(league.get("id"))
    name = str(league.get("name") or "").lower()
    if league_id == AMERICAN_LEAGUE_ID or (not league_id and "american" in name):
        return "AL"
    if league_id == NATIONAL_LEAGUE_ID or (not league_id and "national" in name):
        return "NL"
    return ""


def games_back(team: TeamRecord, cutoff: TeamRecord | None) -> float | None:
    """Games behind ``cutoff``, clamped at zero. None if either record is incomplete."""
    if cutoff is None:
        return None
    if None in (team.wins, team.losses, cutoff.wins, cutoff.losses):
        return None
    diff = ((cutoff.wins - team.wins) + (team.losses - cutoff.losses)) / 2
    return max(0.0, float(diff))


def _candidate(team_record: Any) -> SeededTeam:
    base = parse_team_record(team_record)
    flags = parse_clinch_flags(team_record)
    division_rank = None
    if isinstance(team_record, dict):
        division_rank = Parse.int_or_none(team_record.get("divisionRank"))
    return SeededTeam(
        id=base.id,
        name=base.name,
        abbreviation=base.abbreviation,
        wins=base.wins,
        losses=base.losses,
        pct=base.pct,
        games_back=base.games_back,
        division_clinched=flags.division_clinched,
        playoff_clinched=flags.playoff_clinched,
        division_rank=division_rank,
    )


def _by_pct(team: SeededTeam) -> float:
    return team.pct if team.pct is not None else 0.0


def seed_league(raw_team_records: list) -> list[SeededTeam]:
    """Seed one league's team records. Result is ordered by seed."""
    candidates = [_candidate(tr) for tr in raw_team_records]
    # sorted() is stable with reverse=True, so ties keep upstream order
    leaders = sorted(
        (t for t in candidates if t.division_rank == 1), key=_by_pct, reverse=True
    )
    others = sorted(
        (t for t in candidates if t.division_rank != 1), key=_by_pct, reverse=True
    )

    seeded = [
        t.model_copy(
            update={"seed": seed, "is_division_leader": True, "wildcard_clinched": False}
        )
        for seed, t in enumerate(leaders, start=1)
    ]
    for seed, t in enumerate(others, start=len(leaders) + 1):
        wildcard = (
            seed <= PLAYOFF_FIELD and t.playoff_clinched and not t.division_clinched
        )
        seeded.append(
            t.model_copy(
                update={
                    "seed": seed,
                    "is_division_leader": False,
                    "wildcard_clinched": wildcard,
                }
            )
        )

    cutoff = next((t for t in seeded if t.seed == PLAYOFF_FIELD), None)
    return [
        t.model_copy(
            update={
                "gb_playoffs": 0.0
                if t.seed <= PLAYOFF_FIELD
                else games_back(t, cutoff)
            }
        )
        for t in seeded
    ]


def compute_playoff_picture(payload: Any) -> list[LeagueSeeding]:
    """Seed every league found in a StatsAPI standings payload."""
    by_league: dict[str, list] = {}
    for record in standings_records(payload):
        league = league_short(record.get("league")) or "League"
        by_league.setdefault(league, []).extend(team_records(record))

    return [
        LeagueSeeding(league=league, teams=seed_league(by_league[league]))
        for league in sorted(by_league)
    ]
