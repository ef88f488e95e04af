from typing import Any

from pydantic import BaseModel, ConfigDict

# StatsAPI populates either the boolean fields or the one-letter
# clinchIndicator depending on season and timing, so any signal counts.
# Codes: x = postseason berth, y = division, z = best league record, w = wild card
DIVISION_SIGNALS = ("divisionChamp", "clinchedDivision")
PLAYOFF_SIGNALS = ("clinched", "clinchedPostseason", "clinchedWildCard")
DIVISION_CODES = frozenset({"y", "z"})
PLAYOFF_CODES = frozenset({"x", "y", "z", "w"})


class ClinchFlags(BaseModel):
    model_config = ConfigDict(frozen=True)

    division_clinched: bool = False
    playoff_clinched: bool = False
    indicator: str = ""


def parse_clinch_flags(team_record: Any) -> ClinchFlags:
    """Reduce a StatsAPI teamRecord to division/playoff clinch booleans."""
    if not isinstance(team_record, dict):
        team_record = {}
    indicator = str(team_record.get("clinchIndicator") or "").strip().lower()

    division_clinched = (
        any(team_record.get(name) for name in DIVISION_SIGNALS)
        or indicator in DIVISION_CODES
    )
    playoff_clinched = (
        any(team_record.get(name) for name in PLAYOFF_SIGNALS)
        or indicator in PLAYOFF_CODES
    )
    return ClinchFlags(
        division_clinched=bool(division_clinched),
        playoff_clinched=bool(playoff_clinched),
        indicator=indicator,
    )
