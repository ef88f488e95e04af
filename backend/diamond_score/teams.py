from pydantic import BaseModel, ConfigDict

LOGO_HOST = "https://www.mlbstatic.com/team-logos"

# MLB team IDs -> official MLB.com team pages
TEAM_URLS = {
    108: "https://www.mlb.com/angels",
    109: "https://www.mlb.com/dbacks",
    110: "https://www.mlb.com/orioles",
    111: "https://www.mlb.com/redsox",
    112: "https://www.mlb.com/cubs",
    113: "https://www.mlb.com/reds",
    114: "https://www.mlb.com/guardians",
    115: "https://www.mlb.com/rockies",
    116: "https://www.mlb.com/tigers",
    117: "https://www.mlb.com/astros",
    118: "https://www.mlb.com/royals",
    119: "https://www.mlb.com/dodgers",
    120: "https://www.mlb.com/nationals",
    121: "https://www.mlb.com/mets",
    133: "https://www.mlb.com/athletics",
    134: "https://www.mlb.com/pirates",
    135: "https://www.mlb.com/padres",
    136: "https://www.mlb.com/mariners",
    137: "https://www.mlb.com/giants",
    138: "https://www.mlb.com/cardinals",
    139: "https://www.mlb.com/rays",
    140: "https://www.mlb.com/rangers",
    141: "https://www.mlb.com/bluejays",
    142: "https://www.mlb.com/twins",
    143: "https://www.mlb.com/phillies",
    144: "https://www.mlb.com/braves",
    145: "https://www.mlb.com/whitesox",
    146: "https://www.mlb.com/marlins",
    147: "https://www.mlb.com/yankees",
    158: "https://www.mlb.com/brewers",
}


class TeamLinks(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    url: str | None
    logo_urls: list[str]


def logo_candidates(team_id: int | None) -> list[str]:
    """Logo URLs to try in order; the renderer falls back to a text badge."""
    if not team_id:
        return []
    return [f"{LOGO_HOST}/{team_id}.svg", f"{LOGO_HOST}/team-{team_id}.svg"]


def fallback_label(abbreviation: str | None, name: str | None = None) -> str:
    if abbreviation:
        return abbreviation[:3]
    if name:
        return name[:3].upper()
    return "MLB"


def team_links(team_id: int) -> TeamLinks:
    return TeamLinks(
        id=team_id, url=TEAM_URLS.get(team_id), logo_urls=logo_candidates(team_id)
    )
