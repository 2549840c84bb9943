"""League name matching.

Static teams carry a free-text ``league`` label while admin-managed leagues
have their own names. These helpers decide whether a team label belongs to a
custom league:

1. exact match after normalization
2. alias match via ``LEAGUE_ALIASES`` (either direction)
3. substring match, except that "Ghana Premier League" never matches a
   plain "Premier League"
"""

import re
from typing import Optional, TypeVar

from storefront.models.league import Team

# Canonical custom league name -> labels used by the static team list.
LEAGUE_ALIASES: dict[str, list[str]] = {
    "English Premier League": ["Premier League", "EPL", "Premier", "English Premier"],
    "Spain La Liga": ["La Liga", "LaLiga", "Spanish La Liga", "Spain"],
    "German Bundesliga": ["Bundesliga", "Germany"],
    "Serie A": ["Seria A", "SerieA", "Italian", "Italy"],
    "French Ligue 1": ["Ligue 1", "Ligue1", "French Ligue", "France"],
    "Eredivisie": ["Dutch", "Netherlands"],
    "Ghana Premier League": ["Ghana", "GPL"],
    "Portuguese Liga": ["Primeira Liga", "Portugal"],
    "International": ["International Teams", "International Clubs"],
    "NBA": ["National Basketball Association", "Basketball"],
    "Others": [
        "Other",
        "Unknown",
        "Miscellaneous",
        "Süper Lig",
        "Super Lig",
        "Turkey",
        "Turkish",
        "Scottish League",
        "Scottish Premiership",
    ],
}

_WHITESPACE = re.compile(r"\s+")


def normalize_league_name(name: str) -> str:
    """Lowercase, collapse whitespace and trim."""
    return _WHITESPACE.sub(" ", name.lower()).strip()


_NORMALIZED_ALIASES: dict[str, frozenset[str]] = {
    normalize_league_name(canonical): frozenset(normalize_league_name(a) for a in aliases)
    for canonical, aliases in LEAGUE_ALIASES.items()
}


def _is_alias_of(name: str, canonical: str) -> bool:
    return name in _NORMALIZED_ALIASES.get(canonical, frozenset())


def matches(team_league: str, custom_league_name: str) -> bool:
    """Return True if a team's league label belongs to a custom league."""
    left = normalize_league_name(team_league)
    right = normalize_league_name(custom_league_name)
    if not left or not right:
        return False

    if left == right:
        return True

    if _is_alias_of(left, right) or _is_alias_of(right, left):
        return True

    if left in right or right in left:
        if "premier league" in left and "premier league" in right:
            if ("ghana" in left) != ("ghana" in right):
                return False
        return True

    return False


def custom_league_for(team_league: str) -> Optional[str]:
    """Return the first canonical league a team label matches, if any."""
    for canonical in LEAGUE_ALIASES:
        if matches(team_league, canonical):
            return canonical
    return None


TeamT = TypeVar("TeamT", bound=Team)


def filter_teams_by_league(teams: list[TeamT], custom_league_name: str) -> list[TeamT]:
    """Keep the teams whose league label matches ``custom_league_name``."""
    return [team for team in teams if matches(team.league, custom_league_name)]


def group_teams_by_league(teams: list[TeamT]) -> dict[str, list[TeamT]]:
    """Group teams under each canonical league they match. Empty groups are dropped."""
    grouped: dict[str, list[TeamT]] = {}
    for canonical in LEAGUE_ALIASES:
        filtered = filter_teams_by_league(teams, canonical)
        if filtered:
            grouped[canonical] = filtered
    return grouped
