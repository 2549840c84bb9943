"""Static catalog data."""

from storefront.data.teams import (
    BASKETBALL_TEAMS,
    FOOTBALL_TEAMS,
    STATIC_TEAMS,
    TEAMS_BY_SPORT,
    find_generated_product,
    find_static_team,
    generate_team_products,
)

__all__ = [
    "BASKETBALL_TEAMS",
    "FOOTBALL_TEAMS",
    "STATIC_TEAMS",
    "TEAMS_BY_SPORT",
    "find_generated_product",
    "find_static_team",
    "generate_team_products",
]
