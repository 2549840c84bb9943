"""League and team data models."""

from typing import Optional

from pydantic import BaseModel, Field


class Team(BaseModel):
    """A team, either from the static list or from the admin-managed store."""

    id: str
    name: str
    league: str = Field(..., description="Free-text league label")
    leagueId: Optional[str] = Field(None, description="Custom league id, when linked")
    logo: Optional[str] = None
    country: Optional[str] = None
    sport: str = "football"
    source: str = Field("static", pattern="^(static|custom)$")


class CustomLeague(BaseModel):
    """Admin-managed league."""

    id: str
    name: str = Field(..., min_length=1, max_length=200)
    sport: str = "custom"
    logoUrl: Optional[str] = None


class CustomLeagueCreate(BaseModel):
    """League creation payload."""

    name: str = Field(..., min_length=1, max_length=200)
    sport: str = "custom"
    logoUrl: Optional[str] = None


class CustomTeamCreate(BaseModel):
    """Custom team creation payload. The league is referenced by id."""

    name: str = Field(..., min_length=1, max_length=200)
    leagueId: str
    logoUrl: Optional[str] = None
    sport: Optional[str] = None


class LeagueSummary(BaseModel):
    """League as listed on the storefront."""

    id: str
    name: str
    sport: str
    logoUrl: Optional[str] = None
    teamCount: int = 0
    source: str = Field("custom", pattern="^(static|custom)$")


class TeamLeagueLink(BaseModel):
    """Stored foreign key from a static team to a custom league."""

    teamId: str
    leagueId: str
