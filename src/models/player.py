"""
Player Data Model

Pydantic models for players and their aggregated season statistics.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class PlayerRecord(BaseModel):
    """A player."""

    model_config = ConfigDict(frozen=True, extra="allow")

    id: int
    name: str = Field(default="", validation_alias=AliasChoices("name", "full_name", "known_as"))
    position: str | None = None
    team_id: int | None = Field(default=None, validation_alias=AliasChoices("team_id", "club_team_id"))


class PlayerSeasonStats(BaseModel):
    """Season totals for a player."""

    model_config = ConfigDict(frozen=True, extra="allow")

    appearances: int = Field(default=0, ge=0, validation_alias=AliasChoices("appearances", "appearances_overall"))
    goals: int = Field(default=0, ge=0, validation_alias=AliasChoices("goals", "goals_overall"))
    assists: int = Field(default=0, ge=0, validation_alias=AliasChoices("assists", "assists_overall"))
    average_rating: float = Field(
        default=0.0, validation_alias=AliasChoices("average_rating", "averageRating", "rating")
    )
    minutes_played: int = Field(
        default=0, ge=0, validation_alias=AliasChoices("minutes_played", "minutes_played_overall", "minutesPlayed")
    )
    match_ratings: list[float] | None = Field(
        default=None, validation_alias=AliasChoices("match_ratings", "matchRatings")
    )
