"""
Referee Data Model
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class RefereeRecord(BaseModel):
    """A match official."""

    model_config = ConfigDict(frozen=True, extra="allow")

    id: int
    name: str = Field(default="", validation_alias=AliasChoices("name", "full_name", "known_as"))
    nationality: str | None = None


class RefereeSeasonStats(BaseModel):
    """Season totals for a referee as reported upstream."""

    model_config = ConfigDict(frozen=True, extra="allow")

    matches_officiated: int = Field(
        default=0, ge=0, validation_alias=AliasChoices("matches_officiated", "appearances_overall")
    )
    cards_per_match: float | None = Field(
        default=None, validation_alias=AliasChoices("cards_per_match", "cards_per_match_overall")
    )
