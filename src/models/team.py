"""
Team Data Model

Pydantic model for a team as used for lookups and labels.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class TeamRecord(BaseModel):
    """A team. IDs are trusted as supplied by the caller."""

    model_config = ConfigDict(frozen=True, extra="allow")

    id: int
    name: str = Field(default="", validation_alias=AliasChoices("name", "cleanName", "full_name"))
    stadium_name: str | None = None
    country: str | None = None
    table_position: int | None = None

    @property
    def display_name(self) -> str:
        """Name for display, falling back to the team ID."""
        return self.name or f"Team {self.id}"
