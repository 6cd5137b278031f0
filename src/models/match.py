"""
Match Data Model

Pydantic model for a single fixture as delivered by the upstream API.
Accepts both the upstream field names (homeID, homeGoalCount, team_a_corners, ...)
and snake_case names. Records are frozen once ingested.
"""

from enum import Enum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator


class MatchStatus(str, Enum):
    """Match status enumeration."""

    COMPLETE = "complete"
    SUSPENDED = "suspended"
    CANCELED = "canceled"
    INCOMPLETE = "incomplete"


def _alias(*names: str) -> AliasChoices:
    return AliasChoices(*names)


class MatchRecord(BaseModel):
    """A single match between two teams."""

    model_config = ConfigDict(frozen=True, extra="allow")

    id: int = 0
    home_id: int = Field(validation_alias=_alias("home_id", "homeID"))
    away_id: int = Field(validation_alias=_alias("away_id", "awayID"))
    status: MatchStatus
    date_unix: int = 0
    season: str | None = None
    game_week: int | None = None

    # Score
    home_goals: int = Field(default=0, validation_alias=_alias("home_goals", "homeGoalCount"))
    away_goals: int = Field(default=0, validation_alias=_alias("away_goals", "awayGoalCount"))

    # Extended stats. Upstream uses -1 (stats) and -2 (shots) for "unknown".
    home_corners: int | None = Field(default=None, validation_alias=_alias("home_corners", "team_a_corners"))
    away_corners: int | None = Field(default=None, validation_alias=_alias("away_corners", "team_b_corners"))
    home_cards: int | None = Field(default=None, validation_alias=_alias("home_cards", "team_a_cards_num"))
    away_cards: int | None = Field(default=None, validation_alias=_alias("away_cards", "team_b_cards_num"))
    home_yellow_cards: int | None = Field(
        default=None, validation_alias=_alias("home_yellow_cards", "team_a_yellow_cards")
    )
    away_yellow_cards: int | None = Field(
        default=None, validation_alias=_alias("away_yellow_cards", "team_b_yellow_cards")
    )
    home_red_cards: int | None = Field(default=None, validation_alias=_alias("home_red_cards", "team_a_red_cards"))
    away_red_cards: int | None = Field(default=None, validation_alias=_alias("away_red_cards", "team_b_red_cards"))
    home_shots: int | None = Field(default=None, validation_alias=_alias("home_shots", "team_a_shots"))
    away_shots: int | None = Field(default=None, validation_alias=_alias("away_shots", "team_b_shots"))
    home_shots_on_target: int | None = Field(
        default=None, validation_alias=_alias("home_shots_on_target", "team_a_shotsOnTarget")
    )
    away_shots_on_target: int | None = Field(
        default=None, validation_alias=_alias("away_shots_on_target", "team_b_shotsOnTarget")
    )
    home_possession: float | None = Field(
        default=None, validation_alias=_alias("home_possession", "team_a_possession")
    )
    away_possession: float | None = Field(
        default=None, validation_alias=_alias("away_possession", "team_b_possession")
    )
    home_fouls: int | None = Field(default=None, validation_alias=_alias("home_fouls", "team_a_fouls"))
    away_fouls: int | None = Field(default=None, validation_alias=_alias("away_fouls", "team_b_fouls"))
    home_offsides: int | None = Field(default=None, validation_alias=_alias("home_offsides", "team_a_offsides"))
    away_offsides: int | None = Field(default=None, validation_alias=_alias("away_offsides", "team_b_offsides"))

    referee_id: int | None = Field(default=None, validation_alias=_alias("referee_id", "refereeID"))

    @field_validator("home_goals", "away_goals", mode="before")
    @classmethod
    def _missing_goals_as_zero(cls, value: Any) -> Any:
        return 0 if value is None else value

    @model_validator(mode="after")
    def _check_final_score(self) -> "MatchRecord":
        if self.status == MatchStatus.COMPLETE and (self.home_goals < 0 or self.away_goals < 0):
            raise ValueError(f"Complete match {self.id} has a negative goal count")
        return self

    @property
    def is_complete(self) -> bool:
        """Whether the score is final."""
        return self.status == MatchStatus.COMPLETE

    @property
    def total_goals(self) -> int:
        """Combined goals of both sides."""
        return self.home_goals + self.away_goals

    @property
    def total_cards(self) -> int:
        """Combined cards shown to both sides (unknown counts as zero)."""
        return self.side_cards(home=True) + self.side_cards(home=False)

    def side_cards(self, home: bool) -> int:
        """Cards shown to one side, from the card total or yellow + red."""
        total = self.home_cards if home else self.away_cards
        if total is not None and total >= 0:
            return total
        yellow = self.home_yellow_cards if home else self.away_yellow_cards
        red = self.home_red_cards if home else self.away_red_cards
        return max(yellow or 0, 0) + max(red or 0, 0)

    def involves(self, team_id: int) -> bool:
        """Check if a team played in this match."""
        return self.home_id == team_id or self.away_id == team_id

    def is_home(self, team_id: int) -> bool:
        """Check if a team was the home side."""
        return self.home_id == team_id

    def goals_for(self, team_id: int) -> int:
        """Goals scored by the given team."""
        return self.home_goals if self.is_home(team_id) else self.away_goals

    def goals_against(self, team_id: int) -> int:
        """Goals conceded by the given team."""
        return self.away_goals if self.is_home(team_id) else self.home_goals

    def result_for(self, team_id: int) -> str:
        """Result from the given team's perspective: 'W', 'D' or 'L'."""
        scored = self.goals_for(team_id)
        conceded = self.goals_against(team_id)
        if scored > conceded:
            return "W"
        if scored < conceded:
            return "L"
        return "D"

    def stat_or_default(self, name: str, default: float) -> float:
        """
        Get an extended stat, substituting a default for unknown values.

        Absent values and the upstream negative sentinels are both treated
        as unknown.
        """
        value = getattr(self, name, None)
        if value is None or value < 0:
            return default
        return value
