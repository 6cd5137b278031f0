"""
Prediction Data Models

Pydantic options and dataclass results for the match prediction engine.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from pydantic import BaseModel, Field

from src.analytics.stats import OutcomeProbabilities, round_half_up


class PredictionOptions(BaseModel):
    """Options for a single match prediction."""

    # Data sources
    include_form: bool = True
    include_h2h: bool = False
    include_venue: bool = False

    # Sample sizes
    form_matches: int = Field(default=5, ge=1, le=20)
    h2h_matches: int = Field(default=10, ge=1, le=50)

    # Goal model
    league_average_goals: float = Field(default=1.5, gt=0.0)
    home_advantage: float = Field(default=1.1, ge=1.0, le=2.0)


@dataclass
class CornerExpectation:
    """Expected corners per side."""

    home: float = 5.5
    away: float = 5.5

    @property
    def total(self) -> float:
        """Expected corners for both sides."""
        return round_half_up(self.home + self.away, 2)


@dataclass
class PredictionResult:
    """Complete prediction for a fixture."""

    # Teams
    home_team_id: int
    away_team_id: int
    home_team_name: str = ""
    away_team_name: str = ""

    # Goal model
    home_goal_expectancy: float = 0.0
    away_goal_expectancy: float = 0.0

    # Probabilities (percent)
    outcome: OutcomeProbabilities = field(default_factory=OutcomeProbabilities)
    btts: float = 0.0
    over25: float = 0.0

    confidence: int = 50  # 0-95
    key_factors: list[str] = field(default_factory=list)
    corners: CornerExpectation = field(default_factory=CornerExpectation)

    @property
    def total_goal_expectancy(self) -> float:
        """Expected goals for both sides."""
        return self.home_goal_expectancy + self.away_goal_expectancy

    @property
    def favourite(self) -> str:
        """Most likely outcome: home, draw or away."""
        outcomes = {
            "home": self.outcome.home_win,
            "draw": self.outcome.draw,
            "away": self.outcome.away_win,
        }
        return max(outcomes, key=outcomes.get)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data = asdict(self)
        data["corners"]["total"] = self.corners.total
        return data
