"""
Live Match Insights

Quick read of an in-progress match from its current scoreline and cards.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from src.models.match import MatchRecord

LIVE_CONFIDENCE = 75


@dataclass
class LiveMatchInsight:
    """Momentum, notable events and a simple projection for a live match."""

    match_id: int
    momentum: str = "neutral"  # "home", "away", "neutral"
    key_events: list[str] = field(default_factory=list)
    next_goal: str = "none"  # "home", "away", "none"
    projected_home_goals: int = 0
    projected_away_goals: int = 0
    confidence: int = LIVE_CONFIDENCE

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


def live_match_insight(match: MatchRecord) -> LiveMatchInsight:
    """
    Build live insights for a match.

    The leading side holds the momentum and is tipped to score next;
    the projection adds one goal to the home side.
    """
    leader = _leading_side(match)

    return LiveMatchInsight(
        match_id=match.id,
        momentum=leader or "neutral",
        key_events=key_events(match),
        next_goal=leader or "none",
        projected_home_goals=match.home_goals + 1,
        projected_away_goals=match.away_goals,
    )


def key_events(match: MatchRecord) -> list[str]:
    events = []

    if match.home_goals > 0:
        events.append(f"{match.home_goals} home goals")
    if match.away_goals > 0:
        events.append(f"{match.away_goals} away goals")
    if match.home_red_cards and match.home_red_cards > 0:
        events.append(f"{match.home_red_cards} home red cards")
    if match.away_red_cards and match.away_red_cards > 0:
        events.append(f"{match.away_red_cards} away red cards")

    return events


def _leading_side(match: MatchRecord) -> str | None:
    if match.home_goals > match.away_goals:
        return "home"
    if match.away_goals > match.home_goals:
        return "away"
    return None
