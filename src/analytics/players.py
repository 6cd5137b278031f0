"""
Player Analytics Module

Individual player scoring from season totals:
- Per-game rates, consistency and impact rating
- Head-to-head player comparison
- Top performer categories across a player pool
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Sequence

from src.analytics.match_utils import team_form_string
from src.analytics.stats import average, round_half_up, standard_deviation
from src.models.match import MatchRecord
from src.models.player import PlayerRecord, PlayerSeasonStats

DEFAULT_CONSISTENCY = 50

# Impact rating weights (goals/game, assists/game, rating out of 10)
GOAL_IMPACT_WEIGHT = 30
ASSIST_IMPACT_WEIGHT = 20
RATING_IMPACT_WEIGHT = 50

RISING_STAR_MAX_APPEARANCES = 20
RISING_STAR_MIN_IMPACT = 70
VETERAN_MIN_APPEARANCES = 30
VETERAN_MIN_CONSISTENCY = 70


@dataclass
class PlayerPerformanceMetrics:
    """Derived performance figures for a single player."""

    player_id: int
    player_name: str
    position: str = "Unknown"
    appearances: int = 0
    goals: int = 0
    assists: int = 0
    average_rating: float = 0.0
    goals_per_game: float = 0.0
    assists_per_game: float = 0.0
    minutes_played: int = 0
    average_minutes_per_game: int = 0
    form: str = ""
    consistency: int = DEFAULT_CONSISTENCY  # 0-100
    impact_rating: int = 0  # 0-100

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class PlayerComparisonOutcome:
    """Which player (1 or 2) wins each dimension."""

    better_goal_scorer: int
    better_assister: int
    more_consistent: int
    higher_impact: int
    overall_better: int
    confidence_level: int


@dataclass
class PlayerComparison:
    player1: PlayerPerformanceMetrics
    player2: PlayerPerformanceMetrics
    comparison: PlayerComparisonOutcome

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class TopPerformers:
    """Top-N lists per category."""

    top_scorers: list[PlayerPerformanceMetrics] = field(default_factory=list)
    top_assisters: list[PlayerPerformanceMetrics] = field(default_factory=list)
    most_consistent: list[PlayerPerformanceMetrics] = field(default_factory=list)
    highest_impact: list[PlayerPerformanceMetrics] = field(default_factory=list)
    rising_stars: list[PlayerPerformanceMetrics] = field(default_factory=list)
    veteran_performers: list[PlayerPerformanceMetrics] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


def calculate_player_performance(
    player: PlayerRecord,
    matches: Sequence[MatchRecord],
    raw_stats: PlayerSeasonStats | None = None,
) -> PlayerPerformanceMetrics:
    """
    Calculate performance metrics for a player.

    Args:
        player: Player identity
        matches: Matches used for the form string (the player's team form)
        raw_stats: Season totals; treated as all zeros when missing

    Returns:
        PlayerPerformanceMetrics
    """
    stats = raw_stats or PlayerSeasonStats()
    appearances = stats.appearances

    goals_per_game = stats.goals / appearances if appearances > 0 else 0
    assists_per_game = stats.assists / appearances if appearances > 0 else 0
    minutes_per_game = stats.minutes_played / appearances if appearances > 0 else 0

    form = team_form_string(matches, player.team_id) if player.team_id is not None else ""

    return PlayerPerformanceMetrics(
        player_id=player.id,
        player_name=player.name,
        position=player.position or "Unknown",
        appearances=appearances,
        goals=stats.goals,
        assists=stats.assists,
        average_rating=stats.average_rating,
        goals_per_game=round_half_up(goals_per_game, 2),
        assists_per_game=round_half_up(assists_per_game, 2),
        minutes_played=stats.minutes_played,
        average_minutes_per_game=round_half_up(minutes_per_game),
        form=form,
        consistency=player_consistency(stats.match_ratings),
        impact_rating=player_impact(stats.goals, stats.assists, stats.average_rating, appearances),
    )


def player_consistency(ratings: Sequence[float] | None) -> int:
    """Consistency from the relative spread of match ratings; 50 without history."""
    if not ratings:
        return DEFAULT_CONSISTENCY

    mean = average(ratings)
    if mean == 0:
        return DEFAULT_CONSISTENCY

    return round_half_up(max(0, 100 - standard_deviation(ratings) / mean * 100))


def player_impact(goals: int, assists: int, average_rating: float, appearances: int) -> int:
    """Weighted impact rating capped at 100; 0 with no appearances."""
    if appearances == 0:
        return 0

    total = (
        goals / appearances * GOAL_IMPACT_WEIGHT
        + assists / appearances * ASSIST_IMPACT_WEIGHT
        + average_rating / 10 * RATING_IMPACT_WEIGHT
    )
    return max(0, min(100, round_half_up(total)))


def compare_players(
    player1: PlayerPerformanceMetrics,
    player2: PlayerPerformanceMetrics,
) -> PlayerComparison:
    """
    Compare two players across four dimensions.

    Ties on any dimension go to player 1. Player 1 is overall better when
    winning at least two dimensions.
    """
    better_goal_scorer = 1 if player1.goals_per_game >= player2.goals_per_game else 2
    better_assister = 1 if player1.assists_per_game >= player2.assists_per_game else 2
    more_consistent = 1 if player1.consistency >= player2.consistency else 2
    higher_impact = 1 if player1.impact_rating >= player2.impact_rating else 2

    score = [better_goal_scorer, better_assister, more_consistent, higher_impact].count(1)

    return PlayerComparison(
        player1=player1,
        player2=player2,
        comparison=PlayerComparisonOutcome(
            better_goal_scorer=better_goal_scorer,
            better_assister=better_assister,
            more_consistent=more_consistent,
            higher_impact=higher_impact,
            overall_better=1 if score >= 2 else 2,
            confidence_level=min(95, 60 + 15 * abs(score - 2)),
        ),
    )


def analyze_top_performers(
    player_metrics: Sequence[PlayerPerformanceMetrics],
    max_per_category: int = 5,
) -> TopPerformers:
    """
    Rank a player pool per category.

    Each category sorts the full pool independently; sorting is stable so
    equal values keep their input order.
    """

    def top(key: str) -> list[PlayerPerformanceMetrics]:
        return sorted(player_metrics, key=lambda p: getattr(p, key), reverse=True)[:max_per_category]

    rising_stars = sorted(
        (
            p
            for p in player_metrics
            if p.appearances < RISING_STAR_MAX_APPEARANCES and p.impact_rating > RISING_STAR_MIN_IMPACT
        ),
        key=lambda p: p.impact_rating,
        reverse=True,
    )
    veterans = sorted(
        (
            p
            for p in player_metrics
            if p.appearances > VETERAN_MIN_APPEARANCES and p.consistency > VETERAN_MIN_CONSISTENCY
        ),
        key=lambda p: p.consistency,
        reverse=True,
    )

    return TopPerformers(
        top_scorers=top("goals_per_game"),
        top_assisters=top("assists_per_game"),
        most_consistent=top("consistency"),
        highest_impact=top("impact_rating"),
        rising_stars=rising_stars[:max_per_category],
        veteran_performers=veterans[:max_per_category],
    )
