"""
Referee Analytics Module

Officiating tendencies derived from the matches a referee took charge of:
strictness, consistency, controversy, and the referee's effect on home
advantage, scoring and individual teams.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Sequence

from src.analytics.stats import average, round_half_up, standard_deviation
from src.models.match import MatchRecord
from src.models.referee import RefereeRecord, RefereeSeasonStats
from src.models.team import TeamRecord

NEUTRAL_RATING = 50

# Strictness scale: 0..6 cards per match maps to 0..100
MAX_EXPECTED_CARDS = 6
MIN_MATCHES_FOR_CONSISTENCY = 3

HIGH_CARD_MATCH = 4
LOPSIDED_MARGIN = 3

TYPICAL_HOME_WIN_PERCENTAGE = 47.5
TYPICAL_GOALS_PER_MATCH = 2.75

LENIENT_CARDS = 2
STRICT_CARDS = 4
LOW_SCORING_GOALS = 2.2
HIGH_SCORING_GOALS = 3.2


@dataclass
class RefereePerformanceMetrics:
    """Officiating figures for a referee."""

    referee_id: int
    referee_name: str
    matches_officiated: int = 0
    average_cards_per_game: float = 0.0
    average_goals_per_game: float = 0.0
    home_win_percentage: float = 0.0
    away_win_percentage: float = 0.0
    draw_percentage: float = 0.0
    strictness_rating: int = NEUTRAL_RATING
    consistency: int = NEUTRAL_RATING
    controversy_rating: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class RefereeImpact:
    home_advantage_effect: float = 0.0
    game_flow_effect: float = 0.0
    card_tendency: str = "average"  # "lenient", "average", "strict"
    goal_tendency: str = "average"  # "low-scoring", "average", "high-scoring"


@dataclass
class TeamRefereeEffect:
    team_id: int
    team_name: str
    win_rate_with_referee: float
    average_goals_with_referee: float
    average_cards_with_referee: float


@dataclass
class RefereeImpactAnalysis:
    """Referee metrics plus match and per-team effects."""

    referee: RefereePerformanceMetrics
    impact: RefereeImpact
    team_effects: list[TeamRefereeEffect] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


def _referee_matches(matches: Sequence[MatchRecord], referee_id: int) -> list[MatchRecord]:
    return [match for match in matches if match.referee_id == referee_id]


def calculate_referee_performance(
    referee: RefereeRecord,
    matches: Sequence[MatchRecord],
    raw_stats: RefereeSeasonStats | None = None,
) -> RefereePerformanceMetrics:
    """
    Calculate officiating metrics for a referee.

    Args:
        referee: Referee identity
        matches: Match pool; filtered by referee_id
        raw_stats: Upstream season totals. Every derived figure needs
            match-level data, so these never replace the match filter.

    Returns:
        RefereePerformanceMetrics (neutral sentinel when no matches match)
    """
    officiated = _referee_matches(matches, referee.id)
    if not officiated:
        return RefereePerformanceMetrics(referee_id=referee.id, referee_name=referee.name)

    count = len(officiated)
    total_cards = sum(match.total_cards for match in officiated)
    total_goals = sum(match.total_goals for match in officiated)

    home_wins = sum(1 for match in officiated if match.home_goals > match.away_goals)
    away_wins = sum(1 for match in officiated if match.away_goals > match.home_goals)
    draws = count - home_wins - away_wins

    cards_per_game = total_cards / count

    return RefereePerformanceMetrics(
        referee_id=referee.id,
        referee_name=referee.name,
        matches_officiated=count,
        average_cards_per_game=round_half_up(cards_per_game, 2),
        average_goals_per_game=round_half_up(total_goals / count, 2),
        home_win_percentage=round_half_up(home_wins / count * 100, 2),
        away_win_percentage=round_half_up(away_wins / count * 100, 2),
        draw_percentage=round_half_up(draws / count * 100, 2),
        strictness_rating=round_half_up(min(100, cards_per_game / MAX_EXPECTED_CARDS * 100)),
        consistency=_referee_consistency(officiated),
        controversy_rating=_controversy(officiated),
    )


def analyze_referee_impact(
    referee_metrics: RefereePerformanceMetrics,
    matches: Sequence[MatchRecord],
    teams: Sequence[TeamRecord],
) -> RefereeImpactAnalysis:
    """
    Analyse how a referee shapes matches.

    Effects are measured against a typical 47.5% home-win rate and
    2.75 goals per match.
    """
    officiated = _referee_matches(matches, referee_metrics.referee_id)

    impact = RefereeImpact(
        home_advantage_effect=_home_advantage_effect(officiated),
        game_flow_effect=_game_flow_effect(officiated),
        card_tendency=card_tendency(referee_metrics.average_cards_per_game),
        goal_tendency=goal_tendency(referee_metrics.average_goals_per_game),
    )

    return RefereeImpactAnalysis(
        referee=referee_metrics,
        impact=impact,
        team_effects=_team_effects(officiated, teams),
    )


def card_tendency(average_cards: float) -> str:
    if average_cards < LENIENT_CARDS:
        return "lenient"
    if average_cards > STRICT_CARDS:
        return "strict"
    return "average"


def goal_tendency(average_goals: float) -> str:
    if average_goals < LOW_SCORING_GOALS:
        return "low-scoring"
    if average_goals > HIGH_SCORING_GOALS:
        return "high-scoring"
    return "average"


def _referee_consistency(matches: list[MatchRecord]) -> int:
    if len(matches) < MIN_MATCHES_FOR_CONSISTENCY:
        return NEUTRAL_RATING

    cards = [match.total_cards for match in matches]
    mean = average(cards)
    if mean <= 0:
        return NEUTRAL_RATING

    # Half the penalty applied to player rating spread
    return round_half_up(max(0, 100 - standard_deviation(cards) / mean * 50))


def _controversy(matches: list[MatchRecord]) -> int:
    score = 0
    for match in matches:
        if match.total_cards > HIGH_CARD_MATCH:
            score += 10
        if abs(match.home_goals - match.away_goals) > LOPSIDED_MARGIN:
            score += 5
    return min(100, score)


def _home_advantage_effect(matches: list[MatchRecord]) -> float:
    if not matches:
        return 0
    home_wins = sum(1 for match in matches if match.home_goals > match.away_goals)
    return round_half_up(home_wins / len(matches) * 100 - TYPICAL_HOME_WIN_PERCENTAGE, 2)


def _game_flow_effect(matches: list[MatchRecord]) -> float:
    if not matches:
        return 0
    goals = sum(match.total_goals for match in matches)
    return round_half_up(goals / len(matches) - TYPICAL_GOALS_PER_MATCH, 2)


def _team_effects(matches: list[MatchRecord], teams: Sequence[TeamRecord]) -> list[TeamRefereeEffect]:
    effects = []
    for team in teams:
        played = [match for match in matches if match.involves(team.id)]
        if not played:
            continue

        wins = sum(1 for match in played if match.result_for(team.id) == "W")
        goals = sum(match.goals_for(team.id) for match in played)
        cards = sum(match.side_cards(match.is_home(team.id)) for match in played)
        count = len(played)

        effects.append(
            TeamRefereeEffect(
                team_id=team.id,
                team_name=team.display_name,
                win_rate_with_referee=round_half_up(wins / count * 100, 2),
                average_goals_with_referee=round_half_up(goals / count, 2),
                average_cards_with_referee=round_half_up(cards / count, 2),
            )
        )

    effects.sort(key=lambda effect: effect.win_rate_with_referee, reverse=True)
    return effects
