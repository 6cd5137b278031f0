"""
Team Performance Module

Per-team analytics computed from match collections:
- Aggregate performance metrics and percentages
- Form, momentum and consistency over a trailing window
- Home/away splits
- Head-to-head comparison with a simple outcome model
- Composite strength rating

Every function returns a populated result object; empty input yields an
all-zero result rather than None so results can be composed without checks.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Sequence

from src.analytics.match_utils import team_matches
from src.analytics.stats import average, round_half_up, trend
from src.models.match import MatchRecord

FORM_POINTS = {"W": 3, "D": 1, "L": 0}

# Outcome model constants
HOME_STRENGTH_BONUS = 10
DRAW_BASELINE = 30
HIGH_CONFIDENCE_MEETINGS = 5

STREAK_PENALTY = 15


@dataclass
class TeamPerformanceMetrics:
    """Aggregate results for one team over a set of matches."""

    matches_played: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    goals_for: int = 0
    goals_against: int = 0
    goal_difference: int = 0
    clean_sheets: int = 0
    failed_to_score: int = 0
    average_goals_for: float = 0.0
    average_goals_against: float = 0.0
    win_percentage: float = 0.0
    draw_percentage: float = 0.0
    loss_percentage: float = 0.0
    clean_sheet_percentage: float = 0.0
    btts_percentage: float = 0.0
    over25_percentage: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class TeamFormAnalysis:
    """Recent form over a trailing window of matches."""

    form: str = ""  # e.g. "WWDLW", most recent last
    form_points: int = 0
    form_goals_for: int = 0
    form_goals_against: int = 0
    form_trend: str = "stable"  # "improving", "declining", "stable"
    momentum: str = "low"  # "high", "medium", "low"
    consistency: int = 0  # 0-100

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class HomeAwaySplit:
    """Separate metrics for home and away matches."""

    home: TeamPerformanceMetrics = field(default_factory=TeamPerformanceMetrics)
    away: TeamPerformanceMetrics = field(default_factory=TeamPerformanceMetrics)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class HeadToHeadSummary:
    """Aggregate of previous meetings between two teams."""

    total_meetings: int = 0
    home_wins: int = 0  # wins by the team playing at home in the fixture analysed
    away_wins: int = 0
    draws: int = 0
    home_advantage: float = 0.0  # home_wins as a percentage of meetings
    average_goals: float = 0.0
    btts_percentage: float = 0.0


@dataclass
class OutcomePrediction:
    """Win/draw/loss percentages and a coarse confidence level."""

    home_win_probability: int = 0
    draw_probability: int = 0
    away_win_probability: int = 0
    confidence: int = 60


@dataclass
class TeamComparison:
    """Two-team comparison."""

    home_team: TeamPerformanceMetrics
    away_team: TeamPerformanceMetrics
    head_to_head: HeadToHeadSummary
    prediction: OutcomePrediction

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


def calculate_performance_metrics(
    matches: Sequence[MatchRecord],
    team_id: int,
) -> TeamPerformanceMetrics:
    """
    Calculate aggregate performance metrics for a team.

    Args:
        matches: Match pool; only matches involving the team are used
        team_id: Team to analyse

    Returns:
        TeamPerformanceMetrics (all zeros when the team has no matches)
    """
    played = team_matches(matches, team_id)
    if not played:
        return TeamPerformanceMetrics()

    wins = draws = losses = 0
    goals_for = goals_against = clean_sheets = failed_to_score = 0
    btts = over25 = 0

    for match in played:
        scored = match.goals_for(team_id)
        conceded = match.goals_against(team_id)

        goals_for += scored
        goals_against += conceded

        if scored == 0:
            failed_to_score += 1
        if conceded == 0:
            clean_sheets += 1

        if scored > conceded:
            wins += 1
        elif scored < conceded:
            losses += 1
        else:
            draws += 1

        if match.home_goals > 0 and match.away_goals > 0:
            btts += 1
        if match.total_goals > 2.5:
            over25 += 1

    total = len(played)

    return TeamPerformanceMetrics(
        matches_played=total,
        wins=wins,
        draws=draws,
        losses=losses,
        goals_for=goals_for,
        goals_against=goals_against,
        goal_difference=goals_for - goals_against,
        clean_sheets=clean_sheets,
        failed_to_score=failed_to_score,
        average_goals_for=average([goals_for / total]),
        average_goals_against=average([goals_against / total]),
        win_percentage=wins / total * 100,
        draw_percentage=draws / total * 100,
        loss_percentage=losses / total * 100,
        clean_sheet_percentage=clean_sheets / total * 100,
        btts_percentage=btts / total * 100,
        over25_percentage=over25 / total * 100,
    )


def analyze_team_form(
    matches: Sequence[MatchRecord],
    team_id: int,
    window_size: int = 5,
) -> TeamFormAnalysis:
    """
    Analyse a team's form over its last N matches.

    Matches must already be in chronological order (oldest first); they
    are not sorted here.

    Args:
        matches: Match pool in kickoff order
        team_id: Team to analyse
        window_size: Number of trailing matches to consider

    Returns:
        TeamFormAnalysis (empty form when the team has no matches)
    """
    window = team_matches(matches, team_id)[-window_size:] if window_size > 0 else []
    if not window:
        return TeamFormAnalysis()

    results = [match.result_for(team_id) for match in window]
    form = "".join(results)
    goals_for = sum(match.goals_for(team_id) for match in window)
    goals_against = sum(match.goals_against(team_id) for match in window)

    return TeamFormAnalysis(
        form=form,
        form_points=form_points(form),
        form_goals_for=goals_for,
        form_goals_against=goals_against,
        form_trend=_form_trend(results),
        momentum=_momentum(form, goals_for, goals_against),
        consistency=_consistency(results),
    )


def calculate_home_away_performance(
    matches: Sequence[MatchRecord],
    team_id: int,
) -> HomeAwaySplit:
    """Metrics for strictly-home and strictly-away matches."""
    home_matches = [match for match in matches if match.home_id == team_id]
    away_matches = [match for match in matches if match.away_id == team_id]

    return HomeAwaySplit(
        home=calculate_performance_metrics(home_matches, team_id),
        away=calculate_performance_metrics(away_matches, team_id),
    )


def compare_teams(
    all_matches: Sequence[MatchRecord],
    home_team_id: int,
    away_team_id: int,
    h2h_matches: Sequence[MatchRecord] | None = None,
) -> TeamComparison:
    """
    Compare two teams and estimate the outcome of a meeting.

    Args:
        all_matches: Match pool used for both teams' metrics
        home_team_id: Team playing at home
        away_team_id: Team playing away
        h2h_matches: Previous meetings; derived from all_matches when omitted

    Returns:
        TeamComparison with metrics, head-to-head and prediction
    """
    home_metrics = calculate_performance_metrics(all_matches, home_team_id)
    away_metrics = calculate_performance_metrics(all_matches, away_team_id)

    if h2h_matches is None:
        h2h_matches = [
            match
            for match in all_matches
            if {match.home_id, match.away_id} == {home_team_id, away_team_id}
        ]

    head_to_head = analyze_head_to_head(h2h_matches, home_team_id, away_team_id)
    prediction = predict_outcome(home_metrics, away_metrics, head_to_head)

    return TeamComparison(
        home_team=home_metrics,
        away_team=away_metrics,
        head_to_head=head_to_head,
        prediction=prediction,
    )


def analyze_head_to_head(
    h2h_matches: Sequence[MatchRecord],
    home_team_id: int,
    away_team_id: int,
) -> HeadToHeadSummary:
    """
    Summarise previous meetings.

    Decisive results are credited to whichever of the two teams won,
    regardless of which side hosted that meeting.
    """
    if not h2h_matches:
        return HeadToHeadSummary()

    home_wins = away_wins = draws = total_goals = btts = 0

    for match in h2h_matches:
        total_goals += match.total_goals
        if match.home_goals > 0 and match.away_goals > 0:
            btts += 1

        if match.home_goals > match.away_goals:
            if match.home_id == home_team_id:
                home_wins += 1
            else:
                away_wins += 1
        elif match.away_goals > match.home_goals:
            if match.away_id == away_team_id:
                away_wins += 1
            else:
                home_wins += 1
        else:
            draws += 1

    meetings = len(h2h_matches)

    return HeadToHeadSummary(
        total_meetings=meetings,
        home_wins=home_wins,
        away_wins=away_wins,
        draws=draws,
        home_advantage=home_wins / meetings * 100,
        average_goals=total_goals / meetings,
        btts_percentage=btts / meetings * 100,
    )


def predict_outcome(
    home_metrics: TeamPerformanceMetrics,
    away_metrics: TeamPerformanceMetrics,
    head_to_head: HeadToHeadSummary,
) -> OutcomePrediction:
    """
    Strength-share outcome model.

    Strength is win percentage plus twice the goal difference; the home
    side gets a flat bonus and a fixed baseline is reserved for the draw.
    """
    home_strength = max(0, home_metrics.win_percentage + home_metrics.goal_difference * 2 + HOME_STRENGTH_BONUS)
    away_strength = max(0, away_metrics.win_percentage + away_metrics.goal_difference * 2)

    total = home_strength + away_strength + DRAW_BASELINE

    home_win = home_strength / total * 100
    away_win = away_strength / total * 100
    draw = 100 - home_win - away_win

    confidence = 75 if head_to_head.total_meetings > HIGH_CONFIDENCE_MEETINGS else 60

    return OutcomePrediction(
        home_win_probability=round_half_up(home_win),
        draw_probability=round_half_up(draw),
        away_win_probability=round_half_up(away_win),
        confidence=confidence,
    )


def calculate_team_strength(metrics: TeamPerformanceMetrics, form: TeamFormAnalysis) -> int:
    """
    Composite 0-100 strength rating.

    60% performance (win%, capped goal-difference bonus, clean sheets,
    loss avoidance) and 40% form (points and consistency), plus flat
    momentum and trend bonuses.
    """
    goal_difference_bonus = min(metrics.goal_difference * 2, 40) if metrics.goal_difference > 0 else 0

    performance_score = (
        metrics.win_percentage * 0.4
        + goal_difference_bonus * 0.3
        + metrics.clean_sheet_percentage * 0.2
        + (100 - metrics.loss_percentage) * 0.1
    )
    form_score = form.form_points * 4 + form.consistency * 0.4

    momentum_bonus = {"high": 10, "medium": 5}.get(form.momentum, 0)
    trend_bonus = {"improving": 5, "declining": -5}.get(form.form_trend, 0)

    total = performance_score * 0.6 + form_score * 0.4 + momentum_bonus + trend_bonus
    return max(0, min(100, round_half_up(total)))


def form_points(form: str) -> int:
    """Points from a W/D/L string (W=3, D=1, L=0)."""
    return sum(FORM_POINTS.get(result, 0) for result in form)


def _form_trend(results: list[str]) -> str:
    per_match_points = [FORM_POINTS[result] for result in results]
    direction = trend(per_match_points)
    if direction == "increasing":
        return "improving"
    if direction == "decreasing":
        return "declining"
    return "stable"


def _momentum(form: str, goals_for: int, goals_against: int) -> str:
    recent_points = form_points(form[-3:])
    goal_difference = goals_for - goals_against

    if recent_points >= 7 and goal_difference > 0:
        return "high"
    if recent_points >= 4 or goal_difference >= 0:
        return "medium"
    return "low"


def _consistency(results: list[str]) -> int:
    if not results:
        return 0
    longest = max(_longest_streak(results, "W"), _longest_streak(results, "L"))
    return max(0, 100 - longest * STREAK_PENALTY)


def _longest_streak(results: list[str], target: str) -> int:
    longest = current = 0
    for result in results:
        if result == target:
            current += 1
            longest = max(longest, current)
        else:
            current = 0
    return longest
