"""
Match Predictor

Poisson goal model for a single fixture:
- Goal expectancy from a league baseline, home advantage and recent form
- Win/draw/loss, BTTS and over/under probabilities from the score grid
- Data-availability confidence and key factors
- Corner expectation from recent matches
"""

from __future__ import annotations

from typing import Sequence

from loguru import logger

from prediction.models import CornerExpectation, PredictionOptions, PredictionResult
from src.analytics.match_utils import team_form_string
from src.analytics.stats import (
    average,
    match_outcome_probabilities,
    poisson_probability,
    round_half_up,
    score_grid,
)
from src.models.match import MatchRecord
from src.models.team import TeamRecord

MIN_GOAL_EXPECTANCY = 0.1
DEFAULT_CORNERS_PER_SIDE = 5.5

# Confidence increments by available data
BASE_CONFIDENCE = 50
FULL_FORM_MATCHES = 5
FORM_CONFIDENCE = 10
H2H_CONFIDENCE = 15
VENUE_CONFIDENCE = 10
MAX_CONFIDENCE = 95


def predict_match(
    home_team: TeamRecord,
    away_team: TeamRecord,
    home_form_matches: Sequence[MatchRecord],
    away_form_matches: Sequence[MatchRecord],
    options: PredictionOptions | None = None,
) -> PredictionResult:
    """
    Predict the outcome of a fixture.

    Args:
        home_team: Team playing at home
        away_team: Team playing away
        home_form_matches: Home team's recent matches, oldest first
        away_form_matches: Away team's recent matches, oldest first
        options: Prediction options (defaults used when None)

    Returns:
        PredictionResult with expectancies, probabilities and confidence
    """
    options = options or PredictionOptions()

    if not options.include_form:
        home_form_matches, away_form_matches = [], []

    home_xg = goal_expectancy(home_team.id, home_form_matches, True, options)
    away_xg = goal_expectancy(away_team.id, away_form_matches, False, options)

    logger.debug(
        f"Goal expectancy {home_team.display_name} {home_xg:.2f} - "
        f"{away_xg:.2f} {away_team.display_name}"
    )

    return PredictionResult(
        home_team_id=home_team.id,
        away_team_id=away_team.id,
        home_team_name=home_team.display_name,
        away_team_name=away_team.display_name,
        home_goal_expectancy=home_xg,
        away_goal_expectancy=away_xg,
        outcome=match_outcome_probabilities(home_xg, away_xg),
        btts=btts_probability(home_xg, away_xg),
        over25=over_probability(home_xg, away_xg, 2.5),
        confidence=prediction_confidence(home_form_matches, away_form_matches, options),
        key_factors=identify_key_factors(home_team, away_team, home_form_matches, away_form_matches),
        corners=estimate_corners(home_team.id, away_team.id, home_form_matches, away_form_matches),
    )


def goal_expectancy(
    team_id: int,
    form_matches: Sequence[MatchRecord],
    is_home: bool,
    options: PredictionOptions | None = None,
) -> float:
    """
    Expected goals for one side.

    Starts from the league average, applies the home multiplier, then
    averages 50/50 with the team's scoring in its most recent form
    matches. Never below 0.1.
    """
    options = options or PredictionOptions()

    expectancy = options.league_average_goals
    if is_home:
        expectancy *= options.home_advantage

    recent = list(form_matches)[-options.form_matches :]
    if recent:
        form_average = average([match.goals_for(team_id) for match in recent])
        expectancy = (expectancy + form_average) / 2

    return max(MIN_GOAL_EXPECTANCY, expectancy)


def btts_probability(home_xg: float, away_xg: float) -> float:
    """Both-teams-to-score percentage from each side's P(0 goals)."""
    home_blank = poisson_probability(home_xg, 0)
    away_blank = poisson_probability(away_xg, 0)
    return round_half_up((1 - home_blank) * (1 - away_blank) * 100, 2)


def over_probability(home_xg: float, away_xg: float, threshold: float = 2.5) -> float:
    """Percentage of the 0..5 score grid with more total goals than the threshold."""
    total = sum(p for home, away, p in score_grid(home_xg, away_xg) if home + away > threshold)
    return round_half_up(total * 100, 2)


def prediction_confidence(
    home_form_matches: Sequence[MatchRecord],
    away_form_matches: Sequence[MatchRecord],
    options: PredictionOptions,
) -> int:
    """Additive confidence from the data available, capped at 95."""
    confidence = BASE_CONFIDENCE

    if len(home_form_matches) >= FULL_FORM_MATCHES:
        confidence += FORM_CONFIDENCE
    if len(away_form_matches) >= FULL_FORM_MATCHES:
        confidence += FORM_CONFIDENCE
    if options.include_h2h:
        confidence += H2H_CONFIDENCE
    if options.include_venue:
        confidence += VENUE_CONFIDENCE

    return min(MAX_CONFIDENCE, confidence)


def identify_key_factors(
    home_team: TeamRecord,
    away_team: TeamRecord,
    home_form_matches: Sequence[MatchRecord],
    away_form_matches: Sequence[MatchRecord],
) -> list[str]:
    factors = []

    if home_form_matches:
        factors.append(f"Home team form: {team_form_string(home_form_matches, home_team.id)}")
    if away_form_matches:
        factors.append(f"Away team form: {team_form_string(away_form_matches, away_team.id)}")

    factors.append("Home advantage considered")
    factors.append("Goal expectancy calculated")

    return factors


def estimate_corners(
    home_team_id: int,
    away_team_id: int,
    home_form_matches: Sequence[MatchRecord],
    away_form_matches: Sequence[MatchRecord],
) -> CornerExpectation:
    """
    Expected corners won by each side.

    Upstream reports unknown corner counts as negative sentinels; those and
    missing values are skipped. A side with no usable data gets 5.5.
    """
    return CornerExpectation(
        home=_average_corners(home_team_id, home_form_matches),
        away=_average_corners(away_team_id, away_form_matches),
    )


def _average_corners(team_id: int, matches: Sequence[MatchRecord]) -> float:
    corners = []
    for match in matches:
        if not match.involves(team_id):
            continue
        field_name = "home_corners" if match.is_home(team_id) else "away_corners"
        value = match.stat_or_default(field_name, -1)
        if value >= 0:
            corners.append(value)

    return average(corners) if corners else DEFAULT_CORNERS_PER_SIDE
