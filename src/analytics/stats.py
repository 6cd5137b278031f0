"""
Statistical Primitives

Generic numeric utilities used by every analytics engine:
- Averages, spread and order statistics
- Trend classification and moving averages
- Poisson goal modelling
- Elo rating updates

All functions are pure and return 0 (or "stable") for empty input
instead of raising.
"""

import math
from dataclasses import asdict, dataclass
from typing import Any, Iterable, Sequence

import numpy as np

# Score grid bound for Poisson outcome sums (0..5 goals per side).
# Tail mass beyond five goals is treated as negligible.
MAX_GRID_GOALS = 5

TREND_THRESHOLD = 0.05
DEFAULT_K_FACTOR = 32
DEFAULT_ELO_RATING = 1000


@dataclass
class OutcomeProbabilities:
    """Home win / draw / away win percentages."""

    home_win: float = 0.0
    draw: float = 0.0
    away_win: float = 0.0

    @property
    def total(self) -> float:
        """Sum of the three outcomes."""
        return self.home_win + self.draw + self.away_win

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


def round_half_up(value: float, decimals: int = 0) -> float:
    """
    Round with exact halves going up (12.5 -> 13, 1.125 -> 1.13).

    Args:
        value: Number to round
        decimals: Decimal places to keep

    Returns:
        An int when decimals is 0, otherwise a float
    """
    if decimals == 0:
        return int(math.floor(value + 0.5))
    factor = 10**decimals
    return math.floor(value * factor + 0.5) / factor


def average(values: Sequence[float]) -> float:
    """Arithmetic mean rounded to 2 decimal places."""
    if len(values) == 0:
        return 0
    return round_half_up(float(np.mean(values)), 2)


def standard_deviation(values: Sequence[float]) -> float:
    """Population standard deviation (divides by N)."""
    if len(values) == 0:
        return 0
    return float(np.std(values))


def median(values: Sequence[float]) -> float:
    """Median; averages the two central values for even-length input."""
    if len(values) == 0:
        return 0
    return float(np.median(values))


def percentile(values: Sequence[float], p: float) -> float:
    """
    Percentile by linear interpolation between closest ranks.

    The fractional index p/100 * (n - 1) over the ascending-sorted values
    is interpolated between its floor and ceiling neighbours.
    """
    if len(values) == 0:
        return 0
    return float(np.percentile(values, p))


def trend(values: Sequence[float]) -> str:
    """
    Classify a sequence as "increasing", "decreasing" or "stable".

    Compares the average of the second half against the first half
    (split at floor(n / 2)); a change larger than 5% of the first-half
    average counts as a trend.
    """
    if len(values) < 2:
        return "stable"

    middle = len(values) // 2
    first_avg = average(values[:middle])
    second_avg = average(values[middle:])

    difference = second_avg - first_avg
    threshold = first_avg * TREND_THRESHOLD

    if difference > threshold:
        return "increasing"
    if difference < -threshold:
        return "decreasing"
    return "stable"


def moving_average(values: Sequence[float], window: int) -> list[float]:
    """
    Trailing moving average rounded to 2 decimals.

    Sequences shorter than the window are returned unchanged.
    """
    if len(values) < window or window <= 0:
        return list(values)

    return [
        round_half_up(sum(values[i - window + 1 : i + 1]) / window, 2)
        for i in range(window - 1, len(values))
    ]


def trend_strength(values: Sequence[float]) -> float:
    """Percentage change from the first to the last value."""
    if len(values) < 2:
        return 0
    first, last = values[0], values[-1]
    if first == 0:
        return 0
    return round_half_up((last - first) / first * 100, 2)


def detect_seasonality(values: Sequence[float], period: int) -> bool:
    """
    Detect periodic structure with a lag-product autocorrelation.

    Requires at least two full periods of data.
    """
    if period <= 0 or len(values) < period * 2:
        return False

    correlations = []
    for lag in range(1, period + 1):
        products = [values[i] * values[i - lag] for i in range(lag, len(values))]
        correlations.append(sum(products) / len(products) if products else 0)

    return max(correlations) > 0.5


def poisson_probability(lam: float, k: int) -> float:
    """Poisson PMF: lam^k * e^-lam / k!"""
    return (lam**k) * math.exp(-lam) / math.factorial(k)


def score_grid(home_expectancy: float, away_expectancy: float) -> Iterable[tuple[int, int, float]]:
    """Yield (home_goals, away_goals, joint probability) over the 0..5 grid."""
    home_pmf = [poisson_probability(home_expectancy, k) for k in range(MAX_GRID_GOALS + 1)]
    away_pmf = [poisson_probability(away_expectancy, k) for k in range(MAX_GRID_GOALS + 1)]
    for home_goals, p_home in enumerate(home_pmf):
        for away_goals, p_away in enumerate(away_pmf):
            yield home_goals, away_goals, p_home * p_away


def match_outcome_probabilities(
    home_expectancy: float,
    away_expectancy: float,
) -> OutcomeProbabilities:
    """
    Outcome percentages from independent Poisson goal counts.

    Args:
        home_expectancy: Expected goals for the home side
        away_expectancy: Expected goals for the away side

    Returns:
        OutcomeProbabilities in percent, rounded to 2 decimals
    """
    home_win = draw = away_win = 0.0

    for home_goals, away_goals, probability in score_grid(home_expectancy, away_expectancy):
        if home_goals > away_goals:
            home_win += probability
        elif home_goals < away_goals:
            away_win += probability
        else:
            draw += probability

    return OutcomeProbabilities(
        home_win=round_half_up(home_win * 100, 2),
        draw=round_half_up(draw * 100, 2),
        away_win=round_half_up(away_win * 100, 2),
    )


def elo_update(
    current_rating: float,
    opponent_rating: float,
    result: float,
    k_factor: float = DEFAULT_K_FACTOR,
) -> int:
    """
    Standard Elo update.

    Args:
        current_rating: Rating before the match
        opponent_rating: Opponent's rating
        result: 1 for a win, 0.5 for a draw, 0 for a loss
        k_factor: Update step size

    Returns:
        New rating rounded to the nearest integer
    """
    expected = 1 / (1 + 10 ** ((opponent_rating - current_rating) / 400))
    return round_half_up(current_rating + k_factor * (result - expected))


def elo_rating(
    results: Iterable[float],
    initial: float = DEFAULT_ELO_RATING,
    opponent_rating: float = DEFAULT_ELO_RATING,
    k_factor: float = DEFAULT_K_FACTOR,
) -> int:
    """Fold elo_update over a sequence of results against a fixed-rated opponent."""
    rating = round_half_up(initial)
    for result in results:
        rating = elo_update(rating, opponent_rating, result, k_factor)
    return rating
