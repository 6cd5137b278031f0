"""
Prediction Output Module

Text report and JSON-ready output for match predictions.
"""

from __future__ import annotations

from typing import Any

from prediction.models import PredictionResult
from src.analytics.stats import round_half_up

FAVOURITE_LABELS = {"home": "Home win", "draw": "Draw", "away": "Away win"}


def format_prediction_report(prediction: PredictionResult, include_details: bool = True) -> str:
    """
    Generate formatted text report from a prediction.

    Args:
        prediction: PredictionResult to format
        include_details: Whether to include key factors and corners

    Returns:
        Formatted report string
    """
    lines = []

    # Header
    lines.append("=" * 60)
    lines.append("MATCH PREDICTION REPORT")
    lines.append("=" * 60)
    lines.append("")

    # Fixture
    lines.append(f"{prediction.home_team_name} vs {prediction.away_team_name}")
    lines.append("-" * 40)
    lines.append("")

    # Outcome probabilities
    lines.append("OUTCOME PROBABILITIES:")
    lines.append(f"  {prediction.home_team_name}: {format_percentage(prediction.outcome.home_win)}")
    lines.append(f"  Draw: {format_percentage(prediction.outcome.draw)}")
    lines.append(f"  {prediction.away_team_name}: {format_percentage(prediction.outcome.away_win)}")
    lines.append("")

    # Goals
    lines.append("GOALS:")
    lines.append(
        f"  Expected Goals: {prediction.home_goal_expectancy:.2f} - "
        f"{prediction.away_goal_expectancy:.2f}"
    )
    lines.append(f"  Both Teams To Score: {format_percentage(prediction.btts)}")
    lines.append(f"  Over 2.5 Goals: {format_percentage(prediction.over25)}")
    lines.append("")

    lines.append("PREDICTION:")
    lines.append(f"  Most Likely: {FAVOURITE_LABELS[prediction.favourite]}")
    lines.append(f"  Confidence: {prediction.confidence}%")
    lines.append("")

    if include_details:
        if prediction.key_factors:
            lines.append("KEY FACTORS:")
            for factor in prediction.key_factors:
                lines.append(f"  + {factor}")
            lines.append("")

        lines.append("CORNERS:")
        lines.append(
            f"  Expected: {prediction.corners.home:.1f} - {prediction.corners.away:.1f} "
            f"(total {prediction.corners.total:.1f})"
        )

    lines.append("")
    lines.append("=" * 60)

    return "\n".join(lines)


def prediction_to_json(prediction: PredictionResult) -> dict[str, Any]:
    """
    Generate JSON-serializable output.

    Args:
        prediction: PredictionResult to convert

    Returns:
        Dictionary suitable for JSON serialization
    """
    return {
        "fixture": {
            "home_team": {
                "id": prediction.home_team_id,
                "name": prediction.home_team_name,
            },
            "away_team": {
                "id": prediction.away_team_id,
                "name": prediction.away_team_name,
            },
        },
        "goal_expectancy": {
            "home": round_half_up(prediction.home_goal_expectancy, 2),
            "away": round_half_up(prediction.away_goal_expectancy, 2),
            "total": round_half_up(prediction.total_goal_expectancy, 2),
        },
        "probabilities": {
            "home_win": prediction.outcome.home_win,
            "draw": prediction.outcome.draw,
            "away_win": prediction.outcome.away_win,
            "btts": prediction.btts,
            "over25": prediction.over25,
        },
        "prediction": {
            "most_likely": prediction.favourite,
            "confidence": prediction.confidence,
        },
        "corners": {
            "home": round_half_up(prediction.corners.home, 2),
            "away": round_half_up(prediction.corners.away, 2),
            "total": prediction.corners.total,
        },
        "key_factors": list(prediction.key_factors),
    }


def format_percentage(value: float, decimal_places: int = 1) -> str:
    """Format a 0-100 percentage as a string."""
    return f"{value:.{decimal_places}f}%"
