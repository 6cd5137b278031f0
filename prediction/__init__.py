"""
Prediction Module

This module contains the Poisson match prediction engine.

Components:
    - models: Prediction options and result types
    - match_predictor: Goal expectancy, outcome/BTTS/over probabilities, confidence
    - live: Insights for matches in progress
    - report: Text report and JSON output

Usage:
    from prediction import PredictionOptions, predict_match
    from prediction.report import format_prediction_report

    options = PredictionOptions(include_h2h=True, form_matches=5)
    result = predict_match(home_team, away_team, home_form, away_form, options)
    print(format_prediction_report(result))
"""

from prediction.models import (
    CornerExpectation,
    PredictionOptions,
    PredictionResult,
)
from prediction.match_predictor import (
    btts_probability,
    estimate_corners,
    goal_expectancy,
    identify_key_factors,
    over_probability,
    predict_match,
    prediction_confidence,
)
from prediction.live import LiveMatchInsight, live_match_insight
from prediction.report import format_prediction_report, prediction_to_json

__all__ = [
    # Models
    "CornerExpectation",
    "PredictionOptions",
    "PredictionResult",
    # Predictor
    "btts_probability",
    "estimate_corners",
    "goal_expectancy",
    "identify_key_factors",
    "over_probability",
    "predict_match",
    "prediction_confidence",
    # Live
    "LiveMatchInsight",
    "live_match_insight",
    # Output
    "format_prediction_report",
    "prediction_to_json",
]
