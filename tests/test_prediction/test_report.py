"""
Tests for prediction report and JSON output
"""

import json

import pytest

from prediction.models import CornerExpectation, PredictionResult
from prediction.report import format_percentage, format_prediction_report, prediction_to_json
from src.analytics.stats import OutcomeProbabilities


@pytest.fixture
def sample_prediction():
    """Create a sample prediction for testing."""
    return PredictionResult(
        home_team_id=1,
        away_team_id=2,
        home_team_name="Arsenal",
        away_team_name="Chelsea",
        home_goal_expectancy=1.8,
        away_goal_expectancy=0.75,
        outcome=OutcomeProbabilities(home_win=58.12, draw=25.4, away_win=15.3),
        btts=43.21,
        over25=47.9,
        confidence=70,
        key_factors=["Home team form: WWWWW", "Home advantage considered"],
        corners=CornerExpectation(home=6.0, away=4.5),
    )


class TestPredictionReport:
    """Tests for format_prediction_report."""

    def test_report_sections(self, sample_prediction):
        """Test report contains the main sections."""
        report = format_prediction_report(sample_prediction)

        assert "MATCH PREDICTION REPORT" in report
        assert "Arsenal vs Chelsea" in report
        assert "OUTCOME PROBABILITIES:" in report
        assert "  Arsenal: 58.1%" in report
        assert "Expected Goals: 1.80 - 0.75" in report
        assert "Most Likely: Home win" in report
        assert "Confidence: 70%" in report
        assert "  + Home team form: WWWWW" in report
        assert "Expected: 6.0 - 4.5 (total 10.5)" in report

    def test_report_without_details(self, sample_prediction):
        """Test details can be left out."""
        report = format_prediction_report(sample_prediction, include_details=False)

        assert "KEY FACTORS:" not in report
        assert "CORNERS:" not in report
        assert "PREDICTION:" in report

    def test_draw_favourite(self, sample_prediction):
        """Test draw label when the draw is most likely."""
        sample_prediction.outcome = OutcomeProbabilities(home_win=30, draw=40, away_win=30)
        assert "Most Likely: Draw" in format_prediction_report(sample_prediction)


class TestPredictionJson:
    """Tests for prediction_to_json."""

    def test_structure(self, sample_prediction):
        """Test top-level keys and rounded values."""
        data = prediction_to_json(sample_prediction)

        assert set(data) == {"fixture", "goal_expectancy", "probabilities", "prediction", "corners", "key_factors"}
        assert data["fixture"]["home_team"] == {"id": 1, "name": "Arsenal"}
        assert data["goal_expectancy"]["away"] == 0.75
        assert data["goal_expectancy"]["total"] == pytest.approx(2.55)
        assert data["probabilities"]["btts"] == 43.21
        assert data["prediction"] == {"most_likely": "home", "confidence": 70}
        assert data["corners"]["total"] == 10.5

    def test_serializable(self, sample_prediction):
        """Test output survives a JSON round trip."""
        data = prediction_to_json(sample_prediction)
        assert json.loads(json.dumps(data)) == data


class TestFormatPercentage:
    """Tests for format_percentage."""

    def test_format(self):
        """Test percentage formatting."""
        assert format_percentage(58.123) == "58.1%"
        assert format_percentage(7, decimal_places=0) == "7%"
