"""
Tests for Player Analytics module
"""

import pytest

from src.analytics.players import (
    PlayerPerformanceMetrics,
    analyze_top_performers,
    calculate_player_performance,
    compare_players,
    player_consistency,
    player_impact,
)
from src.models import PlayerRecord, PlayerSeasonStats


@pytest.fixture
def striker():
    return PlayerRecord(id=10, name="Striker One", position="Forward", team_id=1)


@pytest.fixture
def striker_stats():
    return PlayerSeasonStats.model_validate(
        {
            "appearances_overall": 10,
            "goals_overall": 8,
            "assists_overall": 2,
            "minutes_played_overall": 900,
            "rating": 8.0,
        }
    )


def metrics(player_id, **kwargs):
    return PlayerPerformanceMetrics(player_id=player_id, player_name=f"Player {player_id}", **kwargs)


class TestPlayerPerformance:
    """Tests for calculate_player_performance."""

    def test_rates_and_impact(self, striker, striker_stats):
        """Test per-game rates and weighted impact."""
        result = calculate_player_performance(striker, [], striker_stats)

        assert result.player_name == "Striker One"
        assert result.position == "Forward"
        assert result.goals_per_game == 0.8
        assert result.assists_per_game == 0.2
        assert result.average_minutes_per_game == 90
        assert result.impact_rating == 68
        assert result.consistency == 50

    def test_form_from_team_matches(self, striker, striker_stats, sample_matches):
        """Test form is the player's team form over the supplied matches."""
        complete = [match for match in sample_matches if match.is_complete]
        result = calculate_player_performance(striker, complete, striker_stats)
        assert result.form == "WWDDW"

    def test_no_stats(self, striker):
        """Test missing totals give zero rates."""
        result = calculate_player_performance(striker, [])

        assert result.appearances == 0
        assert result.goals_per_game == 0
        assert result.impact_rating == 0
        assert result.consistency == 50

    def test_unknown_position_and_team(self):
        """Test defaults for a player with no position or club."""
        result = calculate_player_performance(PlayerRecord(id=3), [])
        assert result.position == "Unknown"
        assert result.form == ""


class TestRatings:
    """Tests for consistency and impact helpers."""

    def test_consistency(self):
        """Test relative spread of match ratings."""
        assert player_consistency([7, 7, 7]) == 100
        assert player_consistency([6, 8]) == 86
        assert player_consistency(None) == 50
        assert player_consistency([0, 0]) == 50

    def test_impact_capped(self):
        """Test impact never exceeds 100."""
        assert player_impact(30, 10, 10.0, 10) == 100
        assert player_impact(5, 5, 7.0, 0) == 0


class TestComparePlayers:
    """Tests for compare_players."""

    def test_clear_winner(self):
        """Test winning three dimensions."""
        first = metrics(1, goals_per_game=0.8, assists_per_game=0.2, impact_rating=68)
        second = metrics(2, goals_per_game=0.25, assists_per_game=0.5, impact_rating=52)

        outcome = compare_players(first, second).comparison

        assert outcome.better_goal_scorer == 1
        assert outcome.better_assister == 2
        assert outcome.more_consistent == 1
        assert outcome.higher_impact == 1
        assert outcome.overall_better == 1
        assert outcome.confidence_level == 75

    def test_ties_go_to_first_player(self):
        """Test identical players."""
        outcome = compare_players(metrics(1), metrics(2)).comparison
        assert outcome.overall_better == 1
        assert outcome.confidence_level == 90

    def test_even_split(self):
        """Test two dimensions each favours player 1 at base confidence."""
        first = metrics(1, goals_per_game=1.0, consistency=90)
        second = metrics(2, assists_per_game=1.0, impact_rating=80)

        outcome = compare_players(first, second).comparison
        assert outcome.overall_better == 1
        assert outcome.confidence_level == 60

    def test_second_player_dominates(self):
        """Test losing every dimension."""
        first = metrics(1)
        second = metrics(2, goals_per_game=1, assists_per_game=1, consistency=80, impact_rating=90)

        outcome = compare_players(first, second).comparison
        assert outcome.overall_better == 2
        assert outcome.confidence_level == 90


class TestTopPerformers:
    """Tests for analyze_top_performers."""

    @pytest.fixture
    def pool(self):
        return [
            metrics(1, appearances=10, goals_per_game=0.9, impact_rating=85, consistency=60),
            metrics(2, appearances=35, goals_per_game=0.3, assists_per_game=0.6, impact_rating=60, consistency=80),
            metrics(3, appearances=15, goals_per_game=0.5, impact_rating=65, consistency=90),
            metrics(4, appearances=40, goals_per_game=0.5, impact_rating=72, consistency=65),
        ]

    def test_categories(self, pool):
        """Test each category ranks the whole pool."""
        top = analyze_top_performers(pool)

        assert [p.player_id for p in top.top_scorers] == [1, 3, 4, 2]
        assert top.top_assisters[0].player_id == 2
        assert [p.player_id for p in top.most_consistent] == [3, 2, 4, 1]
        assert [p.player_id for p in top.highest_impact] == [1, 4, 3, 2]

    def test_rising_stars_and_veterans(self, pool):
        """Test threshold filters."""
        top = analyze_top_performers(pool)

        assert [p.player_id for p in top.rising_stars] == [1]
        assert [p.player_id for p in top.veteran_performers] == [2]

    def test_limit(self, pool):
        """Test category size limit."""
        top = analyze_top_performers(pool, max_per_category=2)
        assert len(top.top_scorers) == 2
        assert len(top.most_consistent) == 2

    def test_empty_pool(self):
        """Test empty input."""
        top = analyze_top_performers([])
        assert top.top_scorers == []
        assert top.to_dict()["rising_stars"] == []
