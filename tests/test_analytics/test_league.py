"""
Tests for League Analytics module
"""

import pytest

from src.analytics.league import (
    CompetitionComparison,
    CompetitionInput,
    LeagueStatistics,
    LeagueTableRow,
    RecordSplit,
    TableAnalytics,
    TableTrends,
    analyze_league_table,
    analyze_season_trends,
    analyze_table_trends,
    calculate_competitiveness,
    calculate_league_quality,
    calculate_league_statistics,
    compare_competitions,
    generate_form_table,
    generate_home_away_table,
    generate_league_table,
    group_matches_by_week,
)
from src.models import TeamRecord

DAY = 24 * 60 * 60


class TestLeagueStatistics:
    """Tests for calculate_league_statistics."""

    def test_scoring_scenario(self, scoring_scenario):
        """Test figures for scores 2-1, 0-0, 3-3, 1-2."""
        stats = calculate_league_statistics(scoring_scenario)

        assert stats.total_matches == 4
        assert stats.completed_matches == 4
        assert stats.total_goals == 12
        assert stats.average_goals_per_match == pytest.approx(3.0)
        assert stats.btts_percentage == pytest.approx(75)
        assert stats.over25_percentage == pytest.approx(75)
        assert stats.over35_percentage == pytest.approx(25)
        assert stats.clean_sheet_percentage == pytest.approx(25)
        assert stats.high_scoring_matches == 1
        assert stats.low_scoring_matches == 1

    def test_result_percentages(self, scoring_scenario):
        """Test home/draw/away split sums to 100."""
        stats = calculate_league_statistics(scoring_scenario)

        assert stats.home_win_percentage == pytest.approx(25)
        assert stats.draw_percentage == pytest.approx(50)
        assert stats.away_win_percentage == pytest.approx(25)

    def test_incomplete_matches_only_counted_in_total(self, scoring_scenario, make_match):
        """Test unfinished fixtures do not affect goal figures."""
        matches = scoring_scenario + [make_match(1, 4, 0, 0, match_id=9, status="incomplete")]
        stats = calculate_league_statistics(matches)

        assert stats.total_matches == 5
        assert stats.completed_matches == 4
        assert stats.average_goals_per_match == pytest.approx(3.0)

    def test_empty(self):
        """Test empty input gives zeroed statistics."""
        assert calculate_league_statistics([]) == LeagueStatistics()

    def test_only_incomplete(self, make_match):
        """Test no complete matches gives zero ratios."""
        stats = calculate_league_statistics([make_match(1, 2, 0, 0, status="suspended")])
        assert stats.total_matches == 1
        assert stats.completed_matches == 0
        assert stats.average_goals_per_match == 0
        assert stats.btts_percentage == 0


class TestLeagueTable:
    """Tests for generate_league_table."""

    def test_ordering_and_positions(self, sample_matches, sample_teams):
        """Test sort by points then goal difference."""
        table = generate_league_table(sample_matches, sample_teams)

        assert [row.team_name for row in table] == ["Arsenal", "Chelsea", "Everton", "Fulham"]
        assert [row.position for row in table] == [1, 2, 3, 4]
        assert [row.points for row in table] == [14, 8, 5, 5]
        assert table[2].goal_difference > table[3].goal_difference

    def test_points_identity(self, sample_matches, sample_teams):
        """Test points and played add up for every row."""
        for row in generate_league_table(sample_matches, sample_teams):
            assert row.points == row.won * 3 + row.drawn
            assert row.played == row.won + row.drawn + row.lost
            assert row.goal_difference == row.goals_for - row.goals_against

    def test_ordering_is_non_increasing(self, sample_matches, sample_teams):
        """Test sort keys never increase down the table."""
        table = generate_league_table(sample_matches, sample_teams)
        keys = [(row.points, row.goal_difference, row.goals_for) for row in table]
        assert keys == sorted(keys, reverse=True)

    def test_leader_row(self, sample_matches, sample_teams):
        """Test the leader's goals, form and venue records."""
        leader = generate_league_table(sample_matches, sample_teams)[0]

        assert leader.played == 6
        assert (leader.goals_for, leader.goals_against) == (11, 4)
        assert leader.form == "WWDDW"
        assert (leader.home_record.won, leader.home_record.drawn, leader.home_record.lost) == (3, 0, 0)
        assert (leader.away_record.won, leader.away_record.drawn, leader.away_record.lost) == (1, 2, 0)

    def test_unknown_team_matches_ignored(self, sample_teams, make_match):
        """Test matches against teams outside the table are skipped."""
        table = generate_league_table([make_match(1, 99, 5, 0)], sample_teams)
        assert all(row.played == 0 for row in table)

    def test_team_without_name(self, make_match):
        """Test unnamed teams fall back to an ID label."""
        table = generate_league_table([make_match(7, 8, 1, 0)], [TeamRecord(id=7), TeamRecord(id=8)])
        assert table[0].team_name == "Team 7"


class TestTableAnalytics:
    """Tests for the views derived from the standings."""

    def test_form_table(self, sample_matches, sample_teams):
        """Test form points from the table form strings."""
        form_table = generate_form_table(generate_league_table(sample_matches, sample_teams))

        assert [row.team_name for row in form_table] == ["Arsenal", "Chelsea", "Everton", "Fulham"]
        assert [row.form for row in form_table] == ["WWDDW", "DWDWL", "LLLDW", "DLWLL"]
        assert [row.form_points for row in form_table] == [11, 8, 4, 4]
        assert [row.form_position for row in form_table] == [1, 2, 3, 4]

    def test_form_table_reorders(self):
        """Test in-form teams move up and ties keep league order."""
        table = [
            LeagueTableRow(position=1, team_id=1, team_name="Leaders", form="LLDLL"),
            LeagueTableRow(position=2, team_id=2, team_name="Climbers", form="WWWWW"),
            LeagueTableRow(position=3, team_id=3, team_name="Drifters", form="LLDLL"),
        ]
        form_table = generate_form_table(table)

        assert [row.team_name for row in form_table] == ["Climbers", "Leaders", "Drifters"]
        assert [row.position for row in form_table] == [2, 1, 3]
        assert [row.form_position for row in form_table] == [1, 2, 3]

    def test_home_away_table(self, sample_matches, sample_teams):
        """Test venue points in league order."""
        rows = generate_home_away_table(generate_league_table(sample_matches, sample_teams))

        assert [(row.home_points, row.away_points) for row in rows] == [(9, 5), (2, 6), (2, 3), (3, 2)]
        assert rows[1].away_record == RecordSplit(won=2, drawn=0, lost=1)
        for row in rows:
            record = row.home_record
            assert row.home_points == record.won * 3 + record.drawn

    def test_table_trends(self, sample_matches, sample_teams):
        """Test spreads over points [14, 8, 5, 5] and goal difference [7, 2, -4, -5]."""
        trends = analyze_table_trends(generate_league_table(sample_matches, sample_teams))

        assert trends.points_spread == 9
        assert trends.average_points == 8.0
        assert trends.points_standard_deviation == pytest.approx(13.5**0.5)
        assert trends.goal_difference_spread == 12

    def test_empty_table_trends(self):
        """Test an empty table gives zero trends."""
        assert analyze_table_trends([]) == TableTrends()
        assert generate_form_table([]) == []

    def test_analyze_league_table(self, sample_matches, sample_teams):
        """Test all views come from one standings calculation."""
        analytics = analyze_league_table(sample_matches, sample_teams)

        assert isinstance(analytics, TableAnalytics)
        assert analytics.table[0].team_name == "Arsenal"
        assert analytics.statistics.completed_matches == 12
        assert len(analytics.form_table) == len(analytics.home_away_table) == 4
        assert analytics.to_dict()["trends"]["points_spread"] == 9


class TestSeasonTrends:
    """Tests for analyze_season_trends."""

    def test_season_analysis(self, sample_matches, sample_teams):
        """Test table, top attacks/defences and trend figures."""
        analysis = analyze_season_trends(sample_matches, sample_teams, "2024/2025")

        assert analysis.season == "2024/2025"
        assert analysis.statistics.completed_matches == 12
        assert [entry["goals"] for entry in analysis.top_scorers] == [11, 8, 5, 3]
        assert [entry["team_name"] for entry in analysis.best_defense] == [
            "Arsenal",
            "Chelsea",
            "Fulham",
            "Everton",
        ]
        assert analysis.trends.competitiveness == 50
        assert analysis.trends.predictability == 33
        assert analysis.trends.goal_trend == "increasing"

    def test_top_lists_do_not_reorder_table(self, sample_matches, sample_teams):
        """Test the table keeps standings order."""
        analysis = analyze_season_trends(sample_matches, sample_teams, "2024")
        assert [row.position for row in analysis.table] == [1, 2, 3, 4]

    def test_empty_season(self, sample_teams):
        """Test a season with no matches."""
        analysis = analyze_season_trends([], sample_teams, "2025")
        assert analysis.trends.predictability == 0
        assert analysis.trends.competitiveness == 0
        assert analysis.trends.goal_trend == "stable"

    def test_to_dict(self, sample_matches, sample_teams):
        """Test nested conversion."""
        data = analyze_season_trends(sample_matches, sample_teams, "2024").to_dict()
        assert data["table"][0]["home_record"]["won"] == 3
        assert data["trends"]["competitiveness"] == 50


class TestCompetitiveness:
    """Tests for competitiveness and quality scores."""

    def test_short_table(self, sample_teams):
        """Test fewer than two rows scores zero."""
        assert calculate_competitiveness([]) == 0
        assert calculate_competitiveness(generate_league_table([], sample_teams[:1])) == 0

    def test_unplayed_leader(self, sample_teams):
        """Test zero games played scores zero."""
        assert calculate_competitiveness(generate_league_table([], sample_teams)) == 0

    def test_half_point_rounds_up(self):
        """Test a 62.5 score rounds to 63."""
        table = [
            LeagueTableRow(position=1, team_id=1, team_name="Leaders", played=8, points=20),
            LeagueTableRow(position=2, team_id=2, team_name="Strugglers", played=8, points=11),
        ]
        # spread 9 over a possible 24
        assert calculate_competitiveness(table) == 63

    def test_quality(self, scoring_scenario):
        """Test quality from scoring rate and entertainment value."""
        assert calculate_league_quality(calculate_league_statistics(scoring_scenario)) == 81

    def test_quality_goal_component_capped(self):
        """Test goal quality never exceeds 100."""
        stats = LeagueStatistics(average_goals_per_match=10, btts_percentage=100, over25_percentage=100)
        assert calculate_league_quality(stats) == 100


class TestWeeklyGrouping:
    """Tests for group_matches_by_week."""

    def test_buckets_from_first_match(self, make_match):
        """Test week-long buckets measured from the first kickoff."""
        matches = [
            make_match(1, 2, 0, 0, match_id=1, date_unix=0),
            make_match(3, 4, 0, 0, match_id=2, date_unix=DAY),
            make_match(1, 3, 0, 0, match_id=3, date_unix=8 * DAY),
            make_match(2, 4, 0, 0, match_id=4, date_unix=15 * DAY),
        ]
        weeks = group_matches_by_week(matches)
        assert [[m.id for m in week] for week in weeks] == [[1, 2], [3], [4]]

    def test_out_of_order_input_splits(self, make_match):
        """Test a return to an earlier week opens a new bucket."""
        matches = [
            make_match(1, 2, 0, 0, match_id=1, date_unix=0),
            make_match(3, 4, 0, 0, match_id=2, date_unix=8 * DAY),
            make_match(1, 3, 0, 0, match_id=3, date_unix=DAY),
        ]
        assert len(group_matches_by_week(matches)) == 3

    def test_empty(self):
        """Test empty input."""
        assert group_matches_by_week([]) == []


class TestCompareCompetitions:
    """Tests for compare_competitions."""

    @pytest.fixture
    def low_scoring(self, make_match):
        return [make_match(1, 2, 1, 0, match_id=1), make_match(3, 4, 0, 0, match_id=2)]

    def test_rankings(self, scoring_scenario, low_scoring, sample_teams):
        """Test superlatives pick the right league."""
        comparison = compare_competitions(
            [
                CompetitionInput("1", "Goal Fest", scoring_scenario, sample_teams),
                CompetitionInput("2", "Tight League", low_scoring, sample_teams),
            ]
        )

        assert [league.league_name for league in comparison.leagues] == ["Goal Fest", "Tight League"]
        assert comparison.leagues[0].competitiveness == 33
        assert comparison.leagues[0].quality == 81
        assert comparison.rankings.highest_scoring == "Goal Fest"
        assert comparison.rankings.most_defensive == "Tight League"
        assert comparison.rankings.most_competitive == "Goal Fest"
        assert comparison.rankings.most_predictable == "Tight League"

    def test_ties_go_to_first(self, scoring_scenario, sample_teams):
        """Test identical leagues rank the first one listed."""
        comparison = compare_competitions(
            [
                CompetitionInput("1", "First", scoring_scenario, sample_teams),
                CompetitionInput("2", "Second", scoring_scenario, sample_teams),
            ]
        )
        rankings = comparison.rankings
        assert {
            rankings.most_competitive,
            rankings.highest_scoring,
            rankings.most_defensive,
            rankings.most_predictable,
        } == {"First"}

    def test_no_competitions(self):
        """Test empty comparison."""
        assert compare_competitions([]) == CompetitionComparison()
