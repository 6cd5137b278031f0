"""
Analytics Module

This module contains the football statistics engines.

Components:
    - stats: Statistical primitives (averages, trends, Poisson, Elo)
    - match_utils: Match collection helpers (form strings, percentages, grouping)
    - team_performance: Team metrics, form, home/away splits, comparisons, strength
    - league: League statistics, standings, season trends, competition comparison
    - players: Player performance, comparison and top performers
    - referees: Referee performance and impact
"""

from src.analytics.stats import (
    OutcomeProbabilities,
    average,
    elo_rating,
    elo_update,
    match_outcome_probabilities,
    median,
    moving_average,
    percentile,
    poisson_probability,
    round_half_up,
    standard_deviation,
    trend,
)
from src.analytics.team_performance import (
    HeadToHeadSummary,
    HomeAwaySplit,
    OutcomePrediction,
    TeamComparison,
    TeamFormAnalysis,
    TeamPerformanceMetrics,
    analyze_team_form,
    calculate_home_away_performance,
    calculate_performance_metrics,
    calculate_team_strength,
    compare_teams,
)
from src.analytics.league import (
    CompetitionComparison,
    CompetitionInput,
    LeagueStatistics,
    LeagueTableRow,
    SeasonAnalysis,
    TableAnalytics,
    analyze_league_table,
    analyze_season_trends,
    analyze_table_trends,
    calculate_league_statistics,
    compare_competitions,
    generate_form_table,
    generate_home_away_table,
    generate_league_table,
)
from src.analytics.players import (
    PlayerComparison,
    PlayerPerformanceMetrics,
    TopPerformers,
    analyze_top_performers,
    calculate_player_performance,
    compare_players,
)
from src.analytics.referees import (
    RefereeImpactAnalysis,
    RefereePerformanceMetrics,
    analyze_referee_impact,
    calculate_referee_performance,
)

__all__ = [
    # Statistics
    "OutcomeProbabilities",
    "average",
    "elo_rating",
    "elo_update",
    "match_outcome_probabilities",
    "median",
    "moving_average",
    "percentile",
    "poisson_probability",
    "round_half_up",
    "standard_deviation",
    "trend",
    # Teams
    "HeadToHeadSummary",
    "HomeAwaySplit",
    "OutcomePrediction",
    "TeamComparison",
    "TeamFormAnalysis",
    "TeamPerformanceMetrics",
    "analyze_team_form",
    "calculate_home_away_performance",
    "calculate_performance_metrics",
    "calculate_team_strength",
    "compare_teams",
    # League
    "CompetitionComparison",
    "CompetitionInput",
    "LeagueStatistics",
    "LeagueTableRow",
    "SeasonAnalysis",
    "TableAnalytics",
    "analyze_league_table",
    "analyze_season_trends",
    "analyze_table_trends",
    "calculate_league_statistics",
    "compare_competitions",
    "generate_form_table",
    "generate_home_away_table",
    "generate_league_table",
    # Players
    "PlayerComparison",
    "PlayerPerformanceMetrics",
    "TopPerformers",
    "analyze_top_performers",
    "calculate_player_performance",
    "compare_players",
    # Referees
    "RefereeImpactAnalysis",
    "RefereePerformanceMetrics",
    "analyze_referee_impact",
    "calculate_referee_performance",
]
