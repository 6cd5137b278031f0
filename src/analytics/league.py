"""
League Analytics Module

League-wide aggregations:
- Goal, result and market statistics over complete matches
- Standings table construction
- Form, home/away and spread views derived from the standings
- Season trend analysis (goal trend, competitiveness, predictability)
- Multi-competition comparison and rankings
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Sequence

from loguru import logger

from src.analytics.stats import average, round_half_up, standard_deviation, trend
from src.analytics.team_performance import form_points
from src.models.match import MatchRecord
from src.models.team import TeamRecord

SECONDS_PER_WEEK = 7 * 24 * 60 * 60

HIGH_SCORING_GOALS = 4
LOW_SCORING_GOALS = 1

TABLE_FORM_LENGTH = 5
TOP_N = 5


@dataclass
class LeagueStatistics:
    """Aggregate statistics for a set of league matches."""

    total_matches: int = 0
    completed_matches: int = 0
    total_goals: int = 0
    average_goals_per_match: float = 0.0
    home_win_percentage: float = 0.0
    draw_percentage: float = 0.0
    away_win_percentage: float = 0.0
    btts_percentage: float = 0.0
    over25_percentage: float = 0.0
    over35_percentage: float = 0.0
    clean_sheet_percentage: float = 0.0  # either side failed to score
    high_scoring_matches: int = 0  # 4+ goals
    low_scoring_matches: int = 0  # 0-1 goals

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class RecordSplit:
    won: int = 0
    drawn: int = 0
    lost: int = 0


@dataclass
class LeagueTableRow:
    """One team's standing."""

    position: int
    team_id: int
    team_name: str
    played: int = 0
    won: int = 0
    drawn: int = 0
    lost: int = 0
    goals_for: int = 0
    goals_against: int = 0
    goal_difference: int = 0
    points: int = 0
    form: str = ""
    home_record: RecordSplit = field(default_factory=RecordSplit)
    away_record: RecordSplit = field(default_factory=RecordSplit)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class SeasonTrends:
    goal_trend: str = "stable"
    competitiveness: int = 0  # 0-100, higher = tighter table
    predictability: int = 0  # 0-100, home-win rate


@dataclass
class SeasonAnalysis:
    """Full season breakdown."""

    season: str
    statistics: LeagueStatistics
    table: list[LeagueTableRow]
    top_scorers: list[dict[str, Any]]
    best_defense: list[dict[str, Any]]
    trends: SeasonTrends

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class CompetitionInput:
    """Matches and teams for one competition to compare."""

    league_id: str
    league_name: str
    matches: Sequence[MatchRecord]
    teams: Sequence[TeamRecord]


@dataclass
class CompetitionSummary:
    league_id: str
    league_name: str
    statistics: LeagueStatistics
    competitiveness: int
    quality: int


@dataclass
class CompetitionRankings:
    most_competitive: str = ""
    highest_scoring: str = ""
    most_defensive: str = ""
    most_predictable: str = ""


@dataclass
class CompetitionComparison:
    """Per-league summaries plus superlatives."""

    leagues: list[CompetitionSummary] = field(default_factory=list)
    rankings: CompetitionRankings = field(default_factory=CompetitionRankings)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


@dataclass
class FormTableRow:
    """A team ranked by points from its recent form string."""

    position: int  # league position
    team_id: int
    team_name: str
    form: str
    form_points: int
    form_position: int


@dataclass
class HomeAwayTableRow:
    team_id: int
    team_name: str
    home_record: RecordSplit
    away_record: RecordSplit
    home_points: int
    away_points: int


@dataclass
class TableTrends:
    """Spread of points and goal difference across the table."""

    points_spread: int = 0
    average_points: float = 0.0
    points_standard_deviation: float = 0.0
    goal_difference_spread: int = 0


@dataclass
class TableAnalytics:
    """Standings plus the tables and trends derived from them."""

    table: list[LeagueTableRow]
    statistics: LeagueStatistics
    form_table: list[FormTableRow]
    home_away_table: list[HomeAwayTableRow]
    trends: TableTrends

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)


def _complete(matches: Sequence[MatchRecord]) -> list[MatchRecord]:
    return [match for match in matches if match.is_complete]


def _percentage(count: int, total: int) -> float:
    return count / total * 100 if total > 0 else 0


def calculate_league_statistics(matches: Sequence[MatchRecord]) -> LeagueStatistics:
    """
    Calculate league statistics.

    Only complete matches contribute to goal and result figures;
    total_matches still counts every supplied match.

    Args:
        matches: All league matches, any status

    Returns:
        LeagueStatistics (zeroed when matches is empty)
    """
    if not matches:
        return LeagueStatistics()

    completed = _complete(matches)

    home_wins = draws = away_wins = 0
    btts = over25 = over35 = clean_sheets = high_scoring = low_scoring = 0
    total_goals = 0

    for match in completed:
        goals = match.total_goals
        total_goals += goals

        if match.home_goals > match.away_goals:
            home_wins += 1
        elif match.away_goals > match.home_goals:
            away_wins += 1
        else:
            draws += 1

        if match.home_goals > 0 and match.away_goals > 0:
            btts += 1
        if goals > 2.5:
            over25 += 1
        if goals > 3.5:
            over35 += 1
        if match.home_goals == 0 or match.away_goals == 0:
            clean_sheets += 1
        if goals >= HIGH_SCORING_GOALS:
            high_scoring += 1
        if goals <= LOW_SCORING_GOALS:
            low_scoring += 1

    count = len(completed)

    return LeagueStatistics(
        total_matches=len(matches),
        completed_matches=count,
        total_goals=total_goals,
        average_goals_per_match=total_goals / count if count > 0 else 0,
        home_win_percentage=_percentage(home_wins, count),
        draw_percentage=_percentage(draws, count),
        away_win_percentage=_percentage(away_wins, count),
        btts_percentage=_percentage(btts, count),
        over25_percentage=_percentage(over25, count),
        over35_percentage=_percentage(over35, count),
        clean_sheet_percentage=_percentage(clean_sheets, count),
        high_scoring_matches=high_scoring,
        low_scoring_matches=low_scoring,
    )


def generate_league_table(
    matches: Sequence[MatchRecord],
    teams: Sequence[TeamRecord],
) -> list[LeagueTableRow]:
    """
    Build the standings table from complete matches.

    Rows are sorted by points, goal difference, then goals scored (all
    descending) and positions are assigned 1-indexed after sorting.
    Matches involving a team that is not in ``teams`` are ignored.
    """
    rows: dict[int, LeagueTableRow] = {
        team.id: LeagueTableRow(position=0, team_id=team.id, team_name=team.display_name)
        for team in teams
    }
    results: dict[int, list[str]] = {team_id: [] for team_id in rows}

    for match in _complete(matches):
        home = rows.get(match.home_id)
        away = rows.get(match.away_id)
        if home is None or away is None:
            logger.debug(f"Skipping match {match.id}: team not in table ({match.home_id} vs {match.away_id})")
            continue

        home.played += 1
        away.played += 1
        home.goals_for += match.home_goals
        home.goals_against += match.away_goals
        away.goals_for += match.away_goals
        away.goals_against += match.home_goals

        if match.home_goals > match.away_goals:
            home.won += 1
            home.points += 3
            home.home_record.won += 1
            away.lost += 1
            away.away_record.lost += 1
            home_result, away_result = "W", "L"
        elif match.away_goals > match.home_goals:
            away.won += 1
            away.points += 3
            away.away_record.won += 1
            home.lost += 1
            home.home_record.lost += 1
            home_result, away_result = "L", "W"
        else:
            home.drawn += 1
            away.drawn += 1
            home.points += 1
            away.points += 1
            home.home_record.drawn += 1
            away.away_record.drawn += 1
            home_result = away_result = "D"

        results[match.home_id].append(home_result)
        results[match.away_id].append(away_result)

    table = list(rows.values())
    for row in table:
        row.goal_difference = row.goals_for - row.goals_against
        row.form = "".join(results[row.team_id][-TABLE_FORM_LENGTH:])

    table.sort(key=lambda row: (row.points, row.goal_difference, row.goals_for), reverse=True)

    for index, row in enumerate(table, start=1):
        row.position = index

    return table


def analyze_season_trends(
    matches: Sequence[MatchRecord],
    teams: Sequence[TeamRecord],
    season: str,
) -> SeasonAnalysis:
    """
    Analyse a full season.

    Matches must be supplied in kickoff order; the weekly goal buckets are
    built in input order and are not re-sorted.

    Args:
        matches: Season matches in chronological order
        teams: Teams in the competition
        season: Season label, e.g. "2024/2025"

    Returns:
        SeasonAnalysis with statistics, table, top attacks/defences and trends
    """
    statistics = calculate_league_statistics(matches)
    table = generate_league_table(matches, teams)

    top_scorers = [
        {"team_id": row.team_id, "team_name": row.team_name, "goals": row.goals_for}
        for row in sorted(table, key=lambda row: row.goals_for, reverse=True)[:TOP_N]
    ]
    best_defense = [
        {"team_id": row.team_id, "team_name": row.team_name, "goals_conceded": row.goals_against}
        for row in sorted(table, key=lambda row: row.goals_against)[:TOP_N]
    ]

    completed = _complete(matches)
    weekly_averages = [
        sum(match.total_goals for match in week) / len(week)
        for week in group_matches_by_week(completed)
    ]

    home_wins = sum(1 for match in completed if match.home_goals > match.away_goals)
    predictability = round_half_up(home_wins / len(completed) * 100) if completed else 0

    trends = SeasonTrends(
        goal_trend=trend(weekly_averages),
        competitiveness=calculate_competitiveness(table),
        predictability=predictability,
    )

    logger.debug(
        f"Season {season}: {statistics.completed_matches} complete matches, "
        f"goal trend {trends.goal_trend}, competitiveness {trends.competitiveness}"
    )

    return SeasonAnalysis(
        season=season,
        statistics=statistics,
        table=table,
        top_scorers=top_scorers,
        best_defense=best_defense,
        trends=trends,
    )


def analyze_league_table(
    matches: Sequence[MatchRecord],
    teams: Sequence[TeamRecord],
) -> TableAnalytics:
    """
    Standings with form, home/away and spread views.

    Args:
        matches: All league matches, any status
        teams: Teams in the competition

    Returns:
        TableAnalytics built from a single standings calculation
    """
    table = generate_league_table(matches, teams)
    return TableAnalytics(
        table=table,
        statistics=calculate_league_statistics(matches),
        form_table=generate_form_table(table),
        home_away_table=generate_home_away_table(table),
        trends=analyze_table_trends(table),
    )


def generate_form_table(table: Sequence[LeagueTableRow]) -> list[FormTableRow]:
    """
    Rank teams by the points in their table form string.

    Teams level on form points keep their league order.
    """
    rows = sorted(
        (
            FormTableRow(
                position=row.position,
                team_id=row.team_id,
                team_name=row.team_name,
                form=row.form,
                form_points=form_points(row.form),
                form_position=0,
            )
            for row in table
        ),
        key=lambda row: row.form_points,
        reverse=True,
    )
    for index, row in enumerate(rows, start=1):
        row.form_position = index
    return rows


def generate_home_away_table(table: Sequence[LeagueTableRow]) -> list[HomeAwayTableRow]:
    """Points earned at home and away, in league order."""
    return [
        HomeAwayTableRow(
            team_id=row.team_id,
            team_name=row.team_name,
            home_record=RecordSplit(row.home_record.won, row.home_record.drawn, row.home_record.lost),
            away_record=RecordSplit(row.away_record.won, row.away_record.drawn, row.away_record.lost),
            home_points=row.home_record.won * 3 + row.home_record.drawn,
            away_points=row.away_record.won * 3 + row.away_record.drawn,
        )
        for row in table
    ]


def analyze_table_trends(table: Sequence[LeagueTableRow]) -> TableTrends:
    """Spread, mean and standard deviation of points, plus goal-difference spread."""
    if not table:
        return TableTrends()

    points = [row.points for row in table]
    goal_differences = [row.goal_difference for row in table]

    return TableTrends(
        points_spread=max(points) - min(points),
        average_points=average(points),
        points_standard_deviation=standard_deviation(points),
        goal_difference_spread=max(goal_differences) - min(goal_differences),
    )


def compare_competitions(competitions: Sequence[CompetitionInput]) -> CompetitionComparison:
    """
    Compare several competitions and pick superlatives.

    Ties in every ranking go to the competition listed first.
    """
    leagues = []
    for competition in competitions:
        statistics = calculate_league_statistics(competition.matches)
        table = generate_league_table(competition.matches, competition.teams)
        leagues.append(
            CompetitionSummary(
                league_id=competition.league_id,
                league_name=competition.league_name,
                statistics=statistics,
                competitiveness=calculate_competitiveness(table),
                quality=calculate_league_quality(statistics),
            )
        )

    if not leagues:
        return CompetitionComparison()

    rankings = CompetitionRankings(
        most_competitive=_first_best(leagues, lambda s: s.competitiveness, higher=True),
        highest_scoring=_first_best(leagues, lambda s: s.statistics.average_goals_per_match, higher=True),
        most_defensive=_first_best(leagues, lambda s: s.statistics.average_goals_per_match, higher=False),
        most_predictable=_first_best(leagues, lambda s: s.statistics.home_win_percentage, higher=True),
    )

    return CompetitionComparison(leagues=leagues, rankings=rankings)


def _first_best(
    leagues: list[CompetitionSummary],
    metric: Callable[[CompetitionSummary], float],
    higher: bool,
) -> str:
    # Strict comparison keeps the earliest league on ties
    best = leagues[0]
    for league in leagues[1:]:
        if (metric(league) > metric(best)) if higher else (metric(league) < metric(best)):
            best = league
    return best.league_name


def calculate_competitiveness(table: Sequence[LeagueTableRow]) -> int:
    """
    0-100 score for how tight the table is.

    The point spread between first and last is measured against the largest
    spread possible after the leader's games played.
    """
    if len(table) < 2:
        return 0

    max_spread = table[0].played * 3
    if max_spread == 0:
        return 0

    spread = table[0].points - table[-1].points
    return round_half_up(max(0, 100 - spread / max_spread * 100))


def calculate_league_quality(statistics: LeagueStatistics) -> int:
    """Quality from scoring rate (40%) and BTTS/Over 2.5 entertainment value (60%)."""
    goal_quality = min(100, statistics.average_goals_per_match * 30)
    entertainment = (statistics.btts_percentage + statistics.over25_percentage) / 2
    return round_half_up(goal_quality * 0.4 + entertainment * 0.6)


def group_matches_by_week(matches: Sequence[MatchRecord]) -> list[list[MatchRecord]]:
    """
    Split matches into week-long buckets measured from the first match.

    A new bucket begins whenever the week index changes from the previous
    match, so out-of-order input produces extra buckets rather than merging.
    """
    if not matches:
        return []

    start = matches[0].date_unix
    weeks: list[list[MatchRecord]] = []
    current: list[MatchRecord] = []
    current_week = 0

    for match in matches:
        week = (match.date_unix - start) // SECONDS_PER_WEEK
        if week != current_week:
            if current:
                weeks.append(current)
            current = [match]
            current_week = week
        else:
            current.append(match)

    if current:
        weeks.append(current)

    return weeks
