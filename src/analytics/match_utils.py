"""
Match Collection Helpers

Small aggregations over lists of MatchRecord. These operate on whatever
list they are given; callers decide whether to restrict to complete matches.
"""

from collections import defaultdict
from datetime import datetime, timezone
from typing import Sequence

from src.analytics.stats import DEFAULT_ELO_RATING, elo_rating, round_half_up
from src.models.match import MatchRecord

RESULT_SCORES = {"W": 1.0, "D": 0.5, "L": 0.0}


def _percentage(count: int, total: int) -> float:
    return round_half_up(count / total * 100, 2) if total > 0 else 0


def team_matches(matches: Sequence[MatchRecord], team_id: int) -> list[MatchRecord]:
    """Matches in which the team played, in input order."""
    return [match for match in matches if match.involves(team_id)]


def team_form_string(matches: Sequence[MatchRecord], team_id: int, last_n: int = 5) -> str:
    """W/D/L string over the team's last N matches, most recent last."""
    recent = team_matches(matches, team_id)[-last_n:] if last_n > 0 else []
    return "".join(match.result_for(team_id) for match in recent)


def goal_average(matches: Sequence[MatchRecord], team_id: int) -> tuple[float, float]:
    """Average goals (for, against) per match for a team."""
    played = team_matches(matches, team_id)
    if not played:
        return 0, 0

    goals_for = sum(match.goals_for(team_id) for match in played)
    goals_against = sum(match.goals_against(team_id) for match in played)
    return round_half_up(goals_for / len(played), 2), round_half_up(goals_against / len(played), 2)


def btts_percentage(matches: Sequence[MatchRecord]) -> float:
    """Percentage of matches where both teams scored."""
    btts = sum(1 for match in matches if match.home_goals > 0 and match.away_goals > 0)
    return _percentage(btts, len(matches))


def over_percentage(matches: Sequence[MatchRecord], threshold: float = 2.5) -> float:
    """Percentage of matches with more total goals than the threshold."""
    over = sum(1 for match in matches if match.total_goals > threshold)
    return _percentage(over, len(matches))


def clean_sheet_percentage(matches: Sequence[MatchRecord], team_id: int) -> float:
    """Percentage of the team's matches in which it conceded nothing."""
    played = team_matches(matches, team_id)
    clean = sum(1 for match in played if match.goals_against(team_id) == 0)
    return _percentage(clean, len(played))


def group_matches_by_date(matches: Sequence[MatchRecord]) -> dict[str, list[MatchRecord]]:
    """Group matches by UTC kickoff date (YYYY-MM-DD)."""
    grouped: dict[str, list[MatchRecord]] = defaultdict(list)
    for match in matches:
        day = datetime.fromtimestamp(match.date_unix, tz=timezone.utc).date().isoformat()
        grouped[day].append(match)
    return dict(grouped)


def group_matches_by_team(matches: Sequence[MatchRecord]) -> dict[int, list[MatchRecord]]:
    """Index matches under both participating team IDs."""
    grouped: dict[int, list[MatchRecord]] = defaultdict(list)
    for match in matches:
        grouped[match.home_id].append(match)
        grouped[match.away_id].append(match)
    return dict(grouped)


def filter_matches_by_date_range(
    matches: Sequence[MatchRecord],
    start: datetime,
    end: datetime,
) -> list[MatchRecord]:
    """Matches whose kickoff falls within [start, end] (inclusive)."""
    start_ts = start.timestamp()
    end_ts = end.timestamp()
    return [match for match in matches if start_ts <= match.date_unix <= end_ts]


def team_elo_rating(matches: Sequence[MatchRecord], team_id: int) -> int:
    """
    Elo rating from a team's results against a notional 1000-rated opponent.

    Returns the default rating when the team has no matches.
    """
    results = [RESULT_SCORES[match.result_for(team_id)] for match in team_matches(matches, team_id)]
    return elo_rating(results, initial=DEFAULT_ELO_RATING, opponent_rating=DEFAULT_ELO_RATING)
