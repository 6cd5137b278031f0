"""
Pytest Configuration and Fixtures

Shared fixtures and configuration for the football analytics test suite.
"""

from typing import Any, Callable

import pytest

from src.config import AnalyticsConfig, ApiSettings, CacheSettings
from src.models import MatchRecord, TeamRecord

DAY = 24 * 60 * 60
SEASON_START = 1_700_000_000


def build_match(
    home_id: int,
    away_id: int,
    home_goals: int,
    away_goals: int,
    match_id: int = 0,
    date_unix: int = SEASON_START,
    status: str = "complete",
    **extra: Any,
) -> MatchRecord:
    """Build a MatchRecord using upstream field names."""
    return MatchRecord.model_validate(
        {
            "id": match_id,
            "homeID": home_id,
            "awayID": away_id,
            "homeGoalCount": home_goals,
            "awayGoalCount": away_goals,
            "date_unix": date_unix,
            "status": status,
            **extra,
        }
    )


@pytest.fixture
def make_match() -> Callable[..., MatchRecord]:
    """Factory fixture for match records."""
    return build_match


@pytest.fixture
def sample_teams() -> list[TeamRecord]:
    """Four-team league."""
    return [
        TeamRecord(id=1, name="Arsenal"),
        TeamRecord(id=2, name="Chelsea"),
        TeamRecord(id=3, name="Everton"),
        TeamRecord(id=4, name="Fulham"),
    ]


@pytest.fixture
def sample_matches() -> list[MatchRecord]:
    """
    Six complete rounds plus one upcoming fixture, in kickoff order.

    Final standings: Arsenal 14, Chelsea 8, Everton 5, Fulham 5 (Everton
    ahead on goal difference).
    """
    results = [
        (1, 2, 2, 1),
        (3, 4, 0, 0),
        (1, 3, 3, 0),
        (2, 4, 1, 1),
        (4, 1, 0, 2),
        (3, 2, 1, 2),
        (2, 1, 1, 1),
        (4, 3, 2, 1),
        (3, 1, 2, 2),
        (4, 2, 0, 3),
        (1, 4, 1, 0),
        (2, 3, 0, 1),
    ]
    matches = [
        build_match(home, away, hg, ag, match_id=i + 1, date_unix=SEASON_START + i * 3 * DAY)
        for i, (home, away, hg, ag) in enumerate(results)
    ]
    matches.append(
        build_match(1, 2, 0, 0, match_id=99, date_unix=SEASON_START + 60 * DAY, status="incomplete")
    )
    return matches


@pytest.fixture
def scoring_scenario(make_match) -> list[MatchRecord]:
    """Complete matches scored 2-1, 0-0, 3-3, 1-2."""
    return [
        make_match(1, 2, 2, 1, match_id=1),
        make_match(3, 4, 0, 0, match_id=2),
        make_match(1, 3, 3, 3, match_id=3),
        make_match(2, 4, 1, 2, match_id=4),
    ]


@pytest.fixture
def analytics_config(tmp_path) -> AnalyticsConfig:
    """Configuration pointing caches at a temporary directory."""
    return AnalyticsConfig(
        api=ApiSettings(base_url="https://api.test", api_key="test-key", request_delay=0, max_retries=0),
        cache=CacheSettings(enabled=True, directory=str(tmp_path / "cache")),
    )


@pytest.fixture
def raw_league_payloads() -> dict[str, Any]:
    """Upstream JSON bodies for a small season."""
    matches = [
        {"id": 1, "homeID": 1, "awayID": 2, "homeGoalCount": 2, "awayGoalCount": 0,
         "status": "complete", "date_unix": SEASON_START, "refereeID": 7,
         "team_a_cards_num": 2, "team_b_cards_num": 3, "team_a_corners": 6, "team_b_corners": 4},
        {"id": 2, "homeID": 2, "awayID": 1, "homeGoalCount": 1, "awayGoalCount": 1,
         "status": "complete", "date_unix": SEASON_START + 7 * DAY, "refereeID": 7,
         "team_a_cards_num": 1, "team_b_cards_num": 1, "team_a_corners": -1, "team_b_corners": -1},
        {"id": 3, "homeID": 1, "awayID": 2, "homeGoalCount": 0, "awayGoalCount": 0,
         "status": "incomplete", "date_unix": SEASON_START + 14 * DAY},
        {"id": 4, "homeID": "not-a-number", "awayID": 2, "status": "complete"},
    ]
    teams = [
        {"id": 1, "cleanName": "Arsenal", "country": "England"},
        {"id": 2, "cleanName": "Chelsea", "country": "England"},
    ]
    players = [
        {"id": 10, "full_name": "Striker One", "position": "Forward", "club_team_id": 1,
         "appearances_overall": 10, "goals_overall": 8, "assists_overall": 2,
         "minutes_played_overall": 900, "rating": 8.0},
        {"id": 11, "full_name": "Winger Two", "position": "Midfielder", "club_team_id": 2,
         "appearances_overall": 12, "goals_overall": 3, "assists_overall": 6,
         "minutes_played_overall": 1000, "rating": 7.0},
    ]
    referees = [{"id": 7, "full_name": "Ref Seven", "nationality": "England"}]
    return {
        "/league-matches": {"success": True, "data": matches},
        "/league-teams": {"success": True, "data": teams},
        "/league-players": {"success": True, "data": players},
        "/league-referees": {"success": True, "data": referees},
        "/match": {"success": True, "data": matches[0]},
    }
