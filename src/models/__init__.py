"""
Data Models Module

This module contains Pydantic models for the records consumed by the analytics engine.

Models:
    - MatchRecord: A fixture with score and extended stats
    - TeamRecord: Team identity and labels
    - PlayerRecord / PlayerSeasonStats: Player identity and season totals
    - RefereeRecord / RefereeSeasonStats: Referee identity and season totals
"""

from src.models.match import MatchRecord, MatchStatus
from src.models.player import PlayerRecord, PlayerSeasonStats
from src.models.referee import RefereeRecord, RefereeSeasonStats
from src.models.team import TeamRecord

__all__ = [
    "MatchRecord",
    "MatchStatus",
    "PlayerRecord",
    "PlayerSeasonStats",
    "RefereeRecord",
    "RefereeSeasonStats",
    "TeamRecord",
]
