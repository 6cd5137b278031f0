"""
Data Collectors Module

This module contains the client for the FootyStats football data API.

Collectors:
    - FootyStatsClient: API client for league, team, match, player and referee data
    - RateLimiter: Per-minute request quota shared by client calls
"""

from src.collectors.footy_api import FootyApiError, FootyStatsClient, RateLimiter

__all__ = [
    "FootyApiError",
    "FootyStatsClient",
    "RateLimiter",
]
