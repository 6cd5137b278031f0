"""
Analytics Service

Coordinates the analytics workflow: fetches records from the FootyStats
API, validates them, runs the engines and memoizes the results.

Every public method returns an AnalyticsResult envelope. Upstream and
validation failures are logged and reported as unsuccessful results
instead of being raised.
"""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable

import httpx
from loguru import logger

from prediction import PredictionOptions, live_match_insight, predict_match
from src.analytics.league import (
    CompetitionInput,
    analyze_league_table,
    analyze_season_trends,
    calculate_league_statistics,
    compare_competitions,
    generate_league_table,
)
from src.analytics.players import analyze_top_performers, calculate_player_performance
from src.analytics.referees import analyze_referee_impact, calculate_referee_performance
from src.analytics.team_performance import analyze_team_form, compare_teams
from src.collectors.footy_api import FootyApiError, FootyStatsClient
from src.config import AnalyticsConfig, load_config
from src.models import (
    MatchRecord,
    PlayerRecord,
    PlayerSeasonStats,
    RefereeRecord,
    TeamRecord,
)
from src.service.cache import AnalyticsCache, build_cache_key
from src.service.data_loader import parse_records, sort_by_kickoff

LIVE_CACHE_TTL = 60


@dataclass
class ResultMetadata:
    timestamp: str
    processing_time_ms: float
    data_points: int = 0
    cached: bool = False
    source: str = ""


@dataclass
class AnalyticsResult:
    """Uniform envelope for service responses."""

    success: bool
    metadata: ResultMetadata
    data: Any = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        data = self.data.to_dict() if hasattr(self.data, "to_dict") else self.data
        return {
            "success": self.success,
            "data": data,
            "error": self.error,
            "metadata": {
                "timestamp": self.metadata.timestamp,
                "processing_time_ms": round(self.metadata.processing_time_ms, 2),
                "data_points": self.metadata.data_points,
                "cached": self.metadata.cached,
                "source": self.metadata.source,
            },
        }


@dataclass
class SeasonData:
    """Validated records for one league season."""

    matches: list[MatchRecord] = field(default_factory=list)
    teams: list[TeamRecord] = field(default_factory=list)

    def team(self, team_id: int) -> TeamRecord:
        for team in self.teams:
            if team.id == team_id:
                return team
        raise ValueError(f"Team {team_id} not found in season")


class AnalyticsService:
    """
    Main analytics service.

    Wraps engine calls with data fetching, caching and result envelopes.
    """

    def __init__(
        self,
        config: AnalyticsConfig | None = None,
        client: FootyStatsClient | None = None,
        cache: AnalyticsCache | None = None,
    ) -> None:
        """
        Initialize the service.

        Args:
            config: Analytics configuration (loaded from file if omitted)
            client: FootyStats client (creates one if not provided)
            cache: Analytics cache (creates one from config if not provided)
        """
        self.config = config or load_config()
        self.client = client or FootyStatsClient(self.config)
        self.cache = cache or AnalyticsCache(
            cache_dir=self.config.cache.directory,
            default_ttl=self.config.cache.default_ttl_seconds,
            enabled=self.config.cache.enabled,
        )

        logger.info("Analytics service initialized")

    # Data access
    def load_season(self, season_id: int) -> SeasonData:
        """Fetch and validate matches (kickoff order) and teams for a season."""
        matches = parse_records(self.client.get_league_matches(season_id), MatchRecord).records
        teams = parse_records(self.client.get_league_teams(season_id), TeamRecord).records
        logger.info(f"Season {season_id}: {len(matches)} matches, {len(teams)} teams")
        return SeasonData(matches=sort_by_kickoff(matches), teams=teams)

    # League analytics
    def get_league_statistics(self, season_id: int) -> AnalyticsResult:
        def compute() -> tuple[Any, int]:
            season = self.load_season(season_id)
            return calculate_league_statistics(season.matches), len(season.matches)

        return self._run("league_statistics", build_cache_key("league_statistics", season_id), compute)

    def get_league_table(self, season_id: int) -> AnalyticsResult:
        def compute() -> tuple[Any, int]:
            season = self.load_season(season_id)
            return generate_league_table(season.matches, season.teams), len(season.matches)

        return self._run("league_table", build_cache_key("league_table", season_id), compute)

    def get_table_analytics(self, season_id: int) -> AnalyticsResult:
        """Standings with form, home/away and spread views."""

        def compute() -> tuple[Any, int]:
            season = self.load_season(season_id)
            return analyze_league_table(season.matches, season.teams), len(season.matches) + len(season.teams)

        return self._run("league_table_analytics", build_cache_key("league_table_analytics", season_id), compute)

    def get_season_trends(self, season_id: int, season_label: str | None = None) -> AnalyticsResult:
        label = season_label or str(season_id)

        def compute() -> tuple[Any, int]:
            season = self.load_season(season_id)
            return analyze_season_trends(season.matches, season.teams, label), len(season.matches)

        return self._run("season_trends", build_cache_key("season_trends", season_id, label), compute)

    def compare_competitions(self, seasons: dict[str, int]) -> AnalyticsResult:
        """
        Compare several league seasons.

        Args:
            seasons: Mapping of league name to season ID
        """

        def compute() -> tuple[Any, int]:
            competitions = []
            for name, season_id in seasons.items():
                season = self.load_season(season_id)
                competitions.append(CompetitionInput(str(season_id), name, season.matches, season.teams))
            points = sum(len(competition.matches) for competition in competitions)
            return compare_competitions(competitions), points

        key = build_cache_key("competition_comparison", **{name: sid for name, sid in seasons.items()})
        return self._run("competition_comparison", key, compute)

    # Team analytics
    def get_team_form(self, season_id: int, team_id: int, window_size: int | None = None) -> AnalyticsResult:
        window = window_size or self.config.engine.form_window

        def compute() -> tuple[Any, int]:
            season = self.load_season(season_id)
            complete = [match for match in season.matches if match.is_complete]
            return analyze_team_form(complete, team_id, window), len(complete)

        return self._run("team_form", build_cache_key("team_form", season_id, team_id, window=window), compute)

    def compare_teams(self, season_id: int, home_team_id: int, away_team_id: int) -> AnalyticsResult:
        def compute() -> tuple[Any, int]:
            season = self.load_season(season_id)
            complete = [match for match in season.matches if match.is_complete]
            return compare_teams(complete, home_team_id, away_team_id), len(complete)

        key = build_cache_key("team_comparison", season_id, home_team_id, away_team_id)
        return self._run("team_comparison", key, compute)

    # Match analytics
    def predict_match(
        self,
        season_id: int,
        home_team_id: int,
        away_team_id: int,
        options: PredictionOptions | None = None,
    ) -> AnalyticsResult:
        """Predict a fixture using each side's recent complete matches as form."""
        options = options or PredictionOptions(
            form_matches=self.config.engine.form_window,
            league_average_goals=self.config.engine.league_average_goals,
            home_advantage=self.config.engine.home_advantage_multiplier,
        )

        def compute() -> tuple[Any, int]:
            season = self.load_season(season_id)
            complete = [match for match in season.matches if match.is_complete]
            home_form = [m for m in complete if m.involves(home_team_id)][-options.form_matches :]
            away_form = [m for m in complete if m.involves(away_team_id)][-options.form_matches :]
            result = predict_match(
                season.team(home_team_id), season.team(away_team_id), home_form, away_form, options
            )
            return result, len(home_form) + len(away_form)

        key = build_cache_key("match_prediction", season_id, home_team_id, away_team_id, **options.model_dump())
        return self._run("match_prediction", key, compute)

    def get_live_insights(self, match_id: int) -> AnalyticsResult:
        def compute() -> tuple[Any, int]:
            match = MatchRecord.model_validate(self.client.get_match(match_id, use_cache=False))
            return live_match_insight(match), 1

        return self._run("live_match_insights", build_cache_key("live_match_insights", match_id), compute, LIVE_CACHE_TTL)

    # Player and referee analytics
    def get_top_players(self, season_id: int, max_per_category: int = 5) -> AnalyticsResult:
        def compute() -> tuple[Any, int]:
            season = self.load_season(season_id)
            complete = [match for match in season.matches if match.is_complete]
            players = parse_records(self.client.get_league_players(season_id), PlayerRecord).records
            metrics = [
                calculate_player_performance(player, complete, _player_stats(player))
                for player in players
            ]
            return analyze_top_performers(metrics, max_per_category), len(metrics)

        key = build_cache_key("top_players", season_id, limit=max_per_category)
        return self._run("top_players", key, compute)

    def analyze_referee(self, season_id: int, referee_id: int) -> AnalyticsResult:
        def compute() -> tuple[Any, int]:
            season = self.load_season(season_id)
            referees = parse_records(self.client.get_league_referees(season_id), RefereeRecord).records
            referee = next((r for r in referees if r.id == referee_id), None)
            if referee is None:
                raise ValueError(f"Referee {referee_id} not found in season {season_id}")

            complete = [match for match in season.matches if match.is_complete]
            metrics = calculate_referee_performance(referee, complete)
            return analyze_referee_impact(metrics, complete, season.teams), metrics.matches_officiated

        return self._run("referee_analysis", build_cache_key("referee_analysis", season_id, referee_id), compute)

    # Cache management
    def invalidate_cache(self) -> int:
        return self.cache.invalidate()

    def _run(
        self,
        source: str,
        cache_key: str,
        compute: Callable[[], tuple[Any, int]],
        ttl_seconds: int | None = None,
    ) -> AnalyticsResult:
        start = time.perf_counter()
        try:
            (data, data_points), cached = self.cache.get_or_compute(cache_key, compute, ttl_seconds)
        except (httpx.HTTPError, FootyApiError, ValueError) as e:
            logger.error(f"{source} failed: {e}")
            return AnalyticsResult(
                success=False,
                error=f"{source} failed: {e}",
                metadata=_metadata(source, start),
            )

        logger.info(f"{source} completed ({data_points} data points, cached={cached})")
        return AnalyticsResult(
            success=True,
            data=data,
            metadata=_metadata(source, start, data_points, cached),
        )

    def close(self) -> None:
        """Close client and cache."""
        self.client.close()
        self.cache.close()

    def __enter__(self) -> "AnalyticsService":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()


def _metadata(source: str, start: float, data_points: int = 0, cached: bool = False) -> ResultMetadata:
    return ResultMetadata(
        timestamp=datetime.now(timezone.utc).isoformat(),
        processing_time_ms=(time.perf_counter() - start) * 1000,
        data_points=data_points,
        cached=cached,
        source=source,
    )


def _player_stats(player: PlayerRecord) -> PlayerSeasonStats | None:
    # Upstream player rows carry the season totals alongside the identity fields
    parsed = parse_records([player.model_dump()], PlayerSeasonStats).records
    return parsed[0] if parsed else None
