"""
FootyStats API Client

Client for the FootyStats football data API.
Handles API key injection, rate limiting, retries with backoff, response
envelopes and optional response caching.
"""

import time
from pathlib import Path
from typing import Any

import httpx
from diskcache import Cache
from loguru import logger

from src.config import AnalyticsConfig, load_config


class FootyApiError(Exception):
    """The API answered but reported the request as unsuccessful."""

    def __init__(self, endpoint: str, message: str):
        super().__init__(f"{endpoint}: {message}")
        self.endpoint = endpoint
        self.message = message


class RateLimiter:
    """Keeps requests under the per-minute quota with a minimum gap between calls."""

    def __init__(self, requests_per_minute: int = 30, request_delay: float = 0.5):
        self.requests_per_minute = requests_per_minute
        self.request_delay = request_delay
        self.last_request_time: float = 0
        self.request_count: int = 0
        self.window_start: float = time.monotonic()

    def wait_if_needed(self) -> None:
        """Block until the next request is allowed."""
        now = time.monotonic()

        if now - self.window_start >= 60:
            self.request_count = 0
            self.window_start = now

        if self.request_count >= self.requests_per_minute:
            sleep_time = 60 - (now - self.window_start)
            if sleep_time > 0:
                logger.debug(f"Request quota reached, sleeping for {sleep_time:.2f}s")
                time.sleep(sleep_time)
            self.request_count = 0
            self.window_start = time.monotonic()

        elapsed = time.monotonic() - self.last_request_time
        if elapsed < self.request_delay:
            time.sleep(self.request_delay - elapsed)

        self.last_request_time = time.monotonic()
        self.request_count += 1


class FootyStatsClient:
    """
    Client for the FootyStats API.

    Provides methods to fetch league matches, teams, players and referees,
    team form and individual match details.
    """

    def __init__(
        self,
        config: AnalyticsConfig | None = None,
        http_client: httpx.Client | None = None,
    ):
        """
        Initialize the FootyStats client.

        Args:
            config: Analytics configuration. Loaded from config/analytics.yaml if omitted
            http_client: Pre-built httpx client (mainly for tests)
        """
        self.config = config or load_config()
        self.base_url = self.config.api.base_url.rstrip("/")
        self.api_key = self.config.api.api_key

        if not self.api_key:
            logger.warning("No FootyStats API key configured; requests will likely be rejected")

        # Set up rate limiting
        api_config = self.config.api
        self.rate_limiter = RateLimiter(
            requests_per_minute=api_config.requests_per_minute,
            request_delay=api_config.request_delay,
        )
        self.max_retries = api_config.max_retries
        self.retry_delay = api_config.retry_delay
        self.retry_backoff = api_config.retry_backoff

        # Set up response caching
        cache_config = self.config.cache
        self.cache_ttl = cache_config.response_ttl_seconds
        if cache_config.enabled:
            cache_dir = Path(cache_config.directory) / "responses"
            cache_dir.mkdir(parents=True, exist_ok=True)
            self.cache = Cache(str(cache_dir))
        else:
            self.cache = None

        # Set up HTTP client
        self.client = http_client or httpx.Client(timeout=self.config.api.timeout)

        logger.info("FootyStats API client initialized")

    def _get_cache_key(self, endpoint: str, params: dict[str, Any] | None = None) -> str:
        """Generate a cache key for the request (API key excluded)."""
        key = endpoint
        if params:
            sorted_params = sorted(params.items())
            key += "?" + "&".join(f"{k}={v}" for k, v in sorted_params)
        return key

    def _make_request(
        self,
        endpoint: str,
        params: dict[str, Any] | None = None,
        use_cache: bool = True,
    ) -> Any:
        """
        Make a GET request and unwrap the response envelope.

        Args:
            endpoint: Endpoint path, e.g. "/league-matches"
            params: Query parameters (None values are dropped)
            use_cache: Whether to use caching for this request

        Returns:
            The "data" member of the response

        Raises:
            httpx.HTTPError: If the request still fails after all retries
            FootyApiError: If the API reports success=false
        """
        params = {k: v for k, v in (params or {}).items() if v is not None}
        cache_key = self._get_cache_key(endpoint, params)

        # Check cache first
        if use_cache and self.cache is not None:
            cached = self.cache.get(cache_key)
            if cached is not None:
                logger.debug(f"Cache hit for {cache_key}")
                return cached

        body = self._get_with_retries(endpoint, {"key": self.api_key, **params})

        if isinstance(body, dict) and body.get("success") is False:
            message = body.get("message") or body.get("error") or "request unsuccessful"
            logger.error(f"FootyStats request to {endpoint} failed: {message}")
            raise FootyApiError(endpoint, str(message))

        data = body.get("data") if isinstance(body, dict) else body

        # Cache the response
        if use_cache and self.cache is not None and data is not None:
            self.cache.set(cache_key, data, expire=self.cache_ttl)

        return data

    def _get_with_retries(self, endpoint: str, params: dict[str, Any]) -> Any:
        """GET with rate limiting; HTTP errors are retried with exponential backoff."""
        url = f"{self.base_url}{endpoint}"
        last_error: httpx.HTTPError | None = None

        for attempt in range(self.max_retries + 1):
            try:
                self.rate_limiter.wait_if_needed()
                response = self.client.get(url, params=params)
                response.raise_for_status()
                return response.json()

            except httpx.HTTPError as e:
                last_error = e
                if attempt < self.max_retries:
                    sleep_time = self.retry_delay * (self.retry_backoff**attempt)
                    logger.warning(
                        f"Request to {endpoint} failed (attempt {attempt + 1}/{self.max_retries + 1}), "
                        f"retrying in {sleep_time}s: {e}"
                    )
                    time.sleep(sleep_time)

        logger.error(f"Request failed after {self.max_retries + 1} attempts: {endpoint}")
        raise last_error  # type: ignore[misc]

    # League Methods
    def get_league_matches(self, season_id: int, page: int | None = None) -> list[dict[str, Any]]:
        """
        Get all matches of a league season.

        Args:
            season_id: FootyStats season ID
            page: Result page (optional)

        Returns:
            List of raw match dictionaries
        """
        return self._make_request("/league-matches", {"season_id": season_id, "page": page}) or []

    def get_league_teams(self, season_id: int) -> list[dict[str, Any]]:
        """Get teams that took part in a league season."""
        return self._make_request("/league-teams", {"season_id": season_id}) or []

    def get_league_players(self, season_id: int, page: int | None = None) -> list[dict[str, Any]]:
        """Get players of a league season."""
        return self._make_request("/league-players", {"season_id": season_id, "page": page}) or []

    def get_league_referees(self, season_id: int) -> list[dict[str, Any]]:
        """Get referees of a league season."""
        return self._make_request("/league-referees", {"season_id": season_id}) or []

    # Team Methods
    def get_team(self, team_id: int) -> Any:
        """Get team details and season stats."""
        return self._make_request("/team", {"team_id": team_id})

    def get_team_last_x(self, team_id: int) -> Any:
        """Get a team's last 5/6/10 match stats."""
        return self._make_request("/lastx", {"team_id": team_id})

    # Match Methods
    def get_match(self, match_id: int, use_cache: bool = True) -> dict[str, Any]:
        """
        Get details for a single match.

        Args:
            match_id: FootyStats match ID
            use_cache: Set False for live matches

        Returns:
            Raw match dictionary
        """
        return self._make_request("/match", {"match_id": match_id}, use_cache=use_cache)

    def get_todays_matches(self, date: str | None = None, timezone: str | None = None) -> list[dict[str, Any]]:
        """Get matches for today (or a YYYY-MM-DD date). Never cached."""
        return self._make_request("/todays-matches", {"date": date, "timezone": timezone}, use_cache=False) or []

    # Referee Methods
    def get_referee(self, referee_id: int) -> Any:
        """Get stats for an individual referee."""
        return self._make_request("/referee", {"referee_id": referee_id})

    def close(self) -> None:
        """Close the HTTP client and cache."""
        self.client.close()
        if self.cache is not None:
            self.cache.close()

    def __enter__(self) -> "FootyStatsClient":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
