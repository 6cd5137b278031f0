"""
Configuration Loading

Loads analytics configuration from YAML with pydantic validation.
Falls back to built-in defaults when no configuration file is present.
"""

import os
from pathlib import Path
from typing import Any

import yaml
from loguru import logger
from pydantic import BaseModel, Field

DEFAULT_CONFIG_PATH = Path("config/analytics.yaml")
API_KEY_ENV_VAR = "FOOTYSTATS_API_KEY"


class ApiSettings(BaseModel):
    """Upstream FootyStats API settings."""

    base_url: str = "https://api.football-data-api.com"
    api_key: str = ""
    timeout: float = Field(default=30.0, gt=0)

    # Rate limiting and retries
    requests_per_minute: int = Field(default=30, ge=1)
    request_delay: float = Field(default=0.5, ge=0)
    max_retries: int = Field(default=3, ge=0)
    retry_delay: float = Field(default=1.0, ge=0)
    retry_backoff: float = Field(default=2.0, ge=1)


class CacheSettings(BaseModel):
    """Settings for the analytics and response caches."""

    enabled: bool = True
    directory: str = "data/cache"
    default_ttl_seconds: int = Field(default=1800, ge=0)
    response_ttl_seconds: int = Field(default=900, ge=0)


class EngineSettings(BaseModel):
    """Tunable engine defaults."""

    form_window: int = Field(default=5, ge=1, le=20)
    league_average_goals: float = Field(default=1.5, gt=0)
    home_advantage_multiplier: float = Field(default=1.1, ge=1.0, le=2.0)


class AnalyticsConfig(BaseModel):
    """Top-level configuration."""

    api: ApiSettings = Field(default_factory=ApiSettings)
    cache: CacheSettings = Field(default_factory=CacheSettings)
    engine: EngineSettings = Field(default_factory=EngineSettings)


def load_config(config_path: str | Path | None = None) -> AnalyticsConfig:
    """
    Load analytics configuration.

    Args:
        config_path: Path to a YAML config file. Defaults to config/analytics.yaml

    Returns:
        Validated AnalyticsConfig
    """
    path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH

    raw: dict[str, Any] = {}
    if not path.exists():
        logger.warning(f"Analytics config not found at {path}, using defaults")
    else:
        with open(path) as f:
            raw = yaml.safe_load(f) or {}

    config = AnalyticsConfig.model_validate(raw)

    env_key = os.environ.get(API_KEY_ENV_VAR)
    if env_key:
        config.api.api_key = env_key

    return config
