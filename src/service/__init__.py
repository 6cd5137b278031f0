"""Service layer for caching, record loading and analytics orchestration."""

from .analytics_service import AnalyticsResult, AnalyticsService, ResultMetadata, SeasonData
from .cache import AnalyticsCache, CacheStats, build_cache_key
from .data_loader import ParsedRecords, load_records_file, parse_records

__all__ = [
    "AnalyticsCache",
    "AnalyticsResult",
    "AnalyticsService",
    "CacheStats",
    "ParsedRecords",
    "ResultMetadata",
    "SeasonData",
    "build_cache_key",
    "load_records_file",
    "parse_records",
]
