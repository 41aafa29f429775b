"""Configuration module."""

from .constants import (
    CRAWL_BUDGET_BUCKETS,
    DEPTH_BUCKETS,
    REDIRECT_STATUS_CODES,
    STATUS_BUCKETS,
)
from .settings import (
    AnalyzerSettings,
    clear_settings_cache,
    get_settings,
    load_yaml_config,
)

__all__ = [
    # Report buckets
    "CRAWL_BUDGET_BUCKETS",
    "DEPTH_BUCKETS",
    "STATUS_BUCKETS",
    "REDIRECT_STATUS_CODES",
    # Settings
    "AnalyzerSettings",
    "get_settings",
    "clear_settings_cache",
    "load_yaml_config",
]
