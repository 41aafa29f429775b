"""Utility functions for crawl log analysis."""

from .bot_classifier import (
    GOOGLE_FAMILY,
    BotFamily,
    BotMatch,
    BotSignatureMatcher,
    classify_bot,
    extract_user_agent,
    get_variant_names,
    is_verified_crawler,
)
from .http_utils import get_status_bucket, is_error_status, is_redirect_status
from .logging_utils import setup_logging
from .url_utils import (
    classify_crawl_budget,
    get_url_depth,
    split_query,
    strip_scheme_and_host,
)

__all__ = [
    # Bot classification
    "BotFamily",
    "BotMatch",
    "BotSignatureMatcher",
    "GOOGLE_FAMILY",
    "classify_bot",
    "extract_user_agent",
    "get_variant_names",
    "is_verified_crawler",
    # HTTP utilities
    "get_status_bucket",
    "is_error_status",
    "is_redirect_status",
    # URL utilities
    "classify_crawl_budget",
    "get_url_depth",
    "split_query",
    "strip_scheme_and_host",
    # Logging
    "setup_logging",
]
