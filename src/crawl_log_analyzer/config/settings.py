"""
Analyzer settings and configuration management.

Supports loading from:
1. A YAML config file (crawl-analyzer.yaml)
2. Environment variables (fallback)
"""

import logging
import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

import yaml

from .constants import (
    BOT_SAMPLE_LIMIT,
    ERROR_SAMPLE_LIMIT,
    ERROR_URL_LENGTH,
    PROGRESS_INTERVAL,
    RESPONSE_TIME_MAX,
    RESPONSE_TIME_MIN,
    SAMPLE_LINE_LENGTH,
    TOP_URLS_LIMIT,
    URL_SAMPLE_LIMIT,
    USER_AGENT_LENGTH,
    VERIFICATION_HOSTNAMES,
    VERIFICATION_IP_PREFIXES,
)

logger = logging.getLogger(__name__)

ENV_PREFIX = "CRAWL_ANALYZER_"


def _section(config: dict[str, Any], name: str) -> dict[str, Any]:
    """Return a config section, treating a missing or empty one as {}."""
    section = config.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ValueError(
            f"Config section '{name}' must be a mapping, got {type(section).__name__}"
        )
    return section


def _string_list(
    section: dict[str, Any], key: str, default: tuple[str, ...]
) -> tuple[str, ...]:
    """Read a list of strings from a section, rejecting scalars."""
    value = section.get(key)
    if value is None:
        return default
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"'{key}' must be a list of strings, got {value!r}")
    return tuple(value)


@dataclass
class AnalyzerSettings:
    """
    Tunable heuristics and memory bounds for a crawl log scan.

    The response-time bounds and the verification substrings are carried over
    as-is; they have no stated unit or provenance and are only made
    configurable here, not generalized.
    """

    # Crawler verification heuristic
    verification_ip_prefixes: tuple[str, ...] = VERIFICATION_IP_PREFIXES
    verification_hostnames: tuple[str, ...] = VERIFICATION_HOSTNAMES

    # Count lines with a Google referer as crawler visits
    detect_referer_visits: bool = False

    # Response-time sanity bounds (exclusive)
    response_time_min: float = RESPONSE_TIME_MIN
    response_time_max: float = RESPONSE_TIME_MAX

    # Per-entity sample caps and truncation lengths
    bot_sample_limit: int = BOT_SAMPLE_LIMIT
    error_sample_limit: int = ERROR_SAMPLE_LIMIT
    url_sample_limit: int = URL_SAMPLE_LIMIT
    sample_line_length: int = SAMPLE_LINE_LENGTH
    user_agent_length: int = USER_AGENT_LENGTH
    error_url_length: int = ERROR_URL_LENGTH

    # Report shape
    top_urls_limit: int = TOP_URLS_LIMIT

    # Progress tick interval in lines
    progress_interval: int = PROGRESS_INTERVAL

    def validate(self) -> list[str]:
        """Validate settings values. Returns list of errors."""
        errors = []

        if self.response_time_min >= self.response_time_max:
            errors.append(
                f"response_time_min ({self.response_time_min}) must be lower than "
                f"response_time_max ({self.response_time_max})"
            )

        for name in (
            "bot_sample_limit",
            "error_sample_limit",
            "url_sample_limit",
        ):
            if getattr(self, name) < 0:
                errors.append(f"{name} must be >= 0, got {getattr(self, name)}")

        for name in (
            "sample_line_length",
            "user_agent_length",
            "error_url_length",
            "top_urls_limit",
            "progress_interval",
        ):
            if getattr(self, name) < 1:
                errors.append(f"{name} must be >= 1, got {getattr(self, name)}")

        if any(not prefix for prefix in self.verification_ip_prefixes):
            errors.append("verification_ip_prefixes must not contain empty strings")
        if any(not host for host in self.verification_hostnames):
            errors.append("verification_hostnames must not contain empty strings")

        return errors

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            "verification_ip_prefixes": list(self.verification_ip_prefixes),
            "verification_hostnames": list(self.verification_hostnames),
            "detect_referer_visits": self.detect_referer_visits,
            "response_time_min": self.response_time_min,
            "response_time_max": self.response_time_max,
            "bot_sample_limit": self.bot_sample_limit,
            "error_sample_limit": self.error_sample_limit,
            "url_sample_limit": self.url_sample_limit,
            "sample_line_length": self.sample_line_length,
            "user_agent_length": self.user_agent_length,
            "error_url_length": self.error_url_length,
            "top_urls_limit": self.top_urls_limit,
            "progress_interval": self.progress_interval,
        }

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> "AnalyzerSettings":
        """Create from configuration dictionary (e.g., a parsed YAML file)."""
        verification = _section(config, "verification")
        response_time = _section(config, "response_time")
        samples = _section(config, "samples")
        report = _section(config, "report")

        return cls(
            verification_ip_prefixes=_string_list(
                verification, "ip_prefixes", VERIFICATION_IP_PREFIXES
            ),
            verification_hostnames=_string_list(
                verification, "hostnames", VERIFICATION_HOSTNAMES
            ),
            detect_referer_visits=config.get("detect_referer_visits", False),
            response_time_min=float(response_time.get("min", RESPONSE_TIME_MIN)),
            response_time_max=float(response_time.get("max", RESPONSE_TIME_MAX)),
            bot_sample_limit=samples.get("bot_limit", BOT_SAMPLE_LIMIT),
            error_sample_limit=samples.get("error_limit", ERROR_SAMPLE_LIMIT),
            url_sample_limit=samples.get("url_limit", URL_SAMPLE_LIMIT),
            sample_line_length=samples.get("line_length", SAMPLE_LINE_LENGTH),
            user_agent_length=samples.get("user_agent_length", USER_AGENT_LENGTH),
            error_url_length=samples.get("error_url_length", ERROR_URL_LENGTH),
            top_urls_limit=report.get("top_urls_limit", TOP_URLS_LIMIT),
            progress_interval=report.get("progress_interval", PROGRESS_INTERVAL),
        )

    @classmethod
    def from_env(cls) -> "AnalyzerSettings":
        """Create from environment variables."""

        def safe_int(key: str, default: int) -> int:
            """Safely parse int from env var, using default on error."""
            try:
                return int(os.environ.get(ENV_PREFIX + key, str(default)))
            except ValueError:
                return default

        def safe_float(key: str, default: float) -> float:
            """Safely parse float from env var, using default on error."""
            try:
                return float(os.environ.get(ENV_PREFIX + key, str(default)))
            except ValueError:
                return default

        def safe_bool(key: str, default: bool) -> bool:
            """Safely parse bool from env var."""
            return (
                os.environ.get(ENV_PREFIX + key, str(default).lower()).lower()
                == "true"
            )

        def safe_list(key: str, default: tuple[str, ...]) -> tuple[str, ...]:
            """Parse a comma-separated env var, using default when unset."""
            raw = os.environ.get(ENV_PREFIX + key)
            if not raw:
                return default
            return tuple(item.strip() for item in raw.split(",") if item.strip())

        return cls(
            verification_ip_prefixes=safe_list(
                "VERIFICATION_IP_PREFIXES", VERIFICATION_IP_PREFIXES
            ),
            verification_hostnames=safe_list(
                "VERIFICATION_HOSTNAMES", VERIFICATION_HOSTNAMES
            ),
            detect_referer_visits=safe_bool("DETECT_REFERER_VISITS", False),
            response_time_min=safe_float("RESPONSE_TIME_MIN", RESPONSE_TIME_MIN),
            response_time_max=safe_float("RESPONSE_TIME_MAX", RESPONSE_TIME_MAX),
            bot_sample_limit=safe_int("BOT_SAMPLE_LIMIT", BOT_SAMPLE_LIMIT),
            error_sample_limit=safe_int("ERROR_SAMPLE_LIMIT", ERROR_SAMPLE_LIMIT),
            url_sample_limit=safe_int("URL_SAMPLE_LIMIT", URL_SAMPLE_LIMIT),
            sample_line_length=safe_int("SAMPLE_LINE_LENGTH", SAMPLE_LINE_LENGTH),
            user_agent_length=safe_int("USER_AGENT_LENGTH", USER_AGENT_LENGTH),
            error_url_length=safe_int("ERROR_URL_LENGTH", ERROR_URL_LENGTH),
            top_urls_limit=safe_int("TOP_URLS_LIMIT", TOP_URLS_LIMIT),
            progress_interval=safe_int("PROGRESS_INTERVAL", PROGRESS_INTERVAL),
        )


# Default config file path
DEFAULT_CONFIG_PATH = Path("crawl-analyzer.yaml")


def load_yaml_config(file_path: Path) -> dict[str, Any]:
    """
    Load a YAML config file.

    Args:
        file_path: Path to the YAML file

    Returns:
        Parsed configuration (empty dict for an empty file)

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If the top-level YAML value is not a mapping
    """
    if not file_path.exists():
        raise FileNotFoundError(f"Config file not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        config = yaml.safe_load(f)

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ValueError(
            f"Config file {file_path} must contain a mapping, "
            f"got {type(config).__name__}"
        )
    return config


@lru_cache
def get_settings(config_path: Optional[str] = None) -> AnalyzerSettings:
    """
    Get cached settings instance.

    Loads from the YAML config file if available, otherwise from env vars.

    Args:
        config_path: Optional path to a YAML config file

    Returns:
        AnalyzerSettings instance
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    if path.exists():
        try:
            config = load_yaml_config(path)
            logger.debug(f"Loaded analyzer settings from {path}")
            return AnalyzerSettings.from_dict(config)
        except (yaml.YAMLError, ValueError, TypeError) as e:
            logger.warning(f"Failed to load config from {path}: {e}")
            logger.warning("Falling back to environment variables")

    return AnalyzerSettings.from_env()


def clear_settings_cache() -> None:
    """Clear the cached settings (useful for testing)."""
    get_settings.cache_clear()
