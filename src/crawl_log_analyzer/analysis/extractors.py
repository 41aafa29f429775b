"""
Best-effort field extraction from access-log lines of unknown format.

Each field is extracted independently by an ordered list of
``(pattern, converter)`` rules. The first rule whose pattern matches and
whose converter returns a value wins; a converter returns ``None`` to reject
a match and let the next rule try. Nothing here raises on malformed input.
"""

import re
from dataclasses import dataclass
from typing import Callable, Optional

from ..config.constants import (
    HTTP_METHODS,
    MONTH_NUMBERS,
    RESPONSE_TIME_MAX,
    RESPONSE_TIME_MIN,
)
from ..utils.url_utils import strip_scheme_and_host

Rule = tuple[re.Pattern, Callable[[re.Match], Optional[object]]]


@dataclass(frozen=True)
class Timestamp:
    """Hour of day and ISO day key pulled from a log line."""

    hour: int
    day: str


@dataclass(frozen=True)
class ExtractedFields:
    """Optional fields extracted from one log line."""

    status_code: Optional[int] = None
    url: Optional[str] = None
    hour: Optional[int] = None
    day: Optional[str] = None
    response_time_ms: Optional[float] = None

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "status_code": self.status_code,
            "url": self.url,
            "hour": self.hour,
            "day": self.day,
            "response_time_ms": self.response_time_ms,
        }


def first_match(line: str, rules: tuple[Rule, ...]) -> Optional[object]:
    """
    Apply ordered extraction rules to a line.

    Args:
        line: Raw log line
        rules: (pattern, converter) pairs, tried in order

    Returns:
        First non-None converted value, or None
    """
    for pattern, convert in rules:
        match = pattern.search(line)
        if match is None:
            continue
        value = convert(match)
        if value is not None:
            return value
    return None


# =============================================================================
# Converters
# =============================================================================


def _to_status(match: re.Match) -> int:
    return int(match.group(1))


def _to_path(match: re.Match) -> Optional[str]:
    return strip_scheme_and_host(match.group(1))


def _make_date(year: int, month: int, day: int, hour: int) -> Optional[Timestamp]:
    if not (1 <= month <= 12 and 1 <= day <= 31 and 0 <= hour <= 23):
        return None
    return Timestamp(hour=hour, day=f"{year:04d}-{month:02d}-{day:02d}")


def _from_clf(match: re.Match) -> Optional[Timestamp]:
    month = MONTH_NUMBERS.get(match.group("month").lower())
    if month is None:
        return None
    return _make_date(
        int(match.group("year")), month, int(match.group("day")), int(match.group("hour"))
    )


def _from_iso(match: re.Match) -> Optional[Timestamp]:
    return _make_date(
        int(match.group("year")),
        int(match.group("month")),
        int(match.group("day")),
        int(match.group("hour")),
    )


# =============================================================================
# Rule Tables
# =============================================================================

STATUS_RULES: tuple[Rule, ...] = (
    (re.compile(r"\s(\d{3})\s"), _to_status),
    (re.compile(r"HTTP/[\d.]+\s+(\d{3})"), _to_status),
    (re.compile(r"\"\s+(\d{3})\s+"), _to_status),
    (re.compile(r"\s+(\d{3})[\"\s]"), _to_status),
)

URL_RULES: tuple[Rule, ...] = (
    (
        re.compile(
            r"\b(?:" + "|".join(HTTP_METHODS) + r")\s+([^\s\"']+)", re.IGNORECASE
        ),
        _to_path,
    ),
    (re.compile(r"\"([^\s\"]+)\"\s+\d{3}\b"), _to_path),
    (re.compile(r"'([^\s']+)'\s+\d{3}\b"), _to_path),
    (re.compile(r"(https?://[^\s\"']+)", re.IGNORECASE), _to_path),
)

TIMESTAMP_RULES: tuple[Rule, ...] = (
    # [10/Oct/2023:13:55:36 +0000]
    (
        re.compile(
            r"\[(?P<day>\d{1,2})/(?P<month>[A-Za-z]{3})/(?P<year>\d{4})"
            r":(?P<hour>\d{2}):\d{2}:\d{2}"
        ),
        _from_clf,
    ),
    # 2023-10-10 13:55:36 or 2023-10-10T13:55:36
    (
        re.compile(
            r"(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})[ T]"
            r"(?P<hour>\d{2}):\d{2}:\d{2}"
        ),
        _from_iso,
    ),
    # [2023-10-10 13:55:36]
    (
        re.compile(
            r"\[(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})[ T]?"
            r"(?P<hour>\d{2}):\d{2}(?::\d{2})?"
        ),
        _from_iso,
    ),
)

RESPONSE_TIME_PATTERNS: tuple[re.Pattern, ...] = (
    re.compile(r"\s(\d+(?:\.\d+)?)\s*$"),
    re.compile(r"rt=(\d+(?:\.\d+)?)", re.IGNORECASE),
    re.compile(r"time=(\d+(?:\.\d+)?)", re.IGNORECASE),
    re.compile(r"duration:\s*(\d+(?:\.\d+)?)", re.IGNORECASE),
)


class FieldExtractor:
    """
    Extracts status code, path, timestamp and response time from a line.

    Every field is optional and extracted independently; a miss on one
    field never blocks the others.
    """

    def __init__(
        self,
        response_time_min: float = RESPONSE_TIME_MIN,
        response_time_max: float = RESPONSE_TIME_MAX,
    ):
        """
        Initialize the extractor.

        Args:
            response_time_min: Exclusive lower sanity bound for response times
            response_time_max: Exclusive upper sanity bound for response times
        """
        self.response_time_min = response_time_min
        self.response_time_max = response_time_max
        self.response_time_rules: tuple[Rule, ...] = tuple(
            (pattern, self._to_response_time) for pattern in RESPONSE_TIME_PATTERNS
        )

    def extract(self, line: str) -> ExtractedFields:
        """Extract all supported fields from a line."""
        timestamp = self.extract_timestamp(line)
        return ExtractedFields(
            status_code=self.extract_status_code(line),
            url=self.extract_url(line),
            hour=timestamp.hour if timestamp else None,
            day=timestamp.day if timestamp else None,
            response_time_ms=self.extract_response_time(line),
        )

    def extract_status_code(self, line: str) -> Optional[int]:
        """Extract a three-digit HTTP status code."""
        return first_match(line, STATUS_RULES)

    def extract_url(self, line: str) -> Optional[str]:
        """
        Extract the request path, host stripped, query string kept.

        Examples:
            >>> FieldExtractor().extract_url('"GET https://a.com/x?y=1 HTTP/1.1" 200')
            '/x?y=1'
        """
        return first_match(line, URL_RULES)

    def extract_timestamp(self, line: str) -> Optional[Timestamp]:
        """Extract hour of day and ISO day key."""
        return first_match(line, TIMESTAMP_RULES)

    def extract_response_time(self, line: str) -> Optional[float]:
        """Extract a response time within the sanity bounds."""
        return first_match(line, self.response_time_rules)

    def _to_response_time(self, match: re.Match) -> Optional[float]:
        value = float(match.group(1))
        if self.response_time_min < value < self.response_time_max:
            return value
        return None
