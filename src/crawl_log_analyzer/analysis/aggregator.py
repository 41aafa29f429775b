"""
Running aggregation state for a crawl log scan.

A single CrawlAggregator owns every tally of one analysis and is threaded
through the scan as the accumulator of a fold: ``update()`` applies one
classified line. Sample lists are capped per entity so memory stays bounded
no matter how many lines a bot or URL accounts for.
"""

from dataclasses import dataclass, field
from typing import Optional

from ..config.constants import (
    CRAWL_BUDGET_BUCKETS,
    DEPTH_BUCKETS,
    MAX_DEPTH_BUCKET,
    REDIRECT_STATUS_CODES,
    STATUS_BUCKETS,
)
from ..config.settings import AnalyzerSettings
from ..utils.bot_classifier import BotMatch
from ..utils.http_utils import get_status_bucket, is_error_status, is_redirect_status
from ..utils.url_utils import classify_crawl_budget, get_url_depth, split_query
from .extractors import ExtractedFields


def _append_capped(samples: list[str], line: str, limit: int) -> None:
    if len(samples) < limit:
        samples.append(line)


@dataclass
class ErrorTally:
    """Error count and sample lines for one status code of one bot."""

    count: int = 0
    sample_lines: list[str] = field(default_factory=list)


@dataclass
class BotVisitAggregate:
    """Visits of one crawler identity, keyed by lower-cased bot name."""

    bot_name: str
    user_agent: str
    count: int = 0
    sample_lines: list[str] = field(default_factory=list)
    errors_by_status: dict[int, ErrorTally] = field(default_factory=dict)


@dataclass
class ErrorAggregate:
    """Error responses served to one bot with one status code."""

    status_code: int
    bot_name: str
    user_agent: str
    count: int = 0
    sample_lines: list[str] = field(default_factory=list)
    url: Optional[str] = None


@dataclass
class UrlAggregate:
    """Crawler requests for one path, query string stripped."""

    url: str
    depth: int
    count: int = 0
    status_codes: dict[int, int] = field(default_factory=dict)
    has_params: bool = False
    sample_lines: list[str] = field(default_factory=list)


@dataclass
class ResponseTimeStats:
    """Running response-time statistics (count, sum and maximum)."""

    count: int = 0
    total: float = 0.0
    maximum: Optional[float] = None

    def add(self, value: float) -> None:
        self.count += 1
        self.total += value
        if self.maximum is None or value > self.maximum:
            self.maximum = value

    @property
    def mean(self) -> Optional[float]:
        """Arithmetic mean, or None when no samples were recorded."""
        if self.count == 0:
            return None
        return self.total / self.count


@dataclass
class CrawlAggregator:
    """
    All running tallies of one scan.

    Dicts keep insertion order, so "first seen" ordering and the first-N
    sample lines follow file order.
    """

    settings: AnalyzerSettings = field(default_factory=AnalyzerSettings)

    # Line counters
    total_lines: int = 0
    total_visits: int = 0
    verified_visits: int = 0
    unverified_visits: int = 0

    # Keyed aggregates
    bots: dict[str, BotVisitAggregate] = field(default_factory=dict)
    urls: dict[str, UrlAggregate] = field(default_factory=dict)
    errors: dict[tuple[str, int], ErrorAggregate] = field(default_factory=dict)

    # Fixed-bucket distributions
    crawl_budget: dict[str, int] = field(
        default_factory=lambda: dict.fromkeys(CRAWL_BUDGET_BUCKETS, 0)
    )
    status_distribution: dict[str, int] = field(
        default_factory=lambda: dict.fromkeys(STATUS_BUCKETS, 0)
    )
    redirect_types: dict[int, int] = field(
        default_factory=lambda: dict.fromkeys(REDIRECT_STATUS_CODES, 0)
    )
    total_redirects: int = 0
    depth_distribution: dict[str, int] = field(
        default_factory=lambda: dict.fromkeys(DEPTH_BUCKETS, 0)
    )

    # Time series
    hourly: list[int] = field(default_factory=lambda: [0] * 24)
    daily: dict[str, int] = field(default_factory=dict)

    response_times: ResponseTimeStats = field(default_factory=ResponseTimeStats)

    def observe_line(self) -> None:
        """Count a scanned non-empty line, matched or not."""
        self.total_lines += 1

    def update(self, line: str, match: BotMatch, fields: ExtractedFields) -> None:
        """
        Apply one crawler-matched line to every tally.

        Args:
            line: Raw log line
            match: Crawler identification for the line
            fields: Optional fields extracted from the line
        """
        sample = line[: self.settings.sample_line_length]
        status_code = fields.status_code

        # 1. visit counters
        self.total_visits += 1
        if match.verified:
            self.verified_visits += 1
        else:
            self.unverified_visits += 1

        # 2. per-bot aggregate
        bot = self._upsert_bot(match)
        bot.count += 1
        _append_capped(bot.sample_lines, sample, self.settings.bot_sample_limit)

        # 3. per-URL aggregate, depth and crawl budget
        if fields.url is not None:
            self._record_url(fields.url, status_code, sample)

        # 4. status distribution and redirects
        if status_code is not None:
            self.status_distribution[get_status_bucket(status_code)] += 1
            if is_redirect_status(status_code):
                self.redirect_types[status_code] += 1
                self.total_redirects += 1

        # 5. time series
        if fields.hour is not None:
            self.hourly[fields.hour] += 1
        if fields.day is not None:
            self.daily[fields.day] = self.daily.get(fields.day, 0) + 1

        # 6. response time
        if fields.response_time_ms is not None:
            self.response_times.add(fields.response_time_ms)

        # 7. errors, global and per bot
        if is_error_status(status_code):
            self._record_error(bot, match, status_code, fields.url, sample)

    def _upsert_bot(self, match: BotMatch) -> BotVisitAggregate:
        key = match.bot_name.lower()
        bot = self.bots.get(key)
        if bot is None:
            bot = BotVisitAggregate(bot_name=match.bot_name, user_agent=match.user_agent)
            self.bots[key] = bot
        return bot

    def _record_url(self, url: str, status_code: Optional[int], sample: str) -> None:
        path, has_params = split_query(url)

        entry = self.urls.get(path)
        if entry is None:
            entry = UrlAggregate(url=path, depth=get_url_depth(path))
            self.urls[path] = entry
        entry.count += 1
        if status_code is not None:
            entry.status_codes[status_code] = entry.status_codes.get(status_code, 0) + 1
        if has_params:
            entry.has_params = True
        _append_capped(entry.sample_lines, sample, self.settings.url_sample_limit)

        self.depth_distribution[_depth_bucket(entry.depth)] += 1
        self.crawl_budget[classify_crawl_budget(url, status_code)] += 1

    def _record_error(
        self,
        bot: BotVisitAggregate,
        match: BotMatch,
        status_code: int,
        url: Optional[str],
        sample: str,
    ) -> None:
        key = (match.bot_name, status_code)
        error = self.errors.get(key)
        if error is None:
            error = ErrorAggregate(
                status_code=status_code,
                bot_name=match.bot_name,
                user_agent=match.user_agent,
                url=url[: self.settings.error_url_length] if url else None,
            )
            self.errors[key] = error
        error.count += 1
        _append_capped(error.sample_lines, sample, self.settings.error_sample_limit)

        tally = bot.errors_by_status.setdefault(status_code, ErrorTally())
        tally.count += 1
        _append_capped(tally.sample_lines, sample, self.settings.error_sample_limit)


def _depth_bucket(depth: int) -> str:
    if depth >= MAX_DEPTH_BUCKET:
        return DEPTH_BUCKETS[-1]
    return str(depth)
