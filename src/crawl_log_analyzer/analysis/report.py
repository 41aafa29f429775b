"""
Report construction from final aggregation state.

build_report() is a pure function: it copies everything it needs out of the
CrawlAggregator and returns frozen dataclasses. ``AnalysisResult.to_dict()``
renders the JSON contract consumed by report renderers (camelCase keys,
``detailedAnalysis.step1`` .. ``step9``).
"""

from dataclasses import dataclass
from typing import Optional

from ..config.constants import CRAWL_BUDGET_BUCKETS, STATUS_BUCKETS
from .aggregator import (
    BotVisitAggregate,
    CrawlAggregator,
    ErrorAggregate,
    UrlAggregate,
)


def percentage(part: float, total: float) -> float:
    """
    part / total * 100 rounded to 2 decimals, 0.0 when total is 0.

    Examples:
        >>> percentage(1, 3)
        33.33
        >>> percentage(5, 0)
        0.0
    """
    if not total:
        return 0.0
    return round(part / total * 100, 2)


# =============================================================================
# Entity Summaries
# =============================================================================


@dataclass(frozen=True)
class BotErrorSummary:
    """Errors of one status code served to one bot."""

    status_code: int
    count: int
    sample_lines: tuple[str, ...]

    def to_dict(self) -> dict:
        return {
            "statusCode": self.status_code,
            "count": self.count,
            "sampleLines": list(self.sample_lines),
        }


@dataclass(frozen=True)
class BotSummary:
    """Visits of one crawler identity."""

    bot_name: str
    user_agent: str
    count: int
    sample_lines: tuple[str, ...]
    errors: tuple[BotErrorSummary, ...]

    @classmethod
    def from_aggregate(cls, bot: BotVisitAggregate) -> "BotSummary":
        return cls(
            bot_name=bot.bot_name,
            user_agent=bot.user_agent,
            count=bot.count,
            sample_lines=tuple(bot.sample_lines),
            errors=tuple(
                BotErrorSummary(
                    status_code=status_code,
                    count=tally.count,
                    sample_lines=tuple(tally.sample_lines),
                )
                for status_code, tally in bot.errors_by_status.items()
            ),
        )

    def to_dict(self) -> dict:
        return {
            "botName": self.bot_name,
            "userAgent": self.user_agent,
            "count": self.count,
            "sampleLines": list(self.sample_lines),
            "errors": [error.to_dict() for error in self.errors],
        }


@dataclass(frozen=True)
class ErrorSummary:
    """Errors of one status code served to one bot, global view."""

    status_code: int
    bot_name: str
    user_agent: str
    count: int
    sample_lines: tuple[str, ...]
    url: Optional[str]

    @classmethod
    def from_aggregate(cls, error: ErrorAggregate) -> "ErrorSummary":
        return cls(
            status_code=error.status_code,
            bot_name=error.bot_name,
            user_agent=error.user_agent,
            count=error.count,
            sample_lines=tuple(error.sample_lines),
            url=error.url,
        )

    def to_dict(self) -> dict:
        return {
            "statusCode": self.status_code,
            "botName": self.bot_name,
            "userAgent": self.user_agent,
            "count": self.count,
            "sampleLines": list(self.sample_lines),
            "url": self.url,
        }


@dataclass(frozen=True)
class UrlSummary:
    """Crawler requests for one query-stripped path."""

    url: str
    count: int
    status_codes: dict[int, int]
    has_params: bool
    depth: int
    sample_lines: tuple[str, ...]

    @classmethod
    def from_aggregate(cls, entry: UrlAggregate) -> "UrlSummary":
        return cls(
            url=entry.url,
            count=entry.count,
            status_codes=dict(entry.status_codes),
            has_params=entry.has_params,
            depth=entry.depth,
            sample_lines=tuple(entry.sample_lines),
        )

    def to_dict(self) -> dict:
        return {
            "url": self.url,
            "count": self.count,
            "statusCodes": dict(self.status_codes),
            "hasParams": self.has_params,
            "depth": self.depth,
            "sampleLines": list(self.sample_lines),
        }


# =============================================================================
# Detailed Analysis Steps
# =============================================================================


@dataclass(frozen=True)
class IdentificationStep:
    """Step 1: how many scanned lines were crawler visits."""

    total_lines: int
    bot_lines: int
    identification_rate: float
    verified_visits: int
    unverified_visits: int
    verification_rate: float

    def to_dict(self) -> dict:
        return {
            "totalLines": self.total_lines,
            "botLines": self.bot_lines,
            "identificationRate": self.identification_rate,
            "verifiedVisits": self.verified_visits,
            "unverifiedVisits": self.unverified_visits,
            "verificationRate": self.verification_rate,
        }


@dataclass(frozen=True)
class VolumeStep:
    """Step 2: request volume and URL uniqueness."""

    total_requests: int
    url_requests: int
    unique_urls: int
    avg_requests_per_url: float
    urls_with_params: int

    def to_dict(self) -> dict:
        return {
            "totalRequests": self.total_requests,
            "urlRequests": self.url_requests,
            "uniqueUrls": self.unique_urls,
            "avgRequestsPerUrl": self.avg_requests_per_url,
            "urlsWithParams": self.urls_with_params,
        }


@dataclass(frozen=True)
class TopUrlsStep:
    """Step 3: most crawled URLs."""

    top_urls: tuple[UrlSummary, ...]

    def to_dict(self) -> dict:
        return {"topUrls": [entry.to_dict() for entry in self.top_urls]}


@dataclass(frozen=True)
class CrawlBudgetStep:
    """Step 4: crawl-budget allocation across the five buckets."""

    buckets: dict[str, int]
    total_classified: int
    percentages: dict[str, float]

    def to_dict(self) -> dict:
        result = dict(self.buckets)
        result["totalClassified"] = self.total_classified
        result["percentages"] = dict(self.percentages)
        return result


@dataclass(frozen=True)
class StatusStep:
    """Step 5: HTTP status distribution."""

    buckets: dict[str, int]
    total_with_status: int
    percentages: dict[str, float]

    def to_dict(self) -> dict:
        result = dict(self.buckets)
        result["totalWithStatus"] = self.total_with_status
        result["percentages"] = dict(self.percentages)
        return result


@dataclass(frozen=True)
class RedirectStep:
    """Step 6: redirect summary. Chains are not correlated."""

    total_redirects: int
    redirect_types: dict[int, int]
    redirect_rate: float

    def to_dict(self) -> dict:
        return {
            "totalRedirects": self.total_redirects,
            "redirectTypes": dict(self.redirect_types),
            "redirectRate": self.redirect_rate,
        }


@dataclass(frozen=True)
class DepthStep:
    """Step 7: URL depth distribution."""

    distribution: dict[str, int]
    average_depth: float

    def to_dict(self) -> dict:
        return {
            "depthDistribution": dict(self.distribution),
            "averageDepth": self.average_depth,
        }


@dataclass(frozen=True)
class ResponseTimeStep:
    """Step 8: response-time summary; averages are None without samples."""

    timing_data_available: bool
    average_response_time: Optional[float]
    max_response_time: Optional[float]
    samples: int

    def to_dict(self) -> dict:
        return {
            "timingDataAvailable": self.timing_data_available,
            "averageResponseTime": self.average_response_time,
            "maxResponseTime": self.max_response_time,
            "samples": self.samples,
        }


@dataclass(frozen=True)
class TimeSeriesStep:
    """Step 9: crawler activity by hour of day and by day."""

    hourly: tuple[int, ...]
    daily: dict[str, int]
    peak_hour: Optional[int]

    def to_dict(self) -> dict:
        return {
            "hourly": list(self.hourly),
            "daily": dict(self.daily),
            "peakHour": self.peak_hour,
        }


@dataclass(frozen=True)
class DetailedAnalysis:
    """The nine report facets."""

    step1: IdentificationStep
    step2: VolumeStep
    step3: TopUrlsStep
    step4: CrawlBudgetStep
    step5: StatusStep
    step6: RedirectStep
    step7: DepthStep
    step8: ResponseTimeStep
    step9: TimeSeriesStep

    def to_dict(self) -> dict:
        return {
            "step1": self.step1.to_dict(),
            "step2": self.step2.to_dict(),
            "step3": self.step3.to_dict(),
            "step4": self.step4.to_dict(),
            "step5": self.step5.to_dict(),
            "step6": self.step6.to_dict(),
            "step7": self.step7.to_dict(),
            "step8": self.step8.to_dict(),
            "step9": self.step9.to_dict(),
        }


@dataclass(frozen=True)
class AnalysisResult:
    """Terminal snapshot of one crawl log analysis."""

    total_visits: int
    unique_bots: int
    bots: tuple[BotSummary, ...]
    errors: tuple[ErrorSummary, ...]
    detailed_analysis: DetailedAnalysis

    def to_dict(self) -> dict:
        """Render the JSON-serializable report contract."""
        return {
            "totalGoogleVisits": self.total_visits,
            "uniqueBots": self.unique_bots,
            "bots": [bot.to_dict() for bot in self.bots],
            "errors": [error.to_dict() for error in self.errors],
            "detailedAnalysis": self.detailed_analysis.to_dict(),
        }


# =============================================================================
# Builder
# =============================================================================


def build_report(aggregator: CrawlAggregator) -> AnalysisResult:
    """
    Build the immutable report from final aggregation state.

    Args:
        aggregator: State after the scan (not modified)

    Returns:
        AnalysisResult
    """
    # sorted() is stable, so ties keep first-seen order
    bots = sorted(aggregator.bots.values(), key=lambda bot: -bot.count)
    errors = sorted(
        aggregator.errors.values(),
        key=lambda error: (error.status_code, -error.count),
    )

    return AnalysisResult(
        total_visits=aggregator.total_visits,
        unique_bots=len(bots),
        bots=tuple(BotSummary.from_aggregate(bot) for bot in bots),
        errors=tuple(ErrorSummary.from_aggregate(error) for error in errors),
        detailed_analysis=DetailedAnalysis(
            step1=_identification(aggregator),
            step2=_volume(aggregator),
            step3=_top_urls(aggregator),
            step4=_crawl_budget(aggregator),
            step5=_status(aggregator),
            step6=_redirects(aggregator),
            step7=_depth(aggregator),
            step8=_response_time(aggregator),
            step9=_time_series(aggregator),
        ),
    )


def _identification(agg: CrawlAggregator) -> IdentificationStep:
    return IdentificationStep(
        total_lines=agg.total_lines,
        bot_lines=agg.total_visits,
        identification_rate=percentage(agg.total_visits, agg.total_lines),
        verified_visits=agg.verified_visits,
        unverified_visits=agg.unverified_visits,
        verification_rate=percentage(agg.verified_visits, agg.total_visits),
    )


def _volume(agg: CrawlAggregator) -> VolumeStep:
    url_requests = sum(entry.count for entry in agg.urls.values())
    unique_urls = len(agg.urls)
    return VolumeStep(
        total_requests=agg.total_visits,
        url_requests=url_requests,
        unique_urls=unique_urls,
        avg_requests_per_url=(
            round(url_requests / unique_urls, 2) if unique_urls else 0.0
        ),
        urls_with_params=sum(1 for entry in agg.urls.values() if entry.has_params),
    )


def _top_urls(agg: CrawlAggregator) -> TopUrlsStep:
    ranked = sorted(agg.urls.values(), key=lambda entry: -entry.count)
    return TopUrlsStep(
        top_urls=tuple(
            UrlSummary.from_aggregate(entry)
            for entry in ranked[: agg.settings.top_urls_limit]
        )
    )


def _crawl_budget(agg: CrawlAggregator) -> CrawlBudgetStep:
    total = sum(agg.crawl_budget.values())
    return CrawlBudgetStep(
        buckets={name: agg.crawl_budget[name] for name in CRAWL_BUDGET_BUCKETS},
        total_classified=total,
        percentages={
            name: percentage(agg.crawl_budget[name], total)
            for name in CRAWL_BUDGET_BUCKETS
        },
    )


def _status(agg: CrawlAggregator) -> StatusStep:
    total = sum(agg.status_distribution.values())
    return StatusStep(
        buckets={name: agg.status_distribution[name] for name in STATUS_BUCKETS},
        total_with_status=total,
        percentages={
            name: percentage(agg.status_distribution[name], total)
            for name in STATUS_BUCKETS
        },
    )


def _redirects(agg: CrawlAggregator) -> RedirectStep:
    return RedirectStep(
        total_redirects=agg.total_redirects,
        redirect_types=dict(agg.redirect_types),
        redirect_rate=percentage(agg.total_redirects, agg.total_visits),
    )


def _depth(agg: CrawlAggregator) -> DepthStep:
    url_requests = sum(entry.count for entry in agg.urls.values())
    weighted = sum(entry.depth * entry.count for entry in agg.urls.values())
    return DepthStep(
        distribution=dict(agg.depth_distribution),
        average_depth=round(weighted / url_requests, 2) if url_requests else 0.0,
    )


def _response_time(agg: CrawlAggregator) -> ResponseTimeStep:
    stats = agg.response_times
    mean = stats.mean
    return ResponseTimeStep(
        timing_data_available=stats.count > 0,
        average_response_time=round(mean, 2) if mean is not None else None,
        max_response_time=stats.maximum,
        samples=stats.count,
    )


def _time_series(agg: CrawlAggregator) -> TimeSeriesStep:
    hourly = tuple(agg.hourly)
    peak_hour = None
    if any(hourly):
        peak_hour = max(range(24), key=lambda hour: (hourly[hour], -hour))
    return TimeSeriesStep(
        hourly=hourly,
        daily={day: agg.daily[day] for day in sorted(agg.daily)},
        peak_hour=peak_hour,
    )
