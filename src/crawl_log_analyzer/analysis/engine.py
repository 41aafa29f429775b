"""
Crawl log scan driver.

Runs the strictly ordered fold over the lines of a log blob:

    line -> BotSignatureMatcher -> FieldExtractor -> CrawlAggregator.update()
         -> progress tick -> ... -> build_report()

LogAnalysis.steps() is a generator that yields each progress value, which is
the cooperative yield point: a host may run its own event or paint loop
between ticks, or stop iterating to cancel. analyze_logs() and
analyze_logs_async() drive it to completion.

Usage:
    result = analyze_logs(text, on_progress=lambda pct: print(pct))
    print(result.to_dict()["totalGoogleVisits"])
"""

import asyncio
import logging
import time
from itertools import islice
from typing import Iterator, Optional

from ..config.settings import AnalyzerSettings
from ..utils.bot_classifier import BotSignatureMatcher
from .aggregator import CrawlAggregator
from .exceptions import ConfigurationError, InvalidInputError, ScanError
from .extractors import FieldExtractor
from .progress import ProgressCallback, ProgressReporter
from .report import AnalysisResult, build_report

logger = logging.getLogger(__name__)


def split_log_lines(text: str) -> list[str]:
    """
    Split a log blob into non-empty lines.

    Examples:
        >>> split_log_lines("a\\n\\n  \\nb\\r\\n")
        ['a', 'b']
    """
    return [line.rstrip("\r") for line in text.split("\n") if line.strip()]


class LogAnalysis:
    """
    One crawl log analysis over a fixed text blob.

    The aggregation state belongs to this instance alone; concurrent
    analyses never share it.
    """

    def __init__(
        self,
        text: str,
        settings: Optional[AnalyzerSettings] = None,
        on_progress: Optional[ProgressCallback] = None,
    ):
        """
        Prepare an analysis.

        Args:
            text: Newline-delimited log text
            settings: Analyzer settings (default: built-in defaults)
            on_progress: Receives progress percentages, ending with 100

        Raises:
            InvalidInputError: If text is not a str
            ConfigurationError: If settings fail validation
        """
        if not isinstance(text, str):
            raise InvalidInputError(
                "Log input must be text", received_type=type(text).__name__
            )

        self.settings = settings or AnalyzerSettings()
        errors = self.settings.validate()
        if errors:
            raise ConfigurationError(errors)

        self.lines = split_log_lines(text)
        self.matcher = BotSignatureMatcher(
            ip_prefixes=self.settings.verification_ip_prefixes,
            hostnames=self.settings.verification_hostnames,
            detect_referer_visits=self.settings.detect_referer_visits,
            user_agent_length=self.settings.user_agent_length,
        )
        self.extractor = FieldExtractor(
            response_time_min=self.settings.response_time_min,
            response_time_max=self.settings.response_time_max,
        )
        self.aggregator = CrawlAggregator(settings=self.settings)
        self.progress = ProgressReporter(
            total=len(self.lines),
            callback=on_progress,
            interval=self.settings.progress_interval,
        )
        self.processed = 0
        self._result: Optional[AnalysisResult] = None

    @property
    def result(self) -> Optional[AnalysisResult]:
        """Final report, or None until steps() has been exhausted."""
        return self._result

    def steps(self) -> Iterator[int]:
        """
        Scan all lines, yielding after every progress tick.

        Yields:
            Progress percentages, non-decreasing, the last one being 100

        Raises:
            ScanError: If an unexpected fault interrupts the scan
        """
        started_at = time.perf_counter()
        logger.info(f"Starting crawl log scan: {len(self.lines):,} lines")

        for line in islice(self.lines, self.processed, None):
            try:
                self._process(line)
            except Exception as e:
                raise ScanError(
                    f"Log scan failed: {e}",
                    line_number=self.processed + 1,
                    line_content=line,
                ) from e
            self.processed += 1

            value = self.progress.tick(self.processed)
            if value is not None:
                yield value

        try:
            self._result = build_report(self.aggregator)
        except Exception as e:
            raise ScanError(f"Report construction failed: {e}") from e

        duration = time.perf_counter() - started_at
        logger.info(
            f"Crawl log scan complete: {self.aggregator.total_visits:,} crawler "
            f"visits in {self.processed:,} lines ({duration:.2f}s)"
        )
        yield self.progress.complete()

    def partial_result(self) -> AnalysisResult:
        """Report over the lines processed so far (e.g. after cancelling)."""
        return build_report(self.aggregator)

    def _process(self, line: str) -> None:
        self.aggregator.observe_line()
        match = self.matcher.match(line)
        if match is None:
            return
        fields = self.extractor.extract(line)
        self.aggregator.update(line, match, fields)


def analyze_logs(
    text: str,
    on_progress: Optional[ProgressCallback] = None,
    settings: Optional[AnalyzerSettings] = None,
) -> AnalysisResult:
    """
    Analyze crawler activity in a log blob synchronously.

    Args:
        text: Newline-delimited log text
        on_progress: Receives progress percentages, ending with 100
        settings: Analyzer settings (default: built-in defaults)

    Returns:
        AnalysisResult

    Raises:
        AnalysisError: If the analysis could not run
    """
    analysis = LogAnalysis(text, settings=settings, on_progress=on_progress)
    for _ in analysis.steps():
        pass
    return analysis.result


async def analyze_logs_async(
    text: str,
    on_progress: Optional[ProgressCallback] = None,
    settings: Optional[AnalyzerSettings] = None,
) -> AnalysisResult:
    """
    Analyze a log blob, yielding to the event loop after every progress tick.

    Aggregation order is identical to analyze_logs(); only scheduling differs.
    """
    analysis = LogAnalysis(text, settings=settings, on_progress=on_progress)
    for _ in analysis.steps():
        await asyncio.sleep(0)
    return analysis.result
