"""Crawl log analysis engine."""

from .aggregator import (
    BotVisitAggregate,
    CrawlAggregator,
    ErrorAggregate,
    ErrorTally,
    ResponseTimeStats,
    UrlAggregate,
)
from .engine import LogAnalysis, analyze_logs, analyze_logs_async, split_log_lines
from .exceptions import (
    AnalysisError,
    ConfigurationError,
    InvalidInputError,
    ScanError,
)
from .extractors import ExtractedFields, FieldExtractor, Timestamp
from .progress import ProgressReporter, progress_percent
from .report import AnalysisResult, DetailedAnalysis, build_report, percentage

__all__ = [
    # Engine
    "LogAnalysis",
    "analyze_logs",
    "analyze_logs_async",
    "split_log_lines",
    # Extraction
    "ExtractedFields",
    "FieldExtractor",
    "Timestamp",
    # Aggregation
    "BotVisitAggregate",
    "CrawlAggregator",
    "ErrorAggregate",
    "ErrorTally",
    "ResponseTimeStats",
    "UrlAggregate",
    # Progress
    "ProgressReporter",
    "progress_percent",
    # Report
    "AnalysisResult",
    "DetailedAnalysis",
    "build_report",
    "percentage",
    # Exceptions
    "AnalysisError",
    "ConfigurationError",
    "InvalidInputError",
    "ScanError",
]
