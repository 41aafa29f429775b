"""
Crawl log analyzer.

Finds search-engine crawler visits in raw web-server access logs and builds a
crawl-budget, status, depth, redirect, timing and time-of-day report.
"""

from .analysis import (
    AnalysisError,
    AnalysisResult,
    LogAnalysis,
    analyze_logs,
    analyze_logs_async,
)
from .config import AnalyzerSettings, get_settings

__version__ = "0.1.0"

__all__ = [
    "AnalysisError",
    "AnalysisResult",
    "AnalyzerSettings",
    "LogAnalysis",
    "analyze_logs",
    "analyze_logs_async",
    "get_settings",
]
