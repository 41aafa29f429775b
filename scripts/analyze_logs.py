#!/usr/bin/env python3
"""
Analyze Google crawler activity in web-server access logs.

Reads plain or gzip-compressed log files (or directories of them), runs the
crawl log analysis and prints a summary. Optionally exports the report.

Usage:
    # Summary for a single file
    python scripts/analyze_logs.py data/access.log

    # Several files, JSON export
    python scripts/analyze_logs.py data/access.log data/access.log.2.gz \
        --output data/reports/crawl.json

    # Directory of logs, Excel workbook
    python scripts/analyze_logs.py data/logs/ --output data/reports/crawl.xlsx

    # CSV tables into a directory
    python scripts/analyze_logs.py data/logs/ --output data/reports/crawl/ --format csv
"""

import argparse
import logging
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from crawl_log_analyzer.analysis import AnalysisError, AnalysisResult, analyze_logs
from crawl_log_analyzer.config import get_settings
from crawl_log_analyzer.ingestion import (
    DEFAULT_MAX_FILES,
    IngestionError,
    read_log_files,
)
from crawl_log_analyzer.reporting import export_to_csv, export_to_excel, export_to_json
from crawl_log_analyzer.utils import setup_logging

logger = logging.getLogger(__name__)


def print_summary(result: AnalysisResult) -> None:
    """Print a human-readable summary of the report."""
    detailed = result.detailed_analysis

    print("\n" + "=" * 60)
    print("GOOGLE CRAWLER ACTIVITY")
    print("=" * 60)
    print(f"Lines scanned:        {detailed.step1.total_lines:,}")
    print(f"Crawler visits:       {result.total_visits:,}")
    print(f"Identification rate:  {detailed.step1.identification_rate}%")
    print(f"Verified visits:      {detailed.step1.verified_visits:,}")
    print(f"Unique bots:          {result.unique_bots}")
    print(f"Unique URLs:          {detailed.step2.unique_urls:,}")

    if result.bots:
        print("\nBots:")
        for bot in result.bots:
            print(f"  {bot.bot_name:<30} {bot.count:>8,}")

    print("\nCrawl budget:")
    for bucket, count in detailed.step4.buckets.items():
        print(f"  {bucket:<12} {count:>8,}  ({detailed.step4.percentages[bucket]}%)")

    if result.errors:
        print("\nErrors:")
        for error in result.errors:
            print(
                f"  {error.status_code}  {error.bot_name:<30} {error.count:>8,}  "
                f"{error.url or ''}"
            )

    timing = detailed.step8
    if timing.timing_data_available:
        print(
            f"\nResponse time: avg {timing.average_response_time}, "
            f"max {timing.max_response_time} ({timing.samples:,} samples)"
        )
    else:
        print("\nResponse time: unavailable")

    if detailed.step9.peak_hour is not None:
        print(f"Peak crawl hour: {detailed.step9.peak_hour:02d}:00")
    print()


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Analyze Google crawler activity in access logs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/analyze_logs.py data/access.log
  python scripts/analyze_logs.py data/logs/ --output data/reports/crawl.xlsx
  python scripts/analyze_logs.py data/logs/ --output data/reports/crawl/ --format csv
        """,
    )

    parser.add_argument(
        "paths",
        nargs="+",
        type=Path,
        help="Log files or directories (plain or .gz)",
    )
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        help="Export path (.json, .xlsx, or a directory with --format csv)",
    )
    parser.add_argument(
        "--format",
        "-f",
        choices=["json", "csv", "xlsx"],
        default=None,
        help="Export format (auto-detected from output extension if not specified)",
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Path to YAML config file (default: crawl-analyzer.yaml)",
    )
    parser.add_argument(
        "--max-files",
        type=int,
        default=DEFAULT_MAX_FILES,
        help=f"Maximum number of log files (default: {DEFAULT_MAX_FILES})",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()

    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO)

    output_format = args.format
    if args.output and output_format is None:
        suffix = args.output.suffix.lower()
        if suffix == ".json":
            output_format = "json"
        elif suffix in (".xlsx", ".xls"):
            output_format = "xlsx"
        elif suffix == "":
            output_format = "csv"
        else:
            parser.error(
                f"Cannot determine format from extension '{suffix}'. "
                "Use --format to specify json, csv or xlsx"
            )

    try:
        text = read_log_files(args.paths, max_files=args.max_files)
    except (IngestionError, FileNotFoundError) as e:
        logger.error(f"Failed to read logs: {e}")
        return 1

    try:
        settings = get_settings(args.config)
    except (ValueError, TypeError) as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    try:
        result = analyze_logs(text, settings=settings)
    except AnalysisError as e:
        logger.error(f"Analysis failed: {e}")
        return 1

    print_summary(result)

    if args.output:
        if output_format == "json":
            export_to_json(result, args.output)
        elif output_format == "xlsx":
            export_to_excel(result, args.output)
        else:
            export_to_csv(result, args.output)
        print(f"✅ Report exported to {args.output}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
