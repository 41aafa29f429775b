"""
Tabular export of crawl analysis reports.

Flattens an AnalysisResult into pandas DataFrames and writes them as JSON,
a directory of CSV files, or an Excel workbook with one sheet per table.
"""

import json
import logging
from pathlib import Path

import pandas as pd
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE

from ..analysis.report import AnalysisResult

logger = logging.getLogger(__name__)

# Sheet / file names, in output order
FRAME_NAMES = (
    "bots",
    "errors",
    "top_urls",
    "crawl_budget",
    "status_distribution",
    "hourly",
    "daily",
)


def report_to_frames(result: AnalysisResult) -> dict[str, pd.DataFrame]:
    """
    Flatten a report into one DataFrame per table.

    Args:
        result: Finished analysis

    Returns:
        Mapping of table name to DataFrame, keys as in FRAME_NAMES
    """
    detailed = result.detailed_analysis

    bots = pd.DataFrame(
        [
            {
                "bot_name": bot.bot_name,
                "user_agent": bot.user_agent,
                "count": bot.count,
                "error_count": sum(error.count for error in bot.errors),
            }
            for bot in result.bots
        ],
        columns=["bot_name", "user_agent", "count", "error_count"],
    )

    errors = pd.DataFrame(
        [
            {
                "status_code": error.status_code,
                "bot_name": error.bot_name,
                "count": error.count,
                "url": error.url,
            }
            for error in result.errors
        ],
        columns=["status_code", "bot_name", "count", "url"],
    )

    top_urls = pd.DataFrame(
        [
            {
                "url": entry.url,
                "count": entry.count,
                "depth": entry.depth,
                "has_params": entry.has_params,
                "status_codes": ", ".join(
                    f"{code}:{count}" for code, count in sorted(entry.status_codes.items())
                ),
            }
            for entry in detailed.step3.top_urls
        ],
        columns=["url", "count", "depth", "has_params", "status_codes"],
    )

    crawl_budget = pd.DataFrame(
        {
            "bucket": list(detailed.step4.buckets),
            "count": list(detailed.step4.buckets.values()),
            "percentage": [detailed.step4.percentages[b] for b in detailed.step4.buckets],
        }
    )

    status_distribution = pd.DataFrame(
        {
            "bucket": list(detailed.step5.buckets),
            "count": list(detailed.step5.buckets.values()),
            "percentage": [detailed.step5.percentages[b] for b in detailed.step5.buckets],
        }
    )

    hourly = pd.DataFrame(
        {"hour": list(range(24)), "visits": list(detailed.step9.hourly)}
    )

    daily = pd.DataFrame(
        {
            "day": list(detailed.step9.daily),
            "visits": list(detailed.step9.daily.values()),
        },
        columns=["day", "visits"],
    )

    return {
        "bots": bots,
        "errors": errors,
        "top_urls": top_urls,
        "crawl_budget": crawl_budget,
        "status_distribution": status_distribution,
        "hourly": hourly,
        "daily": daily,
    }


def export_to_json(result: AnalysisResult, output_path: Path) -> Path:
    """Write the full report contract as JSON."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(result.to_dict(), f, ensure_ascii=False, indent=2)
    logger.info(f"Exported report to {output_path}")
    return output_path


def export_to_csv(result: AnalysisResult, output_dir: Path) -> list[Path]:
    """
    Write one CSV file per table into a directory.

    Returns:
        Paths of the written files
    """
    output_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for name, df in report_to_frames(result).items():
        path = output_dir / f"{name}.csv"
        df.to_csv(path, index=False)
        written.append(path)

    logger.info(f"Exported {len(written)} CSV tables to {output_dir}")
    return written


def _strip_illegal_characters(df: pd.DataFrame) -> pd.DataFrame:
    """Remove control characters openpyxl refuses to write from text columns."""
    df = df.copy()
    for column in df.select_dtypes(include="object").columns:
        df[column] = df[column].map(
            lambda value: ILLEGAL_CHARACTERS_RE.sub("", value)
            if isinstance(value, str)
            else value
        )
    return df


def export_to_excel(result: AnalysisResult, output_path: Path) -> Path:
    """
    Write an Excel workbook with one sheet per table.

    Empty tables are skipped, except bots which is always written.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    frames = report_to_frames(result)

    with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
        for name, df in frames.items():
            if df.empty and name != "bots":
                continue
            _strip_illegal_characters(df).to_excel(
                writer, sheet_name=name, index=False
            )

        # Adjust column widths for better readability
        for sheet_name in writer.sheets:
            worksheet = writer.sheets[sheet_name]
            for column_cells in worksheet.columns:
                col_letter = column_cells[0].column_letter
                header = column_cells[0].value

                if header in ("url", "user_agent"):
                    worksheet.column_dimensions[col_letter].width = 80
                else:
                    worksheet.column_dimensions[col_letter].width = max(
                        len(str(header)) + 2, 12
                    )

    logger.info(f"Exported report workbook to {output_path}")
    return output_path
