"""Report export module."""

from .export import (
    FRAME_NAMES,
    export_to_csv,
    export_to_excel,
    export_to_json,
    report_to_frames,
)

__all__ = [
    "FRAME_NAMES",
    "export_to_csv",
    "export_to_excel",
    "export_to_json",
    "report_to_frames",
]
