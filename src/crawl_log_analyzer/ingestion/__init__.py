"""Log file reading ahead of an analysis."""

from .exceptions import IngestionError, NoLogFilesError, TooManyFilesError
from .file_utils import (
    DEFAULT_MAX_FILES,
    collect_log_files,
    open_file_auto_decompress,
    read_log_files,
)

__all__ = [
    "DEFAULT_MAX_FILES",
    "collect_log_files",
    "open_file_auto_decompress",
    "read_log_files",
    "IngestionError",
    "NoLogFilesError",
    "TooManyFilesError",
]
