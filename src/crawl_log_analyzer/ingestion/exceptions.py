"""
Custom exceptions for reading log files ahead of an analysis.
"""


class IngestionError(Exception):
    """
    Base exception for all log-reading errors.

    Raised before a scan starts; the analysis itself never sees these.
    """

    pass


class TooManyFilesError(IngestionError):
    """
    Raised when more log files are supplied than the configured limit.

    Attributes:
        file_count: Number of files supplied
        max_files: Configured maximum
    """

    def __init__(self, file_count: int, max_files: int):
        self.file_count = file_count
        self.max_files = max_files
        super().__init__(
            f"Too many log files: {file_count} supplied, at most {max_files} allowed"
        )


class NoLogFilesError(IngestionError):
    """
    Raised when the supplied paths contain no readable log files.

    Attributes:
        paths: The paths that were searched
    """

    def __init__(self, paths: list[str]):
        self.paths = paths
        super().__init__(f"No log files found in: {', '.join(paths) or '(none)'}")
