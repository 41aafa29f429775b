"""
Custom exceptions for crawl log analysis.

Per-line extraction and classification misses are never exceptions; only
failures that invalidate the whole scan are raised.
"""


class AnalysisError(Exception):
    """
    Base exception for scan-level analysis failures.

    Raised once per failed analysis; the caller must treat the invocation
    as having produced no result.
    """

    pass


class InvalidInputError(AnalysisError):
    """
    Raised when the analysis input is not log text.

    Attributes:
        received_type: Name of the type that was passed in
        message: Detailed error message
    """

    def __init__(self, message: str, received_type: str | None = None):
        self.received_type = received_type
        self.message = message
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with the received type."""
        if self.received_type:
            return f"{self.message} (got {self.received_type})"
        return self.message


class ScanError(AnalysisError):
    """
    Raised when an unexpected fault interrupts a scan.

    Attributes:
        line_number: 1-based number of the non-empty line being processed
        line_content: The content of the problematic line (optional)
        message: Detailed error message
    """

    def __init__(
        self,
        message: str,
        line_number: int | None = None,
        line_content: str | None = None,
    ):
        self.line_number = line_number
        self.line_content = line_content
        self.message = message
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with line context."""
        if self.line_number is not None and self.line_content:
            content = (
                self.line_content[:100] + "..."
                if len(self.line_content) > 100
                else self.line_content
            )
            return f"{self.message} (line {self.line_number}: {content!r})"
        elif self.line_number is not None:
            return f"{self.message} (line {self.line_number})"
        return self.message


class ConfigurationError(AnalysisError):
    """
    Raised when analyzer settings fail validation.

    Attributes:
        errors: Validation messages from AnalyzerSettings.validate()
    """

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("Invalid analyzer settings: " + "; ".join(errors))
