"""
Progress reporting for long synchronous scans.

Progress values are advisory: they rise to at most 95 while lines are being
processed and jump to 100 once the report is built.
"""

import logging
from typing import Callable, Optional

from ..config.constants import (
    PROGRESS_CAP,
    PROGRESS_COMPLETE,
    PROGRESS_INTERVAL,
    PROGRESS_SCALE,
)

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]


def progress_percent(processed: int, total: int) -> int:
    """
    Percentage shown while scanning: floor(min(95, 90 * processed / total)).

    Examples:
        >>> progress_percent(100, 1000)
        9
        >>> progress_percent(1000, 1000)
        90
        >>> progress_percent(0, 0)
        0
    """
    if total <= 0:
        return 0
    return int(min(PROGRESS_CAP, PROGRESS_SCALE * processed / total))


class ProgressReporter:
    """
    Emits a progress tick every ``interval`` processed lines.

    The reporter only computes and delivers values; the scan decides where
    to yield to its host after a tick.
    """

    def __init__(
        self,
        total: int,
        callback: Optional[ProgressCallback] = None,
        interval: int = PROGRESS_INTERVAL,
    ):
        """
        Initialize the reporter.

        Args:
            total: Number of lines the scan will process
            callback: Receives each progress value (optional)
            interval: Lines between ticks
        """
        self.total = total
        self.callback = callback
        self.interval = interval
        self.last_value: Optional[int] = None

    def tick(self, processed: int) -> Optional[int]:
        """
        Report progress after ``processed`` lines.

        Returns:
            The emitted value, or None if no tick is due
        """
        if processed == 0 or processed % self.interval:
            return None
        return self._emit(progress_percent(processed, self.total))

    def complete(self) -> int:
        """Emit the final 100% tick."""
        return self._emit(PROGRESS_COMPLETE)

    def _emit(self, value: int) -> int:
        self.last_value = value
        logger.debug(f"Scan progress: {value}%")
        if self.callback is not None:
            self.callback(value)
        return value
