"""
HTTP utility functions.

Helpers for bucketing HTTP status codes found in access logs.
"""

from typing import Optional

from ..config.constants import REDIRECT_STATUS_CODES, TRACKED_STATUS_CODES


def get_status_bucket(status_code: int) -> str:
    """
    Map a status code onto the fixed status distribution buckets.

    Buckets: status200, status301, status302, status308, status404,
    status410, status403, status401, status5xx, statusOther.

    Examples:
        >>> get_status_bucket(404)
        'status404'
        >>> get_status_bucket(503)
        'status5xx'
        >>> get_status_bucket(204)
        'statusOther'
    """
    if status_code in TRACKED_STATUS_CODES:
        return f"status{status_code}"
    if 500 <= status_code < 600:
        return "status5xx"
    return "statusOther"


def is_error_status(status_code: Optional[int]) -> bool:
    """
    Check if status code indicates an error (4xx or 5xx).

    Args:
        status_code: HTTP status code

    Returns:
        True if status is in the 400-599 range
    """
    return status_code is not None and 400 <= status_code < 600


def is_redirect_status(status_code: Optional[int]) -> bool:
    """Check if status code is one of the tracked redirects (301, 302, 308)."""
    return status_code in REDIRECT_STATUS_CODES
