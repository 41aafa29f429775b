"""
URL utility functions.

Helpers for normalizing request paths from access logs and assigning them
to crawl-budget buckets.
"""

import re
from typing import Optional

from ..config.constants import (
    BUCKET_CANONICAL,
    BUCKET_NOT_FOUND,
    BUCKET_PAGINATION,
    BUCKET_SERVICE,
    BUCKET_WITH_PARAMS,
    SERVICE_SEGMENTS,
)

_SCHEME_AND_HOST = re.compile(r"^https?://[^/?#\s]*", re.IGNORECASE)

_PAGINATION = re.compile(r"/page/|/p/|/\d+$", re.IGNORECASE)

_SERVICE = re.compile(
    r"/(?:" + "|".join(re.escape(s) for s in SERVICE_SEGMENTS) + r")(?:/|$|\?)",
    re.IGNORECASE,
)


def strip_scheme_and_host(url: str) -> str:
    """
    Remove protocol and host from an absolute URL.

    Examples:
        >>> strip_scheme_and_host("https://example.com/blog/post?a=1")
        '/blog/post?a=1'
        >>> strip_scheme_and_host("https://example.com")
        '/'
        >>> strip_scheme_and_host("/already/a/path")
        '/already/a/path'
    """
    path = _SCHEME_AND_HOST.sub("", url, count=1)
    return path or "/"


def split_query(url: str) -> tuple[str, bool]:
    """
    Split the query string off a path.

    Returns:
        Tuple of (path without query, whether a query string was present)

    Examples:
        >>> split_query("/foo/bar?x=1")
        ('/foo/bar', True)
        >>> split_query("/foo/bar")
        ('/foo/bar', False)
    """
    path, sep, _ = url.partition("?")
    return (path or "/"), bool(sep)


def get_url_depth(path: str) -> int:
    """
    Count non-empty path segments. Root ('/') and '' have depth 0.

    Examples:
        >>> get_url_depth("/foo/bar")
        2
        >>> get_url_depth("/")
        0
        >>> get_url_depth("/a//b/")
        2
    """
    return sum(1 for segment in path.split("/") if segment)


def classify_crawl_budget(url: str, status_code: Optional[int] = None) -> str:
    """
    Assign a URL to exactly one crawl-budget bucket.

    Precedence (first rule wins):
        1. status 404 -> notFound
        2. '?' or '&' in the URL -> withParams
        3. /page/, /p/ or trailing /<digits> -> pagination
        4. admin, api, build-asset or static segment -> service
        5. anything else -> canonical

    Args:
        url: Request path, query string included
        status_code: Extracted HTTP status code, if any

    Returns:
        One of canonical, withParams, pagination, service, notFound

    Examples:
        >>> classify_crawl_budget("/missing", 404)
        'notFound'
        >>> classify_crawl_budget("/foo/bar?x=1", 200)
        'withParams'
        >>> classify_crawl_budget("/blog/page/2")
        'pagination'
        >>> classify_crawl_budget("/wp-admin/admin-ajax.php")
        'service'
        >>> classify_crawl_budget("/about-us")
        'canonical'
    """
    if status_code == 404:
        return BUCKET_NOT_FOUND
    if "?" in url or "&" in url:
        return BUCKET_WITH_PARAMS
    if _PAGINATION.search(url):
        return BUCKET_PAGINATION
    if _SERVICE.search(url):
        return BUCKET_SERVICE
    return BUCKET_CANONICAL
