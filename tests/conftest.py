"""
Shared fixtures and log line builders for all test suites.
"""

import pytest

GOOGLEBOT_UA = "Mozilla/5.0 (compatible; Googlebot/2.1; +http://www.google.com/bot.html)"
GOOGLEBOT_IMAGE_UA = "Googlebot-Image/1.0"
CHROME_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0 Safari/537.36"
)


def combined_line(
    path: str = "/",
    status: int = 200,
    user_agent: str = GOOGLEBOT_UA,
    ip: str = "66.249.66.1",
    timestamp: str = "10/Oct/2023:13:55:36 +0000",
    size: int = 512,
    method: str = "GET",
    referer: str = "-",
    suffix: str = "",
) -> str:
    """Build an Apache/Nginx combined-format access log line."""
    line = (
        f'{ip} - - [{timestamp}] "{method} {path} HTTP/1.1" {status} {size} '
        f'"{referer}" "{user_agent}"'
    )
    if suffix:
        line += f" {suffix}"
    return line


@pytest.fixture
def make_line():
    """Factory fixture for combined-format log lines."""
    return combined_line


@pytest.fixture
def googlebot_line() -> str:
    """A verified Googlebot request for a canonical page."""
    return combined_line(path="/blog/crawl-budget-guide")


@pytest.fixture
def image_bot_404_line() -> str:
    """A Googlebot-Image request that hit a missing page."""
    return combined_line(
        path="/missing",
        status=404,
        user_agent=GOOGLEBOT_IMAGE_UA,
        ip="203.0.113.9",
        size=0,
    )


@pytest.fixture
def browser_line() -> str:
    """A regular browser request with no crawler signature."""
    return combined_line(path="/home", user_agent=CHROME_UA, ip="198.51.100.7")


@pytest.fixture
def mixed_log(make_line) -> str:
    """A small log with crawler, browser, blank and garbage lines."""
    lines = [
        make_line(path="/", status=200, timestamp="10/Oct/2023:08:00:01 +0000"),
        make_line(path="/products?color=red", status=200),
        make_line(path="/blog/page/2", status=200, timestamp="11/Oct/2023:09:10:00 +0000"),
        make_line(path="/old-page", status=301),
        make_line(path="/wp-admin/admin-ajax.php", status=403),
        make_line(path="/missing", status=404, user_agent=GOOGLEBOT_IMAGE_UA),
        make_line(path="/home", user_agent=CHROME_UA, ip="198.51.100.7"),
        "",
        "   ",
        "\x00\x01\x02 binary \xff\xfe garbage",
        make_line(path="/api/data", status=500, suffix="rt=250"),
    ]
    return "\n".join(lines)
