"""
Shared fixtures for integration tests.

Provides:
- A realistic multi-format access log
- Log files on disk (plain and gzip)
- A finished analysis over the sample log
"""

import gzip
from pathlib import Path

import pytest

from crawl_log_analyzer.analysis import analyze_logs

# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================


def generate_site_log(make_line) -> str:
    """
    Build a log mixing crawler variants, browsers and non-combined formats.

    Crawler lines (17):
        Googlebot           11 (verified)
        Googlebot Image      3 (unverified, two 404s)
        Googlebot News       1 (ISO format, rt=120)
        AdsBot Google        2 (one 500)
    """
    lines = [
        # Googlebot, canonical pages across two days
        make_line(path="/", timestamp="10/Oct/2023:08:00:01 +0000"),
        make_line(path="/about-us", timestamp="10/Oct/2023:08:10:00 +0000"),
        make_line(path="/blog/crawl-budget-guide", timestamp="10/Oct/2023:09:00:00 +0000"),
        make_line(path="/blog/crawl-budget-guide", timestamp="11/Oct/2023:09:30:00 +0000"),
        make_line(path="/products/shoes?color=red", timestamp="11/Oct/2023:09:45:00 +0000"),
        make_line(path="/products/shoes?color=blue&size=9", timestamp="11/Oct/2023:10:00:00 +0000"),
        make_line(path="/blog/page/2", timestamp="11/Oct/2023:10:05:00 +0000"),
        make_line(path="/old-page", status=301, timestamp="11/Oct/2023:10:10:00 +0000"),
        make_line(path="/moved", status=302, timestamp="11/Oct/2023:10:20:00 +0000"),
        make_line(path="/wp-admin/admin-ajax.php", status=403, timestamp="11/Oct/2023:23:59:59 +0000"),
        make_line(path="/a/b/c/d/e/f", timestamp="11/Oct/2023:09:00:00 +0000"),
        # Googlebot Image, unverified IP
        make_line(path="/missing.png", status=404, user_agent="Googlebot-Image/1.0", ip="203.0.113.9"),
        make_line(path="/missing.png", status=404, user_agent="Googlebot-Image/1.0", ip="203.0.113.9"),
        make_line(path="/images/logo.png", user_agent="Googlebot-Image/1.0", ip="203.0.113.9"),
        # Space-delimited application log
        "2023-10-11 09:15:00 GET /news/latest 200 User-Agent: Googlebot-News rt=120",
        # AdsBot
        make_line(path="/landing", user_agent="AdsBot-Google (+http://www.google.com/adsbot.html)"),
        make_line(path="/api/cart", status=500, user_agent="AdsBot-Google (+http://www.google.com/adsbot.html)"),
        # Noise
        make_line(path="/home", user_agent="Mozilla/5.0 (X11; Linux x86_64) Chrome/120.0", ip="198.51.100.7"),
        make_line(path="/search?q=x", user_agent="curl/8.0.1", ip="198.51.100.8"),
        "",
        "\x00\x01 binary garbage \x7f",
        "   ",
    ]
    return "\n".join(lines)


@pytest.fixture
def site_log(make_line) -> str:
    """A realistic access log (17 crawler lines, 20 non-empty lines)."""
    return generate_site_log(make_line)


@pytest.fixture
def site_result(site_log):
    """Finished analysis over the sample log."""
    return analyze_logs(site_log)


@pytest.fixture
def log_dir(tmp_path: Path, site_log: str) -> Path:
    """Directory with the sample log split into a plain and a gzip file."""
    lines = site_log.split("\n")
    half = len(lines) // 2

    directory = tmp_path / "logs"
    directory.mkdir()
    (directory / "access.log").write_text("\n".join(lines[:half]), encoding="utf-8")
    with gzip.open(directory / "access.log.2.gz", "wt", encoding="utf-8") as f:
        f.write("\n".join(lines[half:]) + "\n")
    return directory
