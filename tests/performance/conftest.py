"""
Pytest configuration and fixtures for performance tests.

Provides fixtures for generating large synthetic access logs.
"""

import gzip
import random
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

USER_AGENTS = [
    "Mozilla/5.0 (compatible; Googlebot/2.1; +http://www.google.com/bot.html)",
    "Googlebot-Image/1.0",
    "Mozilla/5.0 (Linux; Android 6.0.1; Nexus 5X) Chrome/120.0 Mobile Safari/537.36 "
    "(compatible; Googlebot/2.1; +http://www.google.com/bot.html)",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) Chrome/120.0 Safari/537.36",
    "Mozilla/5.0 (compatible; bingbot/2.0; +http://www.bing.com/bingbot.htm)",
]
PATHS = [
    "/",
    "/blog/post-{i}",
    "/products/{i}?color=red",
    "/category/shoes/page/{i}",
    "/wp-admin/admin-ajax.php",
    "/missing-{i}",
]
STATUSES = [200, 200, 200, 200, 301, 302, 404, 500]


@pytest.fixture
def log_text_generator():
    """Factory fixture for generating combined-format log blobs."""

    def _generate(num_lines: int, seed: int = 42) -> str:
        """Generate a log blob with the specified number of lines."""
        rng = random.Random(seed)
        base_time = datetime(2023, 10, 10, tzinfo=timezone.utc)

        lines = []
        for i in range(num_lines):
            timestamp = (base_time + timedelta(seconds=i * 7)).strftime(
                "%d/%b/%Y:%H:%M:%S +0000"
            )
            path = rng.choice(PATHS).format(i=i % 5000)
            lines.append(
                f'66.249.{(i // 256) % 256}.{i % 256} - - [{timestamp}] '
                f'"GET {path} HTTP/1.1" {rng.choice(STATUSES)} {rng.randint(100, 10000)} '
                f'"-" "{rng.choice(USER_AGENTS)}"'
            )
        return "\n".join(lines)

    return _generate


@pytest.fixture
def log_file_generator(tmp_path: Path, log_text_generator):
    """Factory fixture for writing generated logs to disk."""

    def _generate(num_lines: int, compressed: bool = False) -> Path:
        text = log_text_generator(num_lines)
        if compressed:
            path = tmp_path / f"access-{num_lines}.log.gz"
            with gzip.open(path, "wt", encoding="utf-8") as f:
                f.write(text)
        else:
            path = tmp_path / f"access-{num_lines}.log"
            path.write_text(text, encoding="utf-8")
        return path

    return _generate
