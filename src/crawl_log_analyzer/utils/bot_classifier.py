"""
Crawler identification from raw access-log lines.

Identifies search-engine crawler visits in log lines of any format, resolves
the most specific crawler variant and applies the IP/rDNS verification
heuristic.
"""

import re
from dataclasses import dataclass
from typing import Optional

from ..config.constants import (
    GOOGLE_FAMILY_PATTERNS,
    GOOGLE_GENERIC_NAME,
    GOOGLE_REFERER_PATTERNS,
    GOOGLE_VARIANTS,
    REFERER_BOT_NAME,
    USER_AGENT_LENGTH,
    VERIFICATION_HOSTNAMES,
    VERIFICATION_IP_PREFIXES,
)


@dataclass(frozen=True)
class BotMatch:
    """Result of crawler identification for one line."""

    bot_name: str
    user_agent: str
    verified: bool

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "bot_name": self.bot_name,
            "user_agent": self.user_agent,
            "verified": self.verified,
        }


@dataclass(frozen=True)
class BotFamily:
    """
    A crawler family with its prioritized variant table.

    Attributes:
        family_patterns: Any of these found in a line selects the family
        variants: (pattern, canonical name) pairs, most specific first
        generic_name: Name used when no variant matches the user agent
    """

    family_patterns: tuple[re.Pattern, ...]
    variants: tuple[tuple[re.Pattern, str], ...]
    generic_name: str

    @classmethod
    def compile(
        cls,
        family_patterns: tuple[str, ...],
        variants: tuple[tuple[str, str], ...],
        generic_name: str,
    ) -> "BotFamily":
        """Build a family from raw pattern strings (case-insensitive)."""
        return cls(
            family_patterns=tuple(re.compile(p, re.IGNORECASE) for p in family_patterns),
            variants=tuple(
                (re.compile(p, re.IGNORECASE), name) for p, name in variants
            ),
            generic_name=generic_name,
        )

    def matches(self, line: str) -> bool:
        """Check whether any family pattern occurs in the line."""
        return any(pattern.search(line) for pattern in self.family_patterns)

    def resolve_variant(self, user_agent: str) -> str:
        """Return the most specific variant name for a user agent."""
        for pattern, name in self.variants:
            if pattern.search(user_agent):
                return name
        return self.generic_name


GOOGLE_FAMILY = BotFamily.compile(
    GOOGLE_FAMILY_PATTERNS, GOOGLE_VARIANTS, GOOGLE_GENERIC_NAME
)

# Ordered (pattern, group) rules for pulling the user agent out of a line
_USER_AGENT_RULES: tuple[re.Pattern, ...] = (
    re.compile(r"[\"']([^\"']*Google[^\"']*)[\"']", re.IGNORECASE),
    re.compile(r"User-Agent[:\s]+([^\s]+)", re.IGNORECASE),
    re.compile(r"(Google[^\s]+)", re.IGNORECASE),
)

_REFERER_PATTERNS: tuple[re.Pattern, ...] = tuple(
    re.compile(p, re.IGNORECASE) for p in GOOGLE_REFERER_PATTERNS
)
_REFERER_USER_AGENT_RULES: tuple[re.Pattern, ...] = (
    re.compile(r"User-Agent[:\s]+([^\s]+)", re.IGNORECASE),
    re.compile(r"[\"']([^\"']*User-Agent[^\"']*)[\"']", re.IGNORECASE),
)
_REFERER_URL = re.compile(r"(https?://[^\s\"']*google[^\s\"']*)", re.IGNORECASE)


def extract_user_agent(line: str, default: str) -> str:
    """
    Pull the crawler user-agent substring out of a log line.

    Args:
        line: Raw log line
        default: Value returned when no rule matches

    Returns:
        First user-agent candidate found, or default

    Examples:
        >>> extract_user_agent('1.2.3.4 "GET / HTTP/1.1" 200 "Googlebot/2.1"', "x")
        'Googlebot/2.1'
    """
    for rule in _USER_AGENT_RULES:
        match = rule.search(line)
        if match:
            return match.group(1)
    return default


def is_verified_crawler(
    line: str,
    ip_prefixes: tuple[str, ...] = VERIFICATION_IP_PREFIXES,
    hostnames: tuple[str, ...] = VERIFICATION_HOSTNAMES,
) -> bool:
    """
    Check the line for a known crawler IP prefix or reverse-DNS hostname.

    This is a plain substring test over the whole line.
    """
    return any(prefix in line for prefix in ip_prefixes) or any(
        host in line for host in hostnames
    )


class BotSignatureMatcher:
    """
    Matches log lines against an ordered table of crawler families.

    Resolution is generic-then-specific: a family is selected by any of its
    patterns, then the extracted user agent is resolved against the family's
    variant table.

    Usage:
        matcher = BotSignatureMatcher()
        match = matcher.match(line)
        if match:
            print(match.bot_name, match.verified)
    """

    def __init__(
        self,
        families: Optional[tuple[BotFamily, ...]] = None,
        ip_prefixes: tuple[str, ...] = VERIFICATION_IP_PREFIXES,
        hostnames: tuple[str, ...] = VERIFICATION_HOSTNAMES,
        detect_referer_visits: bool = False,
        user_agent_length: int = USER_AGENT_LENGTH,
    ):
        """
        Initialize the matcher.

        Args:
            families: Ordered crawler families (default: Google only)
            ip_prefixes: IP prefix substrings for the verification heuristic
            hostnames: Reverse-DNS substrings for the verification heuristic
            detect_referer_visits: Also match lines carrying a Google referer
            user_agent_length: Maximum length of the stored user agent
        """
        self.families = families if families is not None else (GOOGLE_FAMILY,)
        self.ip_prefixes = ip_prefixes
        self.hostnames = hostnames
        self.detect_referer_visits = detect_referer_visits
        self.user_agent_length = user_agent_length

    def match(self, line: str) -> Optional[BotMatch]:
        """
        Identify the crawler in a log line.

        Args:
            line: Raw log line

        Returns:
            BotMatch for the first matching family, or None
        """
        if not line:
            return None

        for family in self.families:
            if family.matches(line):
                user_agent = extract_user_agent(line, family.generic_name)
                return BotMatch(
                    bot_name=family.resolve_variant(user_agent),
                    user_agent=user_agent[: self.user_agent_length],
                    verified=self._is_verified(line),
                )

        if self.detect_referer_visits:
            return self._match_referer(line)

        return None

    def _match_referer(self, line: str) -> Optional[BotMatch]:
        """Match a line by its Google referer."""
        if not any(pattern.search(line) for pattern in _REFERER_PATTERNS):
            return None

        for rule in _REFERER_USER_AGENT_RULES:
            match = rule.search(line)
            if match:
                user_agent = match.group(1)
                break
        else:
            referer = _REFERER_URL.search(line)
            user_agent = f"Referer: {referer.group(1)}" if referer else "Google Referer"

        return BotMatch(
            bot_name=REFERER_BOT_NAME,
            user_agent=user_agent[: self.user_agent_length],
            verified=self._is_verified(line),
        )

    def _is_verified(self, line: str) -> bool:
        return is_verified_crawler(line, self.ip_prefixes, self.hostnames)


def classify_bot(line: Optional[str]) -> Optional[BotMatch]:
    """
    Identify a crawler in a log line with the default signature table.

    Args:
        line: Raw log line

    Returns:
        BotMatch with bot_name, user_agent and verified flag,
        or None if no crawler is identified

    Examples:
        >>> classify_bot('66.249.66.1 "GET / HTTP/1.1" 200 "Googlebot-Image/1.0"').bot_name
        'Googlebot Image'

        >>> classify_bot("Mozilla/5.0 (Windows NT 10.0) Chrome/120") is None
        True
    """
    if not line:
        return None
    return _DEFAULT_MATCHER.match(line)


def get_variant_names(family: BotFamily = GOOGLE_FAMILY) -> list[str]:
    """Get the canonical variant names of a family, most specific first."""
    return [name for _, name in family.variants]


_DEFAULT_MATCHER = BotSignatureMatcher()
