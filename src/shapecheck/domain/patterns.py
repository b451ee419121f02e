"""Named regular expressions for common string shapes.

The table is read-only shared data. The matcher consults it only to give
pattern violations a friendly name instead of the raw regex source.
"""

from __future__ import annotations

import re
from types import MappingProxyType

PATTERNS: MappingProxyType[str, re.Pattern[str]] = MappingProxyType(
    {
        "uuid": re.compile(r"^[a-f0-9]{8}-([a-f0-9]{4}-){3}[a-f0-9]{12}$"),
        # Alphanumerics separated by single hyphens, no leading or trailing hyphen.
        "slug": re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$", re.IGNORECASE),
        "email": re.compile(
            r"^[a-z0-9_!#$%&'*+/=?`{|}~^.-]+@[a-z0-9.-]+\.[a-z]{2,}$", re.IGNORECASE
        ),
        # e.g. "mastodon:@someone@mastodon.social"
        "social": re.compile(r"^[a-z]{1,10}:.{1,50}$", re.IGNORECASE),
        # ISO 3166-1 alpha-2
        "country_code": re.compile(r"^[a-z]{2}$"),
    }
)


def pattern_name(pattern: re.Pattern[str]) -> str | None:
    """Return the registered name of *pattern*, or None if it is not in the table.

    Examples:
        >>> pattern_name(PATTERNS["uuid"])
        'uuid'
        >>> pattern_name(re.compile("x")) is None
        True
    """
    for name, known in PATTERNS.items():
        if known is pattern or known == pattern:
            return name
    return None
