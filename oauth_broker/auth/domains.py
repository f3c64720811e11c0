"""
Calling-domain allow-list.

ALLOWED_DOMAINS is a comma-separated list of exact domains or patterns
with a single `*` wildcard, e.g. `www.example.com, *.example.org`.
"""
import logging
import re
from functools import lru_cache
from typing import Optional

logger = logging.getLogger(__name__)


@lru_cache(maxsize=256)
def compile_domain_pattern(entry: str) -> "re.Pattern[str]":
    """
    Compile one allow-list entry.

    Everything is literal except the first `*`, which matches one or
    more characters. Any further `*` stays literal.
    """
    return re.compile(re.escape(entry).replace(r"\*", ".+", 1))


def is_domain_allowed(domain: Optional[str], allowed_domains: Optional[str]) -> bool:
    """
    Check a request-supplied domain against the allow-list.

    Args:
        domain: Domain sent by the client (may be None or empty)
        allowed_domains: Raw comma-separated allow-list

    Returns:
        True if no allow-list is configured or any entry fully matches
    """
    if not allowed_domains:
        return True

    if not domain:
        return False

    for entry in allowed_domains.split(","):
        entry = entry.strip()
        if not entry:
            continue
        if compile_domain_pattern(entry).fullmatch(domain):
            return True

    logger.debug(f"Domain {domain!r} does not match any allowed pattern")
    return False
