"""
IP literal extraction

Turns a single forwarding-header token into a validated IP address string.
"""

import ipaddress
from typing import Optional


def is_ip(value) -> bool:
    """Return True if value is a syntactically valid IPv4 or IPv6 literal."""
    if not isinstance(value, str) or not value:
        return False
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True


def extract_ip(token: str) -> Optional[str]:
    """
    Extract an IP literal from a single header token.

    Handles bracketed IPv6 (``[2001:db8::1]`` and ``[2001:db8::1]:4561``) and
    IPv4 with a port (``203.0.113.7:4561``). Bare IPv6 literals have more than
    one colon and are passed through unchanged.

    Args:
        token: Trimmed token with list/attribute syntax already removed

    Returns:
        The IP literal, or None if the token does not hold one

    Example:
        >>> extract_ip("[2001:db8::1428:57ab]:4561")
        '2001:db8::1428:57ab'
        >>> extract_ip("123.34.56.78:4561")
        '123.34.56.78'
        >>> extract_ip("example.com") is None
        True
    """
    candidate = token
    if candidate.startswith("["):
        end = candidate.find("]")
        if end == -1:
            return None
        candidate = candidate[1:end]
    elif ":" in candidate:
        parts = candidate.split(":")
        # ip:port only; anything with more colons is left for IPv6 parsing
        if len(parts) == 2:
            candidate = parts[0]
    return candidate if is_ip(candidate) else None
