"""
Header Parsers

One parser per forwarding-header family. A parser takes the raw (first
occurrence) header value plus the header's constraint set and returns an IP
literal or None.

Built-in families:
- BareLiteralParser: the value is the address (``x-real-ip: 203.0.113.7``)
- FirstSegmentParser: comma list, first entry wins (``forwarded-for: a, b``)
- ForwardedParser: RFC 7239 ``for=...;proto=...`` attributes, optionally
  gated on extra attributes such as a shared ``secret``

Any callable ``(raw_value, constraints) -> Optional[str]`` can be registered in
place of a parser instance.

Example:
    from clientip import ClientIPConfig, FirstSegmentParser

    config = ClientIPConfig(
        header_validators={"x-forwarded-for": FirstSegmentParser()},
    )
"""

from typing import Any, Callable, List, Mapping, NamedTuple, Optional

from .extract import extract_ip, is_ip

HeaderValidator = Callable[[str, Mapping[str, Any]], Optional[str]]


class ForwardedEntry(NamedTuple):
    """One ``key=value`` pair from a structured forwarding header"""
    key: str
    value: str


class HeaderParser:
    """
    Base class for header parsing strategies.

    Instances are callable so they can sit in a validator registry next to
    plain functions.
    """

    def parse(self, raw: str, constraints: Optional[Mapping[str, Any]] = None) -> Optional[str]:
        raise NotImplementedError

    def __call__(self, raw: str, constraints: Optional[Mapping[str, Any]] = None) -> Optional[str]:
        return self.parse(raw, constraints)

    def __repr__(self):
        return f"{self.__class__.__name__}()"


class BareLiteralParser(HeaderParser):
    """The whole header value must be an IP literal; ports are not stripped."""

    def parse(self, raw, constraints=None):
        return raw if is_ip(raw) else None


class FirstSegmentParser(HeaderParser):
    """Comma-separated address list; the left-most entry is the client."""

    def parse(self, raw, constraints=None):
        return get_client_ip_from_x_forwarded_for(raw)


class ForwardedParser(HeaderParser):
    """RFC 7239 ``Forwarded`` header with optional attribute constraints."""

    def parse(self, raw, constraints=None):
        return get_client_ip_from_forwarded(raw, constraints)


def get_client_ip_from_x_forwarded_for(header_value: str, constraints=None) -> Optional[str]:
    """
    Extract the client IP from an ``X-Forwarded-For`` style value.

    Only the first comma-separated segment is considered.

    Example:
        >>> get_client_ip_from_x_forwarded_for("123.34.56.78, 98.123.45.12")
        '123.34.56.78'
    """
    segment = header_value.split(",")[0]
    return extract_ip(segment.strip())


def _unquote(value: str) -> str:
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return value[1:-1]
    return value


def parse_forwarded_entries(header_value: str) -> List[ForwardedEntry]:
    """
    Parse the first element of a ``Forwarded`` header into ordered entries.

    Parts that are not exactly one ``key=value`` pair, or have an empty key,
    are dropped. Keys are lower-cased; values are trimmed and unquoted.

    Example:
        >>> parse_forwarded_entries('For="[2001:db8::1]";proto=https, for=10.0.0.1')
        [ForwardedEntry(key='for', value='[2001:db8::1]'), ForwardedEntry(key='proto', value='https')]
    """
    segment = header_value.split(",")[0]
    entries = []
    for part in segment.split(";"):
        pieces = part.strip().split("=")
        if len(pieces) != 2 or not pieces[0]:
            continue
        key, value = pieces
        entries.append(ForwardedEntry(key.strip().lower(), _unquote(value.strip())))
    return entries


def _find_entry(entries: List[ForwardedEntry], key: str) -> Optional[ForwardedEntry]:
    for entry in entries:
        if entry.key == key:
            return entry
    return None


def get_client_ip_from_forwarded(
    header_value: str,
    constraints: Optional[Mapping[str, Any]] = None,
) -> Optional[str]:
    """
    Extract the client IP from a ``Forwarded`` header.

    Args:
        header_value: Raw header value
        constraints: Attributes the element must carry, e.g. ``{"secret": "abc"}``.
            Keys match case-insensitively, values must be equal exactly.

    Returns:
        The ``for=`` address, or None if it is missing, invalid, or a
        constraint is not met

    Example:
        >>> get_client_ip_from_forwarded("for=123.34.56.78;secret=abc", {"secret": "abc"})
        '123.34.56.78'
        >>> get_client_ip_from_forwarded("for=123.34.56.78;secret=abc", {"secret": "xyz"}) is None
        True
    """
    entries = parse_forwarded_entries(header_value)
    if constraints:
        for key, expected in constraints.items():
            entry = _find_entry(entries, key.lower())
            if entry is None or entry.value != str(expected):
                return None
    ip_entry = _find_entry(entries, "for")
    return extract_ip(ip_entry.value) if ip_entry else None
