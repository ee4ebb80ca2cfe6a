"""
Remote address resolution

Finds the transport-layer peer address on a request-like object. Servers
expose it in different places, so a fixed list of probes is tried in order:

1. ``connection.remote_address``         (direct connection)
2. ``connection.socket.remote_address``  (wrapped/TLS socket)
3. ``socket.remote_address``
4. ``info.remote_address``
5. ``request_context.identity.source_ip`` (AWS API Gateway + Lambda)

Each step works with attributes or mapping keys, in snake_case or camelCase,
so a raw Lambda event dict resolves the same way as an object.
"""

from collections.abc import Mapping
from typing import Any, Optional, Sequence, Tuple

from .extract import is_ip

# A probe is a path; each step lists the accepted spellings
Probe = Tuple[Tuple[str, ...], ...]

_REMOTE_ADDRESS = ("remote_address", "remoteAddress")

REMOTE_ADDRESS_PROBES: Tuple[Probe, ...] = (
    (("connection",), _REMOTE_ADDRESS),
    (("connection",), ("socket",), _REMOTE_ADDRESS),
    (("socket",), _REMOTE_ADDRESS),
    (("info",), _REMOTE_ADDRESS),
    (("request_context", "requestContext"), ("identity",), ("source_ip", "sourceIp")),
)


def _step(obj: Any, names: Sequence[str]) -> Any:
    for name in names:
        if isinstance(obj, Mapping):
            value = obj.get(name)
        else:
            value = getattr(obj, name, None)
        if value is not None:
            return value
    return None


def _follow(obj: Any, probe: Probe) -> Any:
    for names in probe:
        obj = _step(obj, names)
        if obj is None:
            return None
    return obj


def get_remote_address(request: Any, probes: Sequence[Probe] = REMOTE_ADDRESS_PROBES) -> Optional[str]:
    """
    Return the first valid IP literal found by the probes, or None.

    Values are used as-is; a ``host:port`` string is rejected rather than
    stripped.

    Example:
        >>> get_remote_address({"requestContext": {"identity": {"sourceIp": "203.0.113.9"}}})
        '203.0.113.9'
    """
    for probe in probes:
        candidate = _follow(request, probe)
        if is_ip(candidate):
            return candidate
    return None
