"""
Request-like value types

The resolver accepts any object (or mapping) with a ``headers`` map and
optional transport fields. Framework adapters build a RequestSnapshot so the
core never touches framework objects.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence, Union

HeaderValue = Union[str, Sequence[str]]


@dataclass(frozen=True)
class Peer:
    """A transport endpoint exposing a remote address"""
    remote_address: Optional[str] = None
    socket: Optional["Peer"] = None


@dataclass(frozen=True)
class RequestSnapshot:
    """
    Immutable view of the parts of a request the resolver reads.

    Args:
        headers: Header map; plain dicts must use lower-case names,
            case-insensitive multidicts may use any case
        connection: Primary connection (``connection.remote_address``)
        socket: Top-level socket
        info: Platform info object
        request_context: Serverless gateway context
            (``request_context.identity.source_ip``)

    Example:
        >>> snapshot = RequestSnapshot(
        ...     headers={"x-real-ip": "203.0.113.7"},
        ...     connection=Peer("10.0.0.1"),
        ... )
    """
    headers: Mapping[str, HeaderValue] = field(default_factory=dict)
    connection: Optional[Peer] = None
    socket: Optional[Peer] = None
    info: Optional[Peer] = None
    request_context: Optional[Any] = None

    @classmethod
    def from_peer(cls, headers: Mapping[str, HeaderValue], remote_address: Optional[str]) -> "RequestSnapshot":
        """Snapshot with the given headers and a direct connection address"""
        return cls(headers=headers, connection=Peer(remote_address))
