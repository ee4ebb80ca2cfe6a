"""
clientip - Client IP resolution behind proxies for Python web services

Determines the originating client address of a request from the connecting
peer and the forwarding headers set by load balancers, CDNs and reverse
proxies.

Core Features (No Optional Dependencies):
- Ordered header precedence across common vendor headers
- RFC 7239 Forwarded parsing with attribute constraints (e.g. shared secret)
- Bracketed IPv6 and ip:port handling, strict IP validation
- Remote peer allow-listing by predicate, exact list, or CIDR ranges
- Pluggable per-header parsers
- Flexible Logging - Silent by default, supports any logging framework

Optional Features (Require Installation):
- Framework Integrations - FastAPI, aiohttp, Sanic

Usage:
    from clientip import ClientIP, ClientIPConfig, get_client_ip

    ip = get_client_ip({"headers": {"forwarded": "for=203.0.113.7"}})

    client_ip = ClientIP(ClientIPConfig(
        allowed_remotes="loopback, 10.0.0.0/8",
        allowed_headers=[("forwarded", {"secret": "abc"})],
    ))
    ip = client_ip.get_client_ip(request)

    # Framework middleware
    from clientip.integrations.fastapi import ClientIPMiddleware
"""

from .config import (
    ClientIPConfig,
    MiddlewareConfig,
    HeaderSpec,
)

from .exceptions import (
    ClientIPError,
    InvalidHeaderSpecError,
    InvalidTrustSpecError,
)

from .extract import (
    extract_ip,
    is_ip,
)

from .parsers import (
    HeaderParser,
    BareLiteralParser,
    FirstSegmentParser,
    ForwardedParser,
    ForwardedEntry,
    parse_forwarded_entries,
    get_client_ip_from_forwarded,
    get_client_ip_from_x_forwarded_for,
)

from .remote import (
    get_remote_address,
    REMOTE_ADDRESS_PROBES,
)

from .request import (
    Peer,
    RequestSnapshot,
)

from .trust import (
    CidrMatcher,
    RemoteTrust,
    compile_cidr_matcher,
    validate_remote_address,
)

from .resolver import (
    ClientIP,
    ClientIPValidator,
    DEFAULT_HEADERS,
    DEFAULT_HEADER_VALIDATORS,
    DEFAULT_VALIDATOR,
    get_client_ip,
)

# Logging Configuration
from .logging import (
    configure_logging,
    set_error_handler,
    disable_logging,
    is_logging_enabled,
)

__all__ = [
    # Configuration
    "ClientIPConfig",
    "MiddlewareConfig",
    "HeaderSpec",

    # Exceptions
    "ClientIPError",
    "InvalidHeaderSpecError",
    "InvalidTrustSpecError",

    # IP literals
    "extract_ip",
    "is_ip",

    # Header parsers
    "HeaderParser",
    "BareLiteralParser",
    "FirstSegmentParser",
    "ForwardedParser",
    "ForwardedEntry",
    "parse_forwarded_entries",
    "get_client_ip_from_forwarded",
    "get_client_ip_from_x_forwarded_for",

    # Remote address
    "get_remote_address",
    "REMOTE_ADDRESS_PROBES",
    "Peer",
    "RequestSnapshot",

    # Trust
    "CidrMatcher",
    "RemoteTrust",
    "compile_cidr_matcher",
    "validate_remote_address",

    # Resolution
    "ClientIP",
    "ClientIPValidator",
    "DEFAULT_HEADERS",
    "DEFAULT_HEADER_VALIDATORS",
    "DEFAULT_VALIDATOR",
    "get_client_ip",

    # Logging Configuration
    "configure_logging",
    "set_error_handler",
    "disable_logging",
    "is_logging_enabled",
]

__version__ = "0.1.0"
__license__ = "MIT"
