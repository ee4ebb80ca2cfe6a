"""
Utility functions for Sanic integration
"""

from typing import Optional

from ...request import RequestSnapshot
from ...resolver import ClientIP

_default_client_ip = ClientIP()


def build_snapshot(request) -> RequestSnapshot:
    """Snapshot of a Sanic request: headers plus ``request.ip``"""
    return RequestSnapshot.from_peer(request.headers, request.ip or None)


def get_client_ip(request, client_ip: Optional[ClientIP] = None) -> Optional[str]:
    """
    Extract client IP address from Sanic request with proxy support.

    Args:
        request: Sanic Request object
        client_ip: Configured ClientIP (default: default header list)

    Returns:
        Client IP address string, or None
    """
    return (client_ip or _default_client_ip).get_client_ip(build_snapshot(request))
