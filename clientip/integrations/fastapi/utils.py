"""
Utility functions for FastAPI integration
"""

from typing import Optional

from fastapi import Request

from ...request import RequestSnapshot
from ...resolver import ClientIP

_default_client_ip = ClientIP()


def build_snapshot(request: Request) -> RequestSnapshot:
    """Snapshot of a Starlette request: headers plus ``request.client.host``"""
    remote_address = request.client.host if getattr(request, "client", None) else None
    return RequestSnapshot.from_peer(request.headers, remote_address)


def get_client_ip(request: Request, client_ip: Optional[ClientIP] = None) -> Optional[str]:
    """
    Extract client IP address from request with proxy support.

    Args:
        request: FastAPI Request object
        client_ip: Configured ClientIP (default: default header list, no
            remote trust check)

    Returns:
        Client IP address string, or None if none could be determined
    """
    return (client_ip or _default_client_ip).get_client_ip(build_snapshot(request))
