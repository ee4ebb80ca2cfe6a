"""
Utility functions for aiohttp integration
"""

from typing import Optional

from ...request import RequestSnapshot
from ...resolver import ClientIP

_default_client_ip = ClientIP()


def build_snapshot(request) -> RequestSnapshot:
    """Snapshot of an aiohttp request: headers plus the transport peername"""
    peername = request.transport.get_extra_info('peername') if request.transport else None
    # Unix sockets report a path string, not (host, port)
    remote_address = peername[0] if isinstance(peername, (tuple, list)) and peername else None
    return RequestSnapshot.from_peer(request.headers, remote_address)


def get_client_ip(request, client_ip: Optional[ClientIP] = None) -> Optional[str]:
    """
    Extract client IP address from aiohttp request with proxy support.

    Args:
        request: aiohttp Request object
        client_ip: Configured ClientIP (default: default header list)

    Returns:
        Client IP address string, or None
    """
    return (client_ip or _default_client_ip).get_client_ip(build_snapshot(request))
