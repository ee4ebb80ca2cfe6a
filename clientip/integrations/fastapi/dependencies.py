"""
FastAPI dependency injection utilities for clientip
"""

from typing import Optional

from fastapi import Request

from ...resolver import ClientIP
from .utils import get_client_ip


def client_ip_dependency(
    client_ip: Optional[ClientIP] = None,
    attribute_name: str = "client_ip",
):
    """
    Create a FastAPI dependency returning the client IP.

    Reuses the value set by ClientIPMiddleware when present, otherwise
    resolves it for this request.

    Example:
        from fastapi import FastAPI, Depends
        from clientip.integrations.fastapi import client_ip_dependency

        app = FastAPI()
        get_ip = client_ip_dependency()

        @app.get("/whoami")
        async def whoami(ip: str = Depends(get_ip)):
            return {"ip": ip}

    Args:
        client_ip: Configured ClientIP (default: default header list)
        attribute_name: ``request.state`` attribute set by the middleware

    Returns:
        FastAPI dependency function
    """
    async def resolve_client_ip(request: Request) -> Optional[str]:
        """Client IP for the current request"""
        if hasattr(request.state, attribute_name):
            return getattr(request.state, attribute_name)
        return get_client_ip(request, client_ip)

    return resolve_client_ip
