"""
FastAPI / Starlette Integration for clientip

Available Middleware:
- ClientIPMiddleware: Resolve the client IP once and store it on request.state

Available Dependencies:
- client_ip_dependency: FastAPI dependency returning the client IP

Utilities:
- get_client_ip: Resolve the client IP of a Starlette request

Example:
    from fastapi import FastAPI, Depends
    from clientip.integrations.fastapi import ClientIPMiddleware, client_ip_dependency

    app = FastAPI()
    app.add_middleware(ClientIPMiddleware, config={"allowed_remotes": "loopback"})

    @app.get("/whoami")
    async def whoami(ip=Depends(client_ip_dependency())):
        return {"ip": ip}
"""

from .middleware import ClientIPMiddleware
from .dependencies import client_ip_dependency
from .utils import build_snapshot, get_client_ip

__all__ = [
    # Middleware
    "ClientIPMiddleware",
    # Dependencies
    "client_ip_dependency",
    # Utilities
    "build_snapshot",
    "get_client_ip",
]
