"""
aiohttp Integration for clientip

Example:
    from aiohttp import web
    from clientip.integrations.aiohttp import create_client_ip_middleware

    app = web.Application()
    app.middlewares.append(create_client_ip_middleware(
        config={"allowed_remotes": "10.0.0.0/8"},
    ))

    async def whoami(request):
        return web.json_response({"ip": request["client_ip"]})

    app.router.add_get("/whoami", whoami)
"""

from .middleware import create_client_ip_middleware
from .utils import build_snapshot, get_client_ip

__all__ = [
    # Middleware
    "create_client_ip_middleware",
    # Utilities
    "build_snapshot",
    "get_client_ip",
]
