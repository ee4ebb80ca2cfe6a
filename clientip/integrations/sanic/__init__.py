"""
Sanic Integration for clientip

Example:
    from sanic import Sanic, json
    from clientip.integrations.sanic import setup_client_ip

    app = Sanic("MyApp")
    setup_client_ip(app, config={"allowed_remotes": "loopback"})

    @app.get("/whoami")
    async def whoami(request):
        return json({"ip": request.ctx.client_ip})
"""

from .middleware import setup_client_ip
from .utils import build_snapshot, get_client_ip

__all__ = [
    # Setup
    "setup_client_ip",
    # Utilities
    "build_snapshot",
    "get_client_ip",
]
