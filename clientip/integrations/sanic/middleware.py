"""
Sanic middleware setup for clientip
"""

from typing import Optional, Set

from ...config import MiddlewareConfig
from ...logging import get_logger
from ...resolver import ClientIP
from .utils import get_client_ip

logger = get_logger(__name__)


def setup_client_ip(
    app,
    client_ip: Optional[ClientIP] = None,
    config=None,
    attribute_name: str = "client_ip",
    exclude_paths: Optional[Set[str]] = None,
):
    """
    Resolve the client IP for every request of a Sanic application.

    The result is stored on ``request.ctx``.

    Example:
        from sanic import Sanic, json
        from clientip.integrations.sanic import setup_client_ip

        app = Sanic("MyApp")
        setup_client_ip(app, config={"allowed_remotes": "loopback"})

        @app.get("/whoami")
        async def whoami(request):
            return json({"ip": request.ctx.client_ip})

    Args:
        app: Sanic application instance
        client_ip: Preconfigured ClientIP; takes precedence over config
        config: ClientIPConfig or mapping used to build a ClientIP
        attribute_name: ``request.ctx`` attribute to set (default: "client_ip")
        exclude_paths: Paths that skip resolution

    Returns:
        The ClientIP used by the middleware
    """
    resolver = client_ip or ClientIP(config)
    settings = MiddlewareConfig(attribute_name=attribute_name, exclude_paths=exclude_paths)

    @app.middleware("request")
    async def resolve_client_ip(request):
        """Resolve the client IP before each request"""
        if request.path in settings.exclude_paths:
            return None
        setattr(request.ctx, settings.attribute_name, get_client_ip(request, resolver))
        return None

    logger.info("Client IP middleware configured for Sanic app")
    return resolver
