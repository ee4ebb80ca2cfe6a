"""
aiohttp middleware for clientip
"""

from typing import Optional, Set

from aiohttp import web

from ...config import MiddlewareConfig
from ...logging import get_logger
from ...resolver import ClientIP
from .utils import get_client_ip

logger = get_logger(__name__)


def create_client_ip_middleware(
    client_ip: Optional[ClientIP] = None,
    config=None,
    attribute_name: str = "client_ip",
    exclude_paths: Optional[Set[str]] = None,
):
    """
    Create aiohttp middleware storing the client IP in the request mapping.

    Example:
        from aiohttp import web
        from clientip.integrations.aiohttp import create_client_ip_middleware

        app = web.Application(middlewares=[
            create_client_ip_middleware(config={"allowed_remotes": "loopback"}),
        ])

        async def whoami(request):
            return web.json_response({"ip": request["client_ip"]})

    Args:
        client_ip: Preconfigured ClientIP; takes precedence over config
        config: ClientIPConfig or mapping used to build a ClientIP
        attribute_name: Request key to set (default: "client_ip")
        exclude_paths: Paths that skip resolution

    Returns:
        aiohttp middleware function
    """
    resolver = client_ip or ClientIP(config)
    settings = MiddlewareConfig(attribute_name=attribute_name, exclude_paths=exclude_paths)

    @web.middleware
    async def client_ip_middleware(request, handler):
        """Resolve the client IP before calling the handler"""
        if request.path not in settings.exclude_paths:
            request[settings.attribute_name] = get_client_ip(request, resolver)
        return await handler(request)

    logger.info("Client IP middleware configured for aiohttp app")
    return client_ip_middleware
