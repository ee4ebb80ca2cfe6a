"""
Client IP Middleware for FastAPI
"""

from typing import Callable, List, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from ...config import MiddlewareConfig
from ...logging import get_logger
from ...resolver import ClientIP
from .utils import get_client_ip

logger = get_logger(__name__)


class ClientIPMiddleware(BaseHTTPMiddleware):
    """
    FastAPI middleware exposing the resolved client IP on ``request.state``.

    Example:
        from fastapi import FastAPI, Request
        from clientip import ClientIPConfig
        from clientip.integrations.fastapi import ClientIPMiddleware

        app = FastAPI()
        app.add_middleware(
            ClientIPMiddleware,
            config=ClientIPConfig(allowed_remotes="loopback, 10.0.0.0/8"),
        )

        @app.get("/whoami")
        async def whoami(request: Request):
            return {"ip": request.state.client_ip}
    """

    def __init__(
        self,
        app,
        client_ip: Optional[ClientIP] = None,
        config=None,
        attribute_name: str = "client_ip",
        exclude_paths: Optional[List[str]] = None,
    ):
        """
        Initialize middleware

        Args:
            client_ip: Preconfigured ClientIP; takes precedence over config
            config: ClientIPConfig or mapping used to build a ClientIP
            attribute_name: ``request.state`` attribute to set (default: "client_ip")
            exclude_paths: Paths that skip resolution
        """
        super().__init__(app)
        self.client_ip = client_ip or ClientIP(config)
        self.settings = MiddlewareConfig(attribute_name=attribute_name, exclude_paths=exclude_paths)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Resolve the client IP before handing the request on"""
        if request.url.path in self.settings.exclude_paths:
            return await call_next(request)

        ip = get_client_ip(request, self.client_ip)
        setattr(request.state, self.settings.attribute_name, ip)
        if ip is None:
            logger.debug(f"No client IP for {request.method} {request.url.path}")
        return await call_next(request)
