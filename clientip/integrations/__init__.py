"""
Framework Integrations for clientip

Middleware that resolves the client IP once per request and exposes it to
handlers.

Available integrations:
- FastAPI / Starlette (clientip.integrations.fastapi)
- Sanic (clientip.integrations.sanic)
- aiohttp (clientip.integrations.aiohttp)
"""

__all__ = []
