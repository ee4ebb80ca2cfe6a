"""
Tests for Sanic Integration
"""

import uuid
from unittest.mock import Mock

import pytest

sanic = pytest.importorskip("sanic", reason="Sanic not installed")

from sanic import Sanic, response as sanic_response

from clientip import ClientIP
from clientip.integrations.sanic import (
    build_snapshot,
    get_client_ip,
    setup_client_ip,
)


def make_app(**kwargs):
    app = Sanic(f"test_app_{uuid.uuid4().hex[:8]}")
    resolver = setup_client_ip(app, **kwargs)

    @app.get("/whoami")
    async def whoami(request):
        return sanic_response.json({"ip": getattr(request.ctx, "client_ip", "unset")})

    @app.get("/health")
    async def health(request):
        return sanic_response.json({"ip": getattr(request.ctx, "client_ip", "unset")})

    return app, resolver


class TestSetupClientIP:
    """Test setup_client_ip"""

    @pytest.mark.asyncio
    async def test_resolves_from_header(self):
        """Test the header address is stored on request.ctx"""
        app, _ = make_app()

        _, response = await app.asgi_client.get("/whoami", headers={"X-Real-IP": "203.0.113.7"})
        assert response.status == 200
        assert response.json == {"ip": "203.0.113.7"}

    @pytest.mark.asyncio
    async def test_forwarded_for_list(self):
        """Test the built-in forwarded-for parser"""
        app, _ = make_app()

        _, response = await app.asgi_client.get(
            "/whoami", headers={"Forwarded-For": "203.0.113.7, 10.0.0.1"}
        )
        assert response.json == {"ip": "203.0.113.7"}

    @pytest.mark.asyncio
    async def test_excluded_path(self):
        """Test excluded paths skip resolution"""
        app, _ = make_app(exclude_paths={"/health"})

        _, response = await app.asgi_client.get("/health", headers={"X-Real-IP": "203.0.113.7"})
        assert response.json == {"ip": "unset"}

    def test_returns_resolver(self):
        """Test setup returns the ClientIP in use"""
        client_ip = ClientIP()
        _, resolver = make_app(client_ip=client_ip)
        assert resolver is client_ip

    def test_builds_resolver_from_config(self):
        """Test setup builds a ClientIP from config"""
        _, resolver = make_app(config={"allowed_headers": ["x-real-ip"]})
        assert [spec.name for spec in resolver.config.allowed_headers] == ["x-real-ip"]


class TestSanicUtils:
    """Test Sanic utility functions"""

    def test_get_client_ip_direct(self):
        """Test get_client_ip with direct connection"""
        mock_request = Mock()
        mock_request.ip = "127.0.0.1"
        mock_request.conn_info.client_ip = "10.9.9.9"
        mock_request.headers = {}

        assert get_client_ip(mock_request) == "127.0.0.1"

    def test_get_client_ip_with_real_ip(self):
        """Test get_client_ip with X-Real-IP header"""
        mock_request = Mock()
        mock_request.ip = "127.0.0.1"
        mock_request.headers = {"x-real-ip": "192.168.1.200"}

        assert get_client_ip(mock_request) == "192.168.1.200"

    def test_get_client_ip_untrusted(self):
        """Test headers ignored for peers outside the allow-list"""
        mock_request = Mock()
        mock_request.ip = "192.0.2.1"
        mock_request.headers = {"x-real-ip": "192.168.1.200"}

        assert get_client_ip(mock_request, ClientIP({"allowed_remotes": "loopback"})) == "192.0.2.1"

    def test_empty_ip(self):
        """Test an empty request.ip means no peer"""
        mock_request = Mock()
        mock_request.ip = ""
        mock_request.headers = {}

        assert build_snapshot(mock_request).connection.remote_address is None
        assert get_client_ip(mock_request) is None
