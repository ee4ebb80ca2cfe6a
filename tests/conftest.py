"""
Pytest configuration and fixtures for clientip tests
"""
import pytest

from clientip.logging import disable_logging
from clientip.request import Peer, RequestSnapshot


@pytest.fixture(autouse=True)
def reset_logging():
    """Leave library logging in its default, silent state"""
    disable_logging()
    yield
    disable_logging()


@pytest.fixture
def make_request():
    """Build a RequestSnapshot from headers and an optional peer address"""
    def _make(headers=None, remote_address=None):
        connection = Peer(remote_address) if remote_address is not None else None
        return RequestSnapshot(headers=headers or {}, connection=connection)
    return _make
