"""Pytest fixtures for all tests."""

import base64

import pytest
from httpx import AsyncClient, ASGITransport

from config import AuthConfig, Config, IdsConfig, LoggingConfig
from ids.issuer import IdIssuer
from service.app import create_app


@pytest.fixture
def app_config(tmp_path):
    """Config that writes logs under tmp_path."""
    return Config(
        ids=IdsConfig(max_batch=10),
        logging=LoggingConfig(
            level="ERROR",
            file=str(tmp_path / "issued.log"),
            crash_file=str(tmp_path / "crash.log"),
        ),
        auth=AuthConfig(username="admin", password="secret"),
    )


@pytest.fixture
def issuer():
    """Create a test issuer that records sink calls."""
    records = []
    issuer = IdIssuer(max_batch=5, sink=lambda kind, value: records.append((kind, value)))
    issuer.records = records
    return issuer


@pytest.fixture
async def app(app_config):
    """Create test FastAPI app."""
    return create_app(app_config)


@pytest.fixture
async def client(app):
    """Create async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_header():
    """Basic auth header matching app_config."""
    def make(username="admin", password="secret"):
        credentials = base64.b64encode(f"{username}:{password}".encode()).decode()
        return {"Authorization": f"Basic {credentials}"}
    return make
