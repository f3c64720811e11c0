"""
Shared pytest fixtures for all tests.

Provides settings, the ASGI app, and a stubbed provider token endpoint.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from oauth_broker.api.main import create_app
from oauth_broker.settings import ProviderCredentials, Settings

from tests.helpers.token_endpoint import TokenEndpointStub, override_http_client


BROKER_ORIGIN = "https://broker.example.com"


# =============================================================================
# SETTINGS FIXTURES
# =============================================================================

def make_settings(**overrides) -> Settings:
    """Settings with both providers configured."""
    values = dict(
        environment="test",
        allowed_domains="*.example.com",
        github=ProviderCredentials(
            hostname="github.com",
            client_id="gh-client",
            client_secret="gh-secret",
        ),
        gitlab=ProviderCredentials(
            hostname="gitlab.com",
            client_id="gl-client",
            client_secret="gl-secret",
        ),
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings_factory():
    """Build Settings with both providers configured, overriding fields."""
    return make_settings


@pytest.fixture
def settings() -> Settings:
    return make_settings()


# =============================================================================
# UPSTREAM STUB
# =============================================================================

@pytest.fixture
def token_endpoint() -> TokenEndpointStub:
    return TokenEndpointStub()


# =============================================================================
# APP FIXTURES
# =============================================================================

@pytest.fixture
def app(settings, token_endpoint):
    application = create_app(settings)
    override_http_client(application, token_endpoint)
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url=BROKER_ORIGIN) as c:
        yield c
