"""Tests for provider authorization URLs and token requests."""

from urllib.parse import parse_qs, urlparse

import pytest

from oauth_broker.auth.errors import MissingConfigurationError, UnsupportedProviderError
from oauth_broker.auth.models import ProviderId
from oauth_broker.auth.providers import (
    PROVIDERS,
    GitHubOAuthProvider,
    GitLabOAuthProvider,
    get_provider,
)
from oauth_broker.settings import ProviderCredentials

ORIGIN = "https://broker.example.com"
STATE = "0123456789abcdef0123456789abcdef"


def query_of(url: str) -> dict:
    return {k: v[0] for k, v in parse_qs(urlparse(url).query).items()}


class TestGetProvider:
    """Tests for the provider registry."""

    def test_every_provider_id_registered(self):
        assert set(PROVIDERS) == set(ProviderId)

    @pytest.mark.parametrize("value,cls", [
        ("github", GitHubOAuthProvider),
        ("gitlab", GitLabOAuthProvider),
        (ProviderId.GITHUB, GitHubOAuthProvider),
    ])
    def test_known_providers(self, value, cls, settings):
        assert isinstance(get_provider(value, settings), cls)

    @pytest.mark.parametrize("value", [None, "", "bitbucket", "GitHub", "unknown"])
    def test_unsupported(self, value, settings):
        with pytest.raises(UnsupportedProviderError) as exc_info:
            get_provider(value, settings)
        assert exc_info.value.provider == "unknown"

    def test_uses_provider_credentials(self, settings):
        provider = get_provider("gitlab", settings)
        assert provider.credentials.client_id == "gl-client"


class TestGitHubProvider:
    """GitHub authorization and token exchange parameters."""

    @pytest.fixture
    def provider(self, settings):
        return get_provider("github", settings)

    def test_authorize_url(self, provider):
        url = provider.build_authorize_url(ORIGIN, STATE)
        assert url == (
            "https://github.com/login/oauth/authorize"
            f"?client_id=gh-client&scope=repo,user&state={STATE}"
        )

    def test_authorize_url_has_no_redirect_uri(self, provider):
        assert "redirect_uri" not in query_of(provider.build_authorize_url(ORIGIN, STATE))

    def test_custom_hostname(self, settings_factory):
        settings = settings_factory(github=ProviderCredentials(
            hostname="github.corp.test", client_id="id", client_secret="secret",
        ))
        provider = get_provider("github", settings)
        assert provider.build_authorize_url(ORIGIN, STATE).startswith(
            "https://github.corp.test/login/oauth/authorize?"
        )
        assert provider.build_token_request("abc", ORIGIN).url == (
            "https://github.corp.test/login/oauth/access_token"
        )

    def test_token_request(self, provider):
        request = provider.build_token_request("abc", ORIGIN)
        assert request.url == "https://github.com/login/oauth/access_token"
        assert request.body == {
            "code": "abc",
            "client_id": "gh-client",
            "client_secret": "gh-secret",
        }


class TestGitLabProvider:
    """GitLab authorization and token exchange parameters."""

    @pytest.fixture
    def provider(self, settings):
        return get_provider("gitlab", settings)

    def test_authorize_url(self, provider):
        url = provider.build_authorize_url(ORIGIN, STATE)
        assert url.startswith("https://gitlab.com/oauth/authorize?")
        assert query_of(url) == {
            "client_id": "gl-client",
            "redirect_uri": "https://broker.example.com/callback",
            "response_type": "code",
            "scope": "api",
            "state": STATE,
        }

    def test_token_request(self, provider):
        request = provider.build_token_request("abc", ORIGIN)
        assert request.url == "https://gitlab.com/oauth/token"
        assert request.body == {
            "code": "abc",
            "client_id": "gl-client",
            "client_secret": "gl-secret",
            "grant_type": "authorization_code",
            "redirect_uri": "https://broker.example.com/callback",
        }


class TestMissingCredentials:
    """Missing client ID or secret is a configuration error."""

    @pytest.mark.parametrize("client_id,client_secret", [
        (None, None),
        ("id", None),
        (None, "secret"),
    ])
    def test_require_credentials(self, client_id, client_secret, settings_factory):
        settings = settings_factory(github=ProviderCredentials(
            hostname="github.com", client_id=client_id, client_secret=client_secret,
        ))
        provider = get_provider("github", settings)

        with pytest.raises(MissingConfigurationError) as exc_info:
            provider.require_credentials()
        assert exc_info.value.provider == "github"

    def test_build_operations_refuse(self, settings_factory):
        settings = settings_factory(gitlab=ProviderCredentials(hostname="gitlab.com"))
        provider = get_provider("gitlab", settings)

        with pytest.raises(MissingConfigurationError):
            provider.build_authorize_url(ORIGIN, STATE)
        with pytest.raises(MissingConfigurationError):
            provider.build_token_request("abc", ORIGIN)
