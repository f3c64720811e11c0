"""OAuth provider registry."""

from typing import Dict, Optional, Type, Union

from oauth_broker.auth.errors import UnsupportedProviderError
from oauth_broker.auth.models import ProviderId
from oauth_broker.settings import Settings

from .base import OAuthProvider
from .github import GitHubOAuthProvider
from .gitlab import GitLabOAuthProvider

PROVIDERS: Dict[ProviderId, Type[OAuthProvider]] = {
    ProviderId.GITHUB: GitHubOAuthProvider,
    ProviderId.GITLAB: GitLabOAuthProvider,
}


def get_provider(
    provider_id: Optional[Union[ProviderId, str]],
    settings: Settings,
) -> OAuthProvider:
    """
    Get the provider for an identifier.

    Args:
        provider_id: Provider identifier from the request or cookie
        settings: Application settings holding credentials

    Returns:
        OAuthProvider instance (credentials may still be missing)

    Raises:
        UnsupportedProviderError: If the identifier is not supported
    """
    if not isinstance(provider_id, ProviderId):
        provider_id = ProviderId.parse(provider_id)
    if provider_id is None or provider_id not in PROVIDERS:
        raise UnsupportedProviderError()

    provider_cls = PROVIDERS[provider_id]
    return provider_cls(settings.credentials_for(provider_id))


__all__ = [
    "PROVIDERS",
    "OAuthProvider",
    "GitHubOAuthProvider",
    "GitLabOAuthProvider",
    "get_provider",
]
