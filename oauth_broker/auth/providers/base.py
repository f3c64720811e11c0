"""OAuth provider base interface."""

from abc import ABC, abstractmethod
from typing import Any, Dict
from urllib.parse import urlencode

from oauth_broker.auth.errors import MissingConfigurationError
from oauth_broker.auth.models import ProviderId, TokenRequest
from oauth_broker.settings import ProviderCredentials


class OAuthProvider(ABC):
    """Base class for Git hosting OAuth providers."""

    provider_id: ProviderId

    def __init__(self, credentials: ProviderCredentials):
        self.credentials = credentials

    @property
    def provider_name(self) -> str:
        """Return the provider name (e.g., 'github', 'gitlab')."""
        return self.provider_id.value

    @property
    def base_url(self) -> str:
        return f"https://{self.credentials.hostname}"

    def require_credentials(self) -> None:
        """
        Ensure client ID and secret are configured.

        Raises:
            MissingConfigurationError: If either is missing
        """
        if not self.credentials.is_configured:
            raise MissingConfigurationError(self.provider_name)

    def build_authorize_url(self, origin: str, state: str) -> str:
        """
        Get the OAuth authorization URL.

        Args:
            origin: Scheme and host the broker is reached at
            state: CSRF state for this attempt

        Returns:
            Full authorization URL to redirect user to
        """
        self.require_credentials()
        params = self._get_authorize_params(origin, state)
        return f"{self._authorize_url()}?{urlencode(params, safe=',')}"

    def build_token_request(self, code: str, origin: str) -> TokenRequest:
        """
        Get the token endpoint call for an authorization code.

        Args:
            code: Authorization code from the callback
            origin: Scheme and host the broker is reached at

        Returns:
            TokenRequest with endpoint URL and JSON body
        """
        self.require_credentials()
        body = {
            "code": code,
            "client_id": self.credentials.client_id,
            "client_secret": self.credentials.client_secret,
        }
        body.update(self._get_extra_token_params(origin))
        return TokenRequest(url=self._token_url(), body=body)

    @staticmethod
    def callback_url(origin: str) -> str:
        return f"{origin}/callback"

    @abstractmethod
    def _authorize_url(self) -> str:
        ...

    @abstractmethod
    def _token_url(self) -> str:
        ...

    @abstractmethod
    def _get_authorize_params(self, origin: str, state: str) -> Dict[str, str]:
        """Query parameters for the authorization URL, including state."""
        ...

    def _get_extra_token_params(self, origin: str) -> Dict[str, Any]:
        """Override to add provider-specific token body fields."""
        return {}
