"""GitLab OAuth provider."""

from typing import Any, Dict

from oauth_broker.auth.models import ProviderId
from .base import OAuthProvider

GITLAB_SCOPES = ["api"]


class GitLabOAuthProvider(OAuthProvider):
    """GitLab.com or self-managed GitLab application."""

    provider_id = ProviderId.GITLAB

    def _authorize_url(self) -> str:
        return f"{self.base_url}/oauth/authorize"

    def _token_url(self) -> str:
        return f"{self.base_url}/oauth/token"

    def _get_authorize_params(self, origin: str, state: str) -> Dict[str, str]:
        return {
            "client_id": self.credentials.client_id,
            "redirect_uri": self.callback_url(origin),
            "response_type": "code",
            "scope": " ".join(GITLAB_SCOPES),
            "state": state,
        }

    def _get_extra_token_params(self, origin: str) -> Dict[str, Any]:
        """GitLab requires the grant type and the same redirect URI."""
        return {
            "grant_type": "authorization_code",
            "redirect_uri": self.callback_url(origin),
        }
