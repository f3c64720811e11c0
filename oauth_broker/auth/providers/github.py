"""GitHub OAuth provider."""

from typing import Dict

from oauth_broker.auth.models import ProviderId
from .base import OAuthProvider

GITHUB_SCOPES = ["repo", "user"]


class GitHubOAuthProvider(OAuthProvider):
    """
    GitHub (or GitHub Enterprise) OAuth app.

    GitHub uses the redirect URL registered with the app, so none is sent.
    """

    provider_id = ProviderId.GITHUB

    def _authorize_url(self) -> str:
        return f"{self.base_url}/login/oauth/authorize"

    def _token_url(self) -> str:
        return f"{self.base_url}/login/oauth/access_token"

    def _get_authorize_params(self, origin: str, state: str) -> Dict[str, str]:
        return {
            "client_id": self.credentials.client_id,
            "scope": ",".join(GITHUB_SCOPES),
            "state": state,
        }
