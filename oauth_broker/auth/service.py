"""
Authorization flow service.

Step 1 (begin): validate provider and calling domain, mint CSRF state,
build the provider authorization URL.

Step 2 (complete): validate the CSRF cookie against the returned state,
exchange the authorization code for an access token.

Both steps raise AuthFlowError subclasses; the routes turn those into
relay pages.
"""
import json
import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from oauth_broker.auth import csrf
from oauth_broker.auth.domains import is_domain_allowed
from oauth_broker.auth.errors import (
    CsrfMismatchError,
    DomainNotAllowedError,
    MissingAuthorizationCodeError,
    UnsupportedProviderError,
    UpstreamMalformedResponseError,
    UpstreamNetworkError,
)
from oauth_broker.auth.models import (
    AuthorizationRedirect,
    AuthorizationResult,
    TokenExchangeResult,
)
from oauth_broker.auth.providers import OAuthProvider, get_provider
from oauth_broker.settings import Settings

logger = logging.getLogger(__name__)

TOKEN_REQUEST_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}


class AuthFlowService:
    """Stateless orchestration of the two OAuth round trips."""

    def __init__(self, settings: Settings, http_client: Optional[httpx.AsyncClient] = None):
        self.settings = settings
        self.http_client = http_client

    def begin(
        self,
        provider_id: Optional[str],
        domain: Optional[str],
        origin: str,
    ) -> AuthorizationRedirect:
        """
        Start the authorization flow.

        Args:
            provider_id: `provider` query parameter
            domain: `domain` query parameter
            origin: Scheme and host the broker is reached at

        Returns:
            AuthorizationRedirect with the provider URL and CSRF token

        Raises:
            UnsupportedProviderError: Provider missing or unsupported
            DomainNotAllowedError: Domain rejected by ALLOWED_DOMAINS
            MissingConfigurationError: Credentials not configured
        """
        provider = get_provider(provider_id, self.settings)

        if not is_domain_allowed(domain, self.settings.allowed_domains):
            raise DomainNotAllowedError(provider.provider_name)

        provider.require_credentials()

        token = csrf.issue(provider.provider_name)
        url = provider.build_authorize_url(origin, token.state)

        logger.info(f"Redirecting to {provider.provider_name} authorization endpoint")
        return AuthorizationRedirect(provider=provider.provider_id, url=url, csrf=token)

    async def complete(
        self,
        cookie_header: Optional[str],
        code: Optional[str],
        state: Optional[str],
        origin: str,
    ) -> AuthorizationResult:
        """
        Finish the authorization flow.

        Args:
            cookie_header: Raw Cookie header
            code: `code` query parameter
            state: `state` query parameter
            origin: Scheme and host the broker is reached at

        Returns:
            AuthorizationResult with the token and error as reported by the provider

        Raises:
            UnsupportedProviderError: Cookie missing, malformed or for an unsupported provider
            MissingAuthorizationCodeError: code or state missing
            CsrfMismatchError: Cookie state does not match returned state
            MissingConfigurationError: Credentials not configured
            UpstreamNetworkError: Token endpoint unreachable
            UpstreamMalformedResponseError: Token endpoint did not return a JSON object
        """
        token = csrf.extract(cookie_header)
        if token is None:
            raise UnsupportedProviderError()

        provider = get_provider(token.provider, self.settings)

        if not code or not state:
            raise MissingAuthorizationCodeError(provider.provider_name)

        # SECURITY: binds this callback to the attempt that set the cookie
        if not csrf.verify(token, state):
            raise CsrfMismatchError(provider.provider_name)

        provider.require_credentials()

        result = await self.exchange_code(provider, code, origin)
        return AuthorizationResult(
            provider=provider.provider_id,
            access_token=result.access_token,
            error=result.error,
        )

    async def exchange_code(
        self,
        provider: OAuthProvider,
        code: str,
        origin: str,
    ) -> TokenExchangeResult:
        """
        POST the authorization code to the provider's token endpoint.

        No retry; the user re-initiates the flow instead. Upstream HTTP
        status codes are not interpreted, only the JSON body.
        """
        if self.http_client is None:
            raise RuntimeError("AuthFlowService needs an http_client to exchange codes")

        token_request = provider.build_token_request(code, origin)

        try:
            response = await self.http_client.post(
                token_request.url,
                json=token_request.body,
                headers=TOKEN_REQUEST_HEADERS,
            )
        except httpx.RequestError as e:
            logger.error(
                f"Token request to {provider.provider_name} failed: {e.__class__.__name__}"
            )
            raise UpstreamNetworkError(provider.provider_name)

        try:
            data = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.warning(
                f"Token endpoint of {provider.provider_name} returned non-JSON "
                f"(status {response.status_code})"
            )
            raise UpstreamMalformedResponseError(provider.provider_name)

        if not isinstance(data, dict):
            raise UpstreamMalformedResponseError(provider.provider_name)

        try:
            result = TokenExchangeResult.model_validate(data)
        except ValidationError:
            logger.warning(f"Token endpoint of {provider.provider_name} returned unexpected fields")
            raise UpstreamMalformedResponseError(provider.provider_name)

        if result.error:
            logger.warning(f"{provider.provider_name} reported error: {result.error!r}")
        elif result.access_token:
            logger.info(f"Obtained {provider.provider_name} access token")
        else:
            logger.warning(f"{provider.provider_name} returned neither token nor error")

        return result
