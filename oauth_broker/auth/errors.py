"""
Authorization flow errors.

Every failure in either step is surfaced to the popup as a relay page,
so each error carries the provider it belongs to and the message shown
to the opener window.
"""
from typing import Optional

UNKNOWN_PROVIDER = "unknown"


class AuthFlowError(Exception):
    """Base class for errors that end an authorization flow."""

    message = "Authorization failed."

    def __init__(self, provider: Optional[str] = None, message: Optional[str] = None):
        self.provider = provider or UNKNOWN_PROVIDER
        if message is not None:
            self.message = message
        super().__init__(self.message)


class UnsupportedProviderError(AuthFlowError):
    message = "Your Git backend is not supported."


class DomainNotAllowedError(AuthFlowError):
    message = "Your domain is not supported."


class MissingConfigurationError(AuthFlowError):
    """Client ID or client secret is not set for the provider."""
    message = "Application ID or client secret is not configured."


class MissingAuthorizationCodeError(AuthFlowError):
    message = "Authorization code is not provided."


class CsrfMismatchError(AuthFlowError):
    """Cookie state and returned state do not match."""
    message = "The possibility of CSRF is detected."


class UpstreamNetworkError(AuthFlowError):
    message = "Server responded with an error."


class UpstreamMalformedResponseError(AuthFlowError):
    message = "Server responded with malformed JSON."
