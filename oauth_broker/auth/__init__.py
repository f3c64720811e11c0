"""
Authentication module.

Two-step OAuth authorization-code flow for Git hosting providers.
"""
from .errors import (
    AuthFlowError,
    UnsupportedProviderError,
    DomainNotAllowedError,
    MissingConfigurationError,
    MissingAuthorizationCodeError,
    CsrfMismatchError,
    UpstreamNetworkError,
    UpstreamMalformedResponseError,
)
from .models import (
    ProviderId,
    CsrfToken,
    TokenRequest,
    TokenExchangeResult,
    AuthorizationRedirect,
    AuthorizationResult,
)

__all__ = [
    'AuthFlowError',
    'UnsupportedProviderError',
    'DomainNotAllowedError',
    'MissingConfigurationError',
    'MissingAuthorizationCodeError',
    'CsrfMismatchError',
    'UpstreamNetworkError',
    'UpstreamMalformedResponseError',
    'ProviderId',
    'CsrfToken',
    'TokenRequest',
    'TokenExchangeResult',
    'AuthorizationRedirect',
    'AuthorizationResult',
]
