"""
Authentication data models.

Defines the core domain models of the broker:
- ProviderId: Supported Git hosting providers
- CsrfToken: State value bound to a provider
- TokenRequest: Token endpoint call for a provider
- TokenExchangeResult: Token endpoint answer
- AuthorizationRedirect: Outcome of the first step
- AuthorizationResult: Outcome of the second step
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict


class ProviderId(str, Enum):
    """Supported Git hosting providers."""
    GITHUB = "github"
    GITLAB = "gitlab"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["ProviderId"]:
        """Return the member for value, or None if unsupported."""
        if not value:
            return None
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class CsrfToken:
    """
    CSRF state for one authorization attempt.

    The same value travels in the authorization URL `state` parameter
    and in the `csrf-token` cookie, prefixed with the provider.
    """
    provider: str
    state: str

    @property
    def cookie_value(self) -> str:
        return f"{self.provider}_{self.state}"


@dataclass(frozen=True)
class TokenRequest:
    """Server-to-server call to a provider's token endpoint."""
    url: str
    body: Dict[str, Any] = field(default_factory=dict)


class TokenExchangeResult(BaseModel):
    """
    Token endpoint answer.

    Either field may be absent. Absence of error does not imply a token.
    """
    model_config = ConfigDict(extra="ignore")

    access_token: Optional[str] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class AuthorizationRedirect:
    """Where to send the browser, and the CSRF token to bind to it."""
    provider: ProviderId
    url: str
    csrf: CsrfToken


@dataclass(frozen=True)
class AuthorizationResult:
    """Outcome of the callback, forwarded to the relay page."""
    provider: ProviderId
    access_token: Optional[str] = None
    error: Optional[str] = None
