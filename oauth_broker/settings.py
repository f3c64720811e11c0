"""Application configuration management."""

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv

from oauth_broker import __version__
from oauth_broker.auth.models import ProviderId


@dataclass(frozen=True)
class ProviderCredentials:
    """OAuth application credentials for one Git hosting provider."""

    hostname: str
    client_id: Optional[str] = None
    client_secret: Optional[str] = None

    @property
    def is_configured(self) -> bool:
        """Both client ID and client secret are present."""
        return bool(self.client_id and self.client_secret)


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment."""

    # App
    app_name: str = "Git OAuth Broker"
    app_version: str = __version__
    environment: str = "development"  # development, staging, production

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # Comma-separated patterns, None means no restriction
    allowed_domains: Optional[str] = None

    # OAuth providers
    github: ProviderCredentials = field(
        default_factory=lambda: ProviderCredentials(hostname="github.com")
    )
    gitlab: ProviderCredentials = field(
        default_factory=lambda: ProviderCredentials(hostname="gitlab.com")
    )

    # Logging
    log_level: str = "INFO"
    log_format: str = "text"  # json or text

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "production"

    def credentials_for(self, provider_id: ProviderId) -> ProviderCredentials:
        """
        Get credentials for a provider.

        Args:
            provider_id: Supported provider identifier

        Returns:
            ProviderCredentials for that provider
        """
        if provider_id == ProviderId.GITHUB:
            return self.github
        if provider_id == ProviderId.GITLAB:
            return self.gitlab
        raise ValueError(f"No credentials slot for provider '{provider_id}'")

    @property
    def configured_providers(self) -> List[ProviderId]:
        """Providers that have both client ID and secret."""
        return [p for p in ProviderId if self.credentials_for(p).is_configured]


def load_settings_from_env() -> Settings:
    """Load settings from environment variables."""

    def get_str(key: str, default: Optional[str] = None) -> Optional[str]:
        # Blank values count as unset
        value = os.getenv(key)
        if value is None or not value.strip():
            return default
        return value.strip()

    def get_int(key: str, default: int) -> int:
        value = get_str(key)
        if value is None:
            return default
        try:
            return int(value)
        except ValueError:
            raise ValueError(f"{key} must be an integer, got '{value}'")

    return Settings(
        # App
        app_name=get_str("APP_NAME", "Git OAuth Broker"),
        app_version=get_str("APP_VERSION", __version__),
        environment=get_str("ENVIRONMENT", "development"),

        # Server
        host=get_str("HOST", "0.0.0.0"),
        port=get_int("PORT", 8000),

        allowed_domains=get_str("ALLOWED_DOMAINS"),

        # OAuth - GitHub
        github=ProviderCredentials(
            hostname=get_str("GITHUB_HOSTNAME", "github.com"),
            client_id=get_str("GITHUB_CLIENT_ID"),
            client_secret=get_str("GITHUB_CLIENT_SECRET"),
        ),

        # OAuth - GitLab
        gitlab=ProviderCredentials(
            hostname=get_str("GITLAB_HOSTNAME", "gitlab.com"),
            client_id=get_str("GITLAB_CLIENT_ID"),
            client_secret=get_str("GITLAB_CLIENT_SECRET"),
        ),

        # Logging
        log_level=get_str("LOG_LEVEL", "INFO"),
        log_format=get_str("LOG_FORMAT", "text"),
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance, after loading .env from the working directory."""
    load_dotenv(find_dotenv(usecwd=True))
    return load_settings_from_env()


def clear_settings_cache() -> None:
    """Clear settings cache (for testing)."""
    get_settings.cache_clear()
