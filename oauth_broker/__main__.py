"""
Run the broker with uvicorn.

    python -m oauth_broker
"""

import logging

import uvicorn

from oauth_broker.api.main import create_app
from oauth_broker.core.logging import configure_logging
from oauth_broker.settings import get_settings

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()
    configure_logging(level=settings.log_level, format_type=settings.log_format)

    logger.info(f"Starting {settings.app_name} {settings.app_version} ({settings.environment})")

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        # Callback origin must reflect the public scheme/host behind a proxy,
        # trusted proxies come from FORWARDED_ALLOW_IPS
        proxy_headers=True,
        log_config=None,
    )


if __name__ == "__main__":
    main()
