"""
Authentication Factory following Black Box Design principles.

This factory:
- Reads configuration through a ConfigProvider
- Wires the optional shared HTTP client
- Returns only the Typeauth facade
"""

import logging
from typing import Optional

import httpx

from ...config.provider import ConfigProvider, EnvConfigProvider
from .service import Typeauth

logger = logging.getLogger(__name__)


class TypeauthFactory:
    """Composition root for the Typeauth client."""

    @staticmethod
    def build(
        config_provider: Optional[ConfigProvider] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> Typeauth:
        """
        Build a Typeauth client.

        Args:
            config_provider: Configuration provider (environment by default)
            http_client: Optional shared AsyncClient

        Returns:
            Configured Typeauth facade
        """
        provider = config_provider or EnvConfigProvider()
        config = provider.get_client_config()

        logger.info(
            f"Building Typeauth client for app {config.app_id} against {config.base_url} "
            f"(telemetry={'on' if config.telemetry_enabled else 'off'}, max_retries={config.max_retries})"
        )
        return Typeauth(config, http_client=http_client)
