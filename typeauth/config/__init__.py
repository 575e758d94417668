"""Client configuration: the ClientConfig value object and its providers."""

from .provider import ClientConfig, ConfigProvider, EnvConfigProvider

__all__ = ["ClientConfig", "ConfigProvider", "EnvConfigProvider"]
