"""Configuration provider following Black Box Design principles."""
import os
from dataclasses import dataclass
from typing import Mapping, Optional, Protocol

from ..modules.api.models import DEFAULT_BASE_URL

DEFAULT_TOKEN_HEADER = "Authorization"
DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_DELAY = 1.0
DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class ClientConfig:
    """
    Typeauth client configuration.

    Defaults are applied once at construction and the instance is
    read-only afterwards, so it can be shared by concurrent calls.
    ``retry_delay`` and ``timeout`` are in seconds.
    """
    app_id: str
    base_url: str = DEFAULT_BASE_URL
    token_header: str = DEFAULT_TOKEN_HEADER
    telemetry_enabled: bool = True
    max_retries: int = DEFAULT_MAX_RETRIES
    retry_delay: float = DEFAULT_RETRY_DELAY
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        if not self.app_id:
            raise ValueError("app_id is required")
        if not self.base_url:
            raise ValueError("base_url must not be empty")
        if not self.token_header:
            raise ValueError("token_header must not be empty")
        if self.max_retries < 1:
            raise ValueError(f"max_retries must be >= 1, got {self.max_retries}")
        if self.retry_delay < 0:
            raise ValueError(f"retry_delay must be >= 0, got {self.retry_delay}")
        if self.timeout <= 0:
            raise ValueError(f"timeout must be > 0, got {self.timeout}")

    @property
    def authenticate_url(self) -> str:
        """Endpoint of the remote verification call."""
        return f"{self.base_url.rstrip('/')}/authenticate"


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_client_config(self) -> ClientConfig:
        """Get Typeauth client configuration."""
        ...


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self._environ = os.environ if environ is None else environ

    def _get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        value = self._environ.get(name)
        return value if value else default

    def get_client_config(self) -> ClientConfig:
        """Get Typeauth client configuration from environment variables."""
        app_id = self._get("TYPEAUTH_APP_ID")
        if not app_id:
            raise ValueError(
                "TYPEAUTH_APP_ID environment variable is required. "
                "Set it to the application ID shown in the Typeauth dashboard."
            )

        retry_delay_ms = int(self._get("TYPEAUTH_RETRY_DELAY_MS", str(int(DEFAULT_RETRY_DELAY * 1000))))

        return ClientConfig(
            app_id=app_id,
            base_url=self._get("TYPEAUTH_BASE_URL", DEFAULT_BASE_URL),
            token_header=self._get("TYPEAUTH_TOKEN_HEADER", DEFAULT_TOKEN_HEADER),
            telemetry_enabled=self._get("TYPEAUTH_DISABLE_TELEMETRY", "false").lower() != "true",
            max_retries=int(self._get("TYPEAUTH_MAX_RETRIES", str(DEFAULT_MAX_RETRIES))),
            retry_delay=retry_delay_ms / 1000,
            timeout=float(self._get("TYPEAUTH_TIMEOUT", str(DEFAULT_TIMEOUT))),
        )
