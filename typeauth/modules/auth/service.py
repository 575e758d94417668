"""
Authentication Service Facade following Black Box Design principles.

This module provides:
- The Typeauth client, a single ``authenticate`` entry point
- Wiring of extraction, request building, transport and interpretation
- A never-raising contract: every failure resolves to an AuthResult error
"""

import asyncio
import logging
import time
from typing import Any, Optional

import httpx

from ..api.models import (
    AUTHENTICATION_DOCS,
    MISSING_TOKEN_DOCS,
    MISSING_TOKEN_MESSAGE,
    UNEXPECTED_ERROR_MESSAGE,
    AuthResult,
    FailureKind,
)
from ...config.provider import ClientConfig
from .extractor import extract_token
from .interfaces import Clock, InboundRequest, Sleep
from .interpreter import interpret
from .request_builder import build_verification_request
from .transport import ResilientTransport

logger = logging.getLogger(__name__)

JSON_HEADERS = {"Content-Type": "application/json"}


class Typeauth:
    """
    Client for the Typeauth authentication service.

    The configuration is fixed at construction and never mutated, so one
    instance can serve concurrent ``authenticate`` calls without locking.

    Example:
        >>> client = Typeauth(app_id="my-app")
        >>> result = await client.authenticate(request)
        >>> if result.ok: ...
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        sleep: Sleep = asyncio.sleep,
        clock: Clock = time.time,
        **options: Any,
    ):
        """
        Initialize the client.

        Args:
            config: Complete configuration; mutually exclusive with ``options``
            http_client: Optional shared AsyncClient (never closed by Typeauth)
            sleep: Coroutine used for retry backoff
            clock: Time source for telemetry timestamps
            **options: ClientConfig fields, ``app_id`` required

        Raises:
            TypeError: If both a config and keyword options are given
            ValueError: If the configuration is invalid
        """
        if config is None:
            config = ClientConfig(**options)
        elif options:
            raise TypeError("Pass either a ClientConfig or keyword options, not both")

        self._config = config
        self._clock = clock
        self._transport = ResilientTransport.from_config(config, http_client=http_client, sleep=sleep)

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def authenticate(self, request: Any) -> AuthResult[bool]:
        """
        Authenticate an inbound request against the Typeauth service.

        Args:
            request: InboundRequest, Starlette/FastAPI request, or any object
                exposing ``url``, ``method`` and ``headers``

        Returns:
            AuthResult with ``result=True`` or an error with message and docs
        """
        try:
            return await self._authenticate(request)
        except Exception:
            logger.exception("Unexpected error during authentication")
            return AuthResult[bool].failure(
                UNEXPECTED_ERROR_MESSAGE,
                docs=AUTHENTICATION_DOCS,
                kind=FailureKind.UNEXPECTED,
            )

    async def _authenticate(self, request: Any) -> AuthResult[bool]:
        inbound = InboundRequest.from_request(request)

        token = extract_token(inbound.headers, self._config.token_header)
        if token is None:
            logger.warning(f"Request to {inbound.url} without {self._config.token_header} credential")
            return AuthResult[bool].failure(
                MISSING_TOKEN_MESSAGE,
                docs=MISSING_TOKEN_DOCS,
                kind=FailureKind.MISSING_TOKEN,
            )

        verification = build_verification_request(
            token,
            self._config.app_id,
            inbound,
            telemetry_enabled=self._config.telemetry_enabled,
            clock=self._clock,
        )

        transport_result = await self._transport.send(
            self._config.authenticate_url,
            "POST",
            dict(JSON_HEADERS),
            verification.to_json(),
        )
        return interpret(transport_result)
