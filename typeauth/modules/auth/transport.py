"""
Resilient HTTP transport for the Typeauth verification call.

Retries only transport-level failures, with a fixed delay between
attempts. Any HTTP answer is definitive: a 2xx body is returned as data
and a non-2xx status is returned as an error without retrying.
"""

import asyncio
import logging
from typing import Dict, Optional

import httpx

from ..api.models import (
    RETRIES_EXHAUSTED_MESSAGE,
    UNEXPECTED_ERROR_MESSAGE,
    FailureKind,
    TransportResult,
    http_status_message,
)
from ...config.provider import DEFAULT_MAX_RETRIES, DEFAULT_RETRY_DELAY, DEFAULT_TIMEOUT, ClientConfig
from .interfaces import Sleep

logger = logging.getLogger(__name__)


class ResilientTransport:
    """
    Sends one request with bounded retry and fixed-delay backoff.

    The transport owns no connection pool. When an ``httpx.AsyncClient``
    is injected it is reused and left open; otherwise a client is opened
    for the duration of each ``send`` call.
    """

    def __init__(
        self,
        max_retries: int = DEFAULT_MAX_RETRIES,
        retry_delay: float = DEFAULT_RETRY_DELAY,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: Optional[httpx.AsyncClient] = None,
        sleep: Sleep = asyncio.sleep,
    ):
        """
        Initialize transport.

        Args:
            max_retries: Total number of attempts, at least 1
            retry_delay: Seconds to wait between failed attempts
            timeout: Per-attempt timeout for clients opened by the transport
            http_client: Optional shared AsyncClient
            sleep: Coroutine used for the backoff wait
        """
        if max_retries < 1:
            raise ValueError(f"max_retries must be >= 1, got {max_retries}")
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.timeout = timeout
        self._http_client = http_client
        self._sleep = sleep

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        http_client: Optional[httpx.AsyncClient] = None,
        sleep: Sleep = asyncio.sleep,
    ) -> "ResilientTransport":
        return cls(
            max_retries=config.max_retries,
            retry_delay=config.retry_delay,
            timeout=config.timeout,
            http_client=http_client,
            sleep=sleep,
        )

    async def send(self, url: str, method: str, headers: Dict[str, str], body: str) -> TransportResult:
        """
        Perform the call, retrying transport failures.

        Returns:
            TransportResult carrying either the decoded JSON body or an error
        """
        if self._http_client is not None:
            return await self._send_with(self._http_client, url, method, headers, body)

        async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
            return await self._send_with(client, url, method, headers, body)

    async def _send_with(
        self,
        client: httpx.AsyncClient,
        url: str,
        method: str,
        headers: Dict[str, str],
        body: str,
    ) -> TransportResult:
        for attempt in range(1, self.max_retries + 1):
            result = await self._attempt(client, attempt, url, method, headers, body)
            if result is not None:
                return result

            if attempt == self.max_retries:
                logger.warning(f"Giving up on {method} {url} after {attempt} attempts")
                return TransportResult.failed(
                    RETRIES_EXHAUSTED_MESSAGE,
                    kind=FailureKind.TRANSPORT_FAILURE,
                    attempts=attempt,
                )

            logger.debug(f"Retrying {method} {url} in {self.retry_delay}s")
            await self._sleep(self.retry_delay)

        return TransportResult.failed(
            UNEXPECTED_ERROR_MESSAGE,
            kind=FailureKind.UNEXPECTED,
            attempts=self.max_retries,
        )

    async def _attempt(
        self,
        client: httpx.AsyncClient,
        attempt: int,
        url: str,
        method: str,
        headers: Dict[str, str],
        body: str,
    ) -> Optional[TransportResult]:
        """
        Run one attempt.

        Returns:
            A terminal TransportResult, or None when the attempt should be retried
        """
        logger.debug(f"{method} {url} (attempt {attempt}/{self.max_retries})")
        try:
            response = await client.request(method, url, headers=headers, content=body)
        except httpx.RequestError as e:
            logger.warning(f"Attempt {attempt}/{self.max_retries} to {url} failed: {e!r}")
            return None

        if not response.is_success:
            logger.warning(f"{method} {url} answered with status {response.status_code}")
            return TransportResult.failed(
                http_status_message(response.status_code),
                kind=FailureKind.SERVICE_HTTP_ERROR,
                attempts=attempt,
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            logger.warning(f"Attempt {attempt}/{self.max_retries}: undecodable body from {url}: {e}")
            return None

        return TransportResult.succeeded(data, status_code=response.status_code, attempts=attempt)
