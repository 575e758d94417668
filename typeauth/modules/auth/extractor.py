"""Credential extraction from inbound request headers."""

from typing import Optional

import httpx

from .interfaces import HeaderSource

AUTHORIZATION_HEADER = "Authorization"
BEARER_PREFIX = "Bearer "


def extract_token(headers: HeaderSource, header_name: str = AUTHORIZATION_HEADER) -> Optional[str]:
    """
    Pull the credential out of the configured header.

    Lookup is case-insensitive. When the configured header is
    ``Authorization`` a single leading ``"Bearer "`` is stripped; any
    other header is returned verbatim.

    Args:
        headers: Inbound headers
        header_name: Configured token header

    Returns:
        The token, or None if the header is absent or empty
    """
    if not isinstance(headers, httpx.Headers):
        headers = httpx.Headers(headers)

    token = headers.get(header_name)
    if not token:
        return None

    if header_name == AUTHORIZATION_HEADER and token.startswith(BEARER_PREFIX):
        return token[len(BEARER_PREFIX):] or None

    return token
