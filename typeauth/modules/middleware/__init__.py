"""
Authentication Middleware Module - Black Box Interface

Purpose: Guard FastAPI/Starlette applications with Typeauth
Interface: TypeauthMiddleware, create_typeauth_middleware()
Hidden: Skip-path matching, error response formatting

Register with ``app.middleware("http")(create_typeauth_middleware(client))``.
"""

import logging
from typing import Dict, List, Optional

from fastapi import Request
from fastapi.responses import JSONResponse

from ..auth.interfaces import Authenticator

logger = logging.getLogger(__name__)


class TypeauthMiddleware:
    """
    HTTP middleware that authenticates every request through Typeauth.

    Requests whose (path, method) appear in ``skip_paths`` pass through
    untouched. Failed authentication short-circuits with a JSON error.
    """

    def __init__(
        self,
        client: Authenticator,
        skip_paths: Optional[Dict[str, List[str]]] = None,
        error_status: int = 401,
        log_attempts: bool = True
    ):
        """
        Initialize Typeauth middleware.

        Args:
            client: Typeauth client (or anything with ``authenticate``)
            skip_paths: Dict of {path: [methods]} to skip authentication
            error_status: HTTP status returned when authentication fails
            log_attempts: Whether to log authentication attempts
        """
        self.client = client
        self.skip_paths = skip_paths or {}
        self.error_status = error_status
        self.log_attempts = log_attempts

    def should_skip_auth(self, request: Request) -> bool:
        """Check if authentication should be skipped for this request."""
        path = str(request.url.path)
        method = request.method.upper()

        if path in self.skip_paths:
            allowed_methods = self.skip_paths[path]
            if "*" in allowed_methods or method in allowed_methods:
                return True

        return False

    async def __call__(self, request: Request, call_next):
        """Process the request through Typeauth authentication."""
        if self.should_skip_auth(request):
            if self.log_attempts:
                logger.debug(f"Skipping auth for {request.method} {request.url.path}")
            return await call_next(request)

        result = await self.client.authenticate(request)

        if not result.ok:
            if self.log_attempts:
                logger.warning(
                    f"Authentication failed for {request.method} {request.url.path}: {result.error.message}"
                )
            return JSONResponse(status_code=self.error_status, content=result.to_dict())

        if self.log_attempts:
            logger.info(f"Request authenticated for {request.method} {request.url.path}")

        request.state.typeauth_authenticated = True
        return await call_next(request)


def create_typeauth_middleware(
    client: Authenticator,
    skip_paths: Optional[Dict[str, List[str]]] = None,
    error_status: int = 401
) -> TypeauthMiddleware:
    """
    Factory function to create Typeauth middleware.

    Args:
        client: Typeauth client
        skip_paths: Paths to skip authentication {"/path": ["GET", "POST"]}
        error_status: HTTP status for rejected requests

    Returns:
        Configured TypeauthMiddleware instance
    """
    default_skip_paths = {
        "/health": ["GET"],
        "/metrics": ["GET"],
    }

    if skip_paths:
        default_skip_paths.update(skip_paths)

    return TypeauthMiddleware(
        client=client,
        skip_paths=default_skip_paths,
        error_status=error_status
    )


__all__ = [
    "TypeauthMiddleware",
    "create_typeauth_middleware",
]
