"""Mapping of the service's answer to an AuthResult."""

import logging
from typing import Optional

from pydantic import ValidationError

from ..api.models import (
    AUTHENTICATION_DOCS,
    AUTHENTICATION_FAILED_MESSAGE,
    AuthResult,
    FailureKind,
    TransportResult,
    VerificationOutcome,
)

logger = logging.getLogger(__name__)


def interpret(transport_result: TransportResult) -> AuthResult[bool]:
    """
    Turn a transport result into the caller-facing verdict.

    Success requires ``success`` to be true and the first verdict record
    to be present and valid. Later records are never read. Every other
    outcome is an error carrying the authentication docs link.
    """
    if not transport_result.ok:
        return AuthResult[bool].failure(
            transport_result.error,
            docs=AUTHENTICATION_DOCS,
            kind=transport_result.kind or FailureKind.TRANSPORT_FAILURE,
        )

    try:
        outcome = VerificationOutcome.model_validate(transport_result.data)
        verdict = outcome.first_verdict()
    except ValidationError as e:
        logger.warning(f"Unrecognized verification payload: {e.error_count()} validation errors")
        message = None
        if isinstance(transport_result.data, dict):
            message = transport_result.data.get("message")
        return _semantic_failure(message if isinstance(message, str) else None)

    if outcome.success and verdict is not None and verdict.valid:
        ratelimit_remaining = verdict.ratelimit.remaining if verdict.ratelimit else None
        logger.debug(
            f"Token accepted (enabled={verdict.enabled}, remaining={verdict.remaining}, "
            f"ratelimit.remaining={ratelimit_remaining})"
        )
        return AuthResult[bool].success(True)

    logger.info(
        f"Token rejected (success={outcome.success}, "
        f"valid={verdict.valid if verdict else None}, enabled={verdict.enabled if verdict else None})"
    )
    return _semantic_failure(outcome.message)


def _semantic_failure(message: Optional[str]) -> AuthResult[bool]:
    return AuthResult[bool].failure(
        message or AUTHENTICATION_FAILED_MESSAGE,
        docs=AUTHENTICATION_DOCS,
        kind=FailureKind.SERVICE_SEMANTIC_FAILURE,
    )
