"""
API Module - Black Box Interface

Purpose: Wire and result models shared by the authentication pipeline
Interface: pydantic models, failure taxonomy, docs links and messages
Hidden: Serialization details (wire aliases, omitted fields)
"""

from .models import (
    AUTHENTICATION_DOCS,
    DEFAULT_BASE_URL,
    MISSING_TOKEN_DOCS,
    AuthErrorDetail,
    AuthResult,
    FailureKind,
    RateLimit,
    Telemetry,
    TransportResult,
    VerdictRecord,
    VerificationOutcome,
    VerificationRequest,
)

__all__ = [
    "AUTHENTICATION_DOCS",
    "DEFAULT_BASE_URL",
    "MISSING_TOKEN_DOCS",
    "AuthErrorDetail",
    "AuthResult",
    "FailureKind",
    "RateLimit",
    "Telemetry",
    "TransportResult",
    "VerdictRecord",
    "VerificationOutcome",
    "VerificationRequest",
]
