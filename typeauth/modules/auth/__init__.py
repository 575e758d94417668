"""
Authentication Module - Black Box Interface

Purpose: Verify inbound request credentials with the Typeauth service
Interface: Typeauth.authenticate(), TypeauthFactory.build()
Hidden: Token extraction, payload assembly, retries, verdict parsing

Callers only ever see an AuthResult; nothing is raised past the facade.
"""

from .extractor import extract_token
from .factory import TypeauthFactory
from .interfaces import Authenticator, InboundRequest
from .service import Typeauth
from .transport import ResilientTransport

__all__ = [
    "Authenticator",
    "InboundRequest",
    "ResilientTransport",
    "Typeauth",
    "TypeauthFactory",
    "extract_token",
]
