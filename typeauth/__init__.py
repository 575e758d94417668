"""
Typeauth - Request Authentication Client

Verifies the credential carried by an inbound HTTP request with the
Typeauth authentication service.

Architecture:
- Each module is self-contained with clear interfaces
- Modules are completely replaceable
- No module knows the internals of another
- All communication through defined interfaces

Modules:
- auth: Token extraction, verification call, verdict interpretation
- api: Wire and result models
- middleware: FastAPI/Starlette integration
"""

from .config.provider import ClientConfig, EnvConfigProvider
from .modules.api.models import AuthResult, FailureKind
from .modules.auth import InboundRequest, Typeauth, TypeauthFactory

__version__ = "1.0.0"

__all__ = [
    "AuthResult",
    "ClientConfig",
    "EnvConfigProvider",
    "FailureKind",
    "InboundRequest",
    "Typeauth",
    "TypeauthFactory",
]
