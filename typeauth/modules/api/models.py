"""
Typeauth shared data models.

These models define the structure of all data passed between the
authentication pipeline stages and the remote authentication service.
"""

from enum import Enum
from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    ValidationError,
    ValidatorFunctionWrapHandler,
    field_validator,
    model_validator,
)

T = TypeVar("T")

DEFAULT_BASE_URL = "https://api.typeauth.com"
DOCS_BASE_URL = "https://docs.typeauth.com/errors"
MISSING_TOKEN_DOCS = f"{DOCS_BASE_URL}/missing-token"
AUTHENTICATION_DOCS = f"{DOCS_BASE_URL}/authentication"

MISSING_TOKEN_MESSAGE = "Missing token"
AUTHENTICATION_FAILED_MESSAGE = "Typeauth authentication failed"
RETRIES_EXHAUSTED_MESSAGE = "typeauth API request failed after multiple retries"
UNEXPECTED_ERROR_MESSAGE = "Unexpected error occurred"


def http_status_message(status_code: int) -> str:
    """Error message for a non-2xx answer from the authentication service."""
    return f"typeauth API request failed with status: {status_code}"


# Enums


class FailureKind(str, Enum):
    """Why an authentication attempt did not succeed."""

    MISSING_TOKEN = "missing_token"
    TRANSPORT_FAILURE = "transport_failure"
    SERVICE_HTTP_ERROR = "service_http_error"
    SERVICE_SEMANTIC_FAILURE = "service_semantic_failure"
    UNEXPECTED = "unexpected"


# Outbound Models (sent to the authentication service)


class Telemetry(BaseModel):
    """Snapshot of the inbound request sent alongside the verification call."""

    url: str = Field(..., description="URL of the inbound request")
    method: str = Field(..., description="HTTP method of the inbound request")
    headers: Dict[str, str] = Field(default_factory=dict, description="Inbound header snapshot")
    ipaddress: str = Field(default="", description="Remote peer address, empty when unknown")
    timestamp: int = Field(..., description="Capture time in milliseconds since the epoch")


class VerificationRequest(BaseModel):
    """Body of POST {base_url}/authenticate."""

    model_config = ConfigDict(populate_by_name=True)

    token: str = Field(..., min_length=1, description="Credential extracted from the request")
    app_id: str = Field(..., alias="appID", min_length=1, description="Application identity")
    telemetry: Optional[Telemetry] = None

    def to_json(self) -> str:
        """Serialize for the wire; telemetry is omitted entirely when absent."""
        return self.model_dump_json(by_alias=True, exclude_none=True)


# Inbound Models (returned by the authentication service)


def _unreadable_as_none(value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
    try:
        return handler(value)
    except ValidationError:
        return None


class RateLimit(BaseModel):
    """Rate-limit telemetry reported by the service."""

    model_config = ConfigDict(extra="ignore")

    remaining: Optional[int] = None

    @field_validator("remaining", mode="wrap")
    @classmethod
    def read_leniently(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        return _unreadable_as_none(value, handler)


class VerdictRecord(BaseModel):
    """
    A single verdict about the presented token.

    Only ``valid`` decides anything. The other fields are informational
    and read as None when absent, null or of the wrong type.
    """

    model_config = ConfigDict(extra="ignore")

    valid: StrictBool = False
    enabled: Optional[StrictBool] = None
    remaining: Optional[int] = None
    ratelimit: Optional[RateLimit] = None

    @field_validator("enabled", "remaining", "ratelimit", mode="wrap")
    @classmethod
    def read_leniently(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        return _unreadable_as_none(value, handler)


class VerificationOutcome(BaseModel):
    """
    Payload of a 2xx answer from the authentication service.

    Records in ``data`` are kept raw; only the first one is ever parsed,
    so a malformed later record cannot affect the verdict.
    """

    model_config = ConfigDict(extra="ignore")

    success: StrictBool = False
    message: Optional[str] = None
    data: List[Any] = Field(default_factory=list)

    @field_validator("message", mode="wrap")
    @classmethod
    def read_leniently(cls, value: Any, handler: ValidatorFunctionWrapHandler) -> Any:
        return _unreadable_as_none(value, handler)

    def first_verdict(self) -> Optional[VerdictRecord]:
        """
        Parse the first record.

        Raises:
            ValidationError: If the first record is not a verdict object
        """
        if not self.data:
            return None
        return VerdictRecord.model_validate(self.data[0])


# Internal Models (used between pipeline stages)


class TransportResult(BaseModel):
    """Either the decoded response body or a transport-level error."""

    data: Any = None
    error: Optional[str] = None
    status_code: Optional[int] = None
    attempts: int = 0
    kind: Optional[FailureKind] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def succeeded(cls, data: Any, status_code: int, attempts: int) -> "TransportResult":
        return cls(data=data, status_code=status_code, attempts=attempts)

    @classmethod
    def failed(
        cls,
        message: str,
        kind: FailureKind,
        attempts: int,
        status_code: Optional[int] = None,
    ) -> "TransportResult":
        return cls(error=message, kind=kind, attempts=attempts, status_code=status_code)


# Result Models (returned to the caller)


class AuthErrorDetail(BaseModel):
    """Error half of an AuthResult."""

    message: str
    docs: str
    kind: FailureKind = Field(default=FailureKind.UNEXPECTED, exclude=True)


class AuthResult(BaseModel, Generic[T]):
    """
    Outcome of an authenticate call.

    Exactly one of ``result`` and ``error`` is populated.
    """

    result: Optional[T] = None
    error: Optional[AuthErrorDetail] = None

    @model_validator(mode="after")
    def check_exclusive(self) -> "AuthResult[T]":
        if (self.result is None) == (self.error is None):
            raise ValueError("exactly one of 'result' and 'error' must be set")
        return self

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "AuthResult[T]":
        return cls(result=value)

    @classmethod
    def failure(
        cls,
        message: str,
        docs: str = AUTHENTICATION_DOCS,
        kind: FailureKind = FailureKind.UNEXPECTED,
    ) -> "AuthResult[T]":
        return cls(error=AuthErrorDetail(message=message, docs=docs, kind=kind))

    def to_dict(self) -> Dict[str, Any]:
        """Plain ``{"result": ...}`` or ``{"error": {"message", "docs"}}``."""
        return self.model_dump(exclude_none=True)
