"""Assembly of the outbound verification payload."""

import time
from typing import Optional

from ..api.models import Telemetry, VerificationRequest
from .interfaces import Clock, InboundRequest


def capture_telemetry(request: InboundRequest, clock: Clock = time.time) -> Telemetry:
    """
    Snapshot the inbound request for the service's observability.

    Header names come out lower-cased and repeated headers are joined,
    so every header present on the request appears exactly once.
    """
    return Telemetry(
        url=request.url,
        method=request.method,
        headers={name: value for name, value in request.headers.items()},
        ipaddress=request.remote_address or "",
        timestamp=int(clock() * 1000),
    )


def build_verification_request(
    token: str,
    app_id: str,
    request: InboundRequest,
    telemetry_enabled: bool = True,
    clock: Clock = time.time,
) -> VerificationRequest:
    """
    Build the body of the verification call.

    Args:
        token: Extracted credential
        app_id: Configured application identity
        request: Inbound request view, used for telemetry
        telemetry_enabled: Whether to attach the telemetry snapshot
        clock: Time source in seconds since the epoch

    Returns:
        VerificationRequest ready for ``to_json()``
    """
    telemetry: Optional[Telemetry] = None
    if telemetry_enabled:
        telemetry = capture_telemetry(request, clock)

    return VerificationRequest(token=token, app_id=app_id, telemetry=telemetry)
