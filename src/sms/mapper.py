"""Maps gateway replies onto the adapter's result types."""

from __future__ import annotations

import json
from typing import Any

from src.models import ResponseStatus, SmsResponse
from src.sms.models import DispatchOutcome, GatewayError, GatewayResponse, Success

SUCCESS_MESSAGE = "SMS sent successfully"
UNDECODABLE_ERROR_DETAIL = "SMS service returned an error"
TRANSPORT_ERROR_DETAIL = "Failed to connect to SMS service"
BAD_GATEWAY = 502


def _decode_mapping(raw: bytes) -> dict[str, Any] | None:
    try:
        decoded = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    if not isinstance(decoded, dict):
        return None
    return decoded


def map_response(response: GatewayResponse, correlation_id: str) -> Success | GatewayError:
    """Classify a gateway reply.

    Error replies whose body is not a JSON object are reported as 502
    rather than with the gateway's own status.
    """
    if response.success:
        return Success(message=SUCCESS_MESSAGE, correlation_id=correlation_id)

    detail = _decode_mapping(response.raw_body)
    if detail is None:
        return GatewayError(http_status=BAD_GATEWAY, detail=UNDECODABLE_ERROR_DETAIL)
    return GatewayError(http_status=response.http_status, detail=detail)


def map_transport_failure() -> GatewayError:
    return GatewayError(http_status=BAD_GATEWAY, detail=TRANSPORT_ERROR_DETAIL)


def to_outcome(result: Success | GatewayError) -> DispatchOutcome:
    if isinstance(result, Success):
        return DispatchOutcome(
            status_code=200,
            response=SmsResponse(
                message=result.message,
                status=ResponseStatus.SUCCESS,
                request_id=result.correlation_id,
            ),
        )
    if isinstance(result.detail, dict):
        message = f"SMS service error: {result.detail}"
    else:
        message = result.detail
    return DispatchOutcome(
        status_code=result.http_status,
        response=SmsResponse(message=message, status=ResponseStatus.ERROR),
    )
