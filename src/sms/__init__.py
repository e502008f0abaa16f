"""SMS dispatch adapter.

Validates inbound requests, signs them for the HMAC-SHA512 gateway,
POSTs them with a bounded timeout and maps the reply back to the caller,
all under one correlation id per request.
"""

from src.sms.dispatcher import SmsDispatcher
from src.sms.gateway import GatewayClient, TransportError
from src.sms.mapper import map_response, map_transport_failure
from src.sms.models import (
    DispatchOutcome,
    GatewayError,
    GatewayResponse,
    OutboundMessageRequest,
    SignedEnvelope,
    Success,
)
from src.sms.signer import ConfigurationError, SignedRequestBuilder
from src.sms.tracer import RequestTracer, Trace, new_correlation_id
from src.sms.validator import ValidationError, validate_sms_request

__all__ = [
    # Exceptions
    "ConfigurationError",
    "TransportError",
    "ValidationError",
    # Components
    "GatewayClient",
    "RequestTracer",
    "SignedRequestBuilder",
    "SmsDispatcher",
    "Trace",
    # Functions
    "map_response",
    "map_transport_failure",
    "new_correlation_id",
    "validate_sms_request",
    # Models
    "DispatchOutcome",
    "GatewayError",
    "GatewayResponse",
    "OutboundMessageRequest",
    "SignedEnvelope",
    "Success",
]
