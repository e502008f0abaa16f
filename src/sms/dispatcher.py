"""SMS dispatch pipeline.

Stages, all inside one trace:
1. Validate inbound parameters
2. Check gateway configuration
3. Build the signed envelope
4. POST to the gateway
5. Map the reply
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

import httpx

from src.audit.logger import AuditLogger
from src.config import SmsGatewaySettings
from src.models import ResponseStatus, SmsResponse
from src.sms.gateway import GatewayClient, TransportError
from src.sms.mapper import map_response, map_transport_failure, to_outcome
from src.sms.models import DispatchOutcome, GatewayError
from src.sms.signer import ConfigurationError, SignedRequestBuilder
from src.sms.tracer import RequestTracer
from src.sms.validator import ValidationError, validate_sms_request

logger = logging.getLogger(__name__)

CONFIGURATION_ERROR_MESSAGE = "Server configuration error"


def _mask_number(number: str) -> str:
    return f"***{number[-4:]}"


class SmsDispatcher:
    """Runs one SMS request through the pipeline and always returns an outcome."""

    def __init__(
        self,
        settings: SmsGatewaySettings,
        transport: httpx.AsyncBaseTransport | None = None,
        audit_logger: AuditLogger | None = None,
    ) -> None:
        self._settings = settings
        self._builder = SignedRequestBuilder(settings)
        self._client = GatewayClient(
            settings.url, timeout=settings.timeout_seconds, transport=transport,
        )
        self._tracer = RequestTracer(
            audit_logger=audit_logger, log_bodies=settings.log_bodies,
        )

    async def dispatch(self, raw: Mapping[str, str]) -> DispatchOutcome:
        with self._tracer.trace() as trace:
            try:
                request = validate_sms_request(raw, trace.correlation_id)
            except ValidationError as exc:
                trace.failure("validation", field=exc.field, reason=exc.reason)
                return DispatchOutcome(
                    status_code=400,
                    response=SmsResponse(
                        message=f"Invalid {exc.field}: {exc.reason}",
                        status=ResponseStatus.ERROR,
                    ),
                )

            try:
                if not self._settings.url:
                    raise ConfigurationError(["SMS_URL"])
                envelope = self._builder.build(request)
            except ConfigurationError as exc:
                trace.failure("configuration", missing=exc.missing)
                return DispatchOutcome(
                    status_code=500,
                    response=SmsResponse(
                        message=CONFIGURATION_ERROR_MESSAGE, status=ResponseStatus.ERROR,
                    ),
                )

            trace.body("gateway request", envelope.canonical_body)
            trace.event(
                "gateway_send",
                channel=request.channel,
                recipient=_mask_number(request.recipient_number),
            )

            try:
                reply = await self._client.send(envelope)
            except TransportError as exc:
                trace.failure("transport", error=str(exc))
                return to_outcome(map_transport_failure())

            trace.body("gateway response", reply.raw_body)
            result = map_response(reply, request.correlation_id)
            if isinstance(result, GatewayError):
                trace.failure(
                    "gateway",
                    gateway_status=reply.http_status,
                    status_code=result.http_status,
                )
            else:
                trace.event("sms_sent", gateway_status=reply.http_status)
            return to_outcome(result)
