"""HTTP client for the SMS gateway."""

from __future__ import annotations

import asyncio
import logging

import httpx

from src.sms.models import GatewayResponse, SignedEnvelope

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


class TransportError(Exception):
    """Raised when the gateway cannot be reached or does not answer in time."""


class GatewayClient:
    """POSTs signed envelopes to the gateway.

    Every HTTP status comes back as a ``GatewayResponse``; only network,
    TLS and timeout failures raise. Nothing is retried.
    """

    def __init__(
        self,
        url: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = url
        self._timeout = timeout
        self._transport = transport

    async def send(self, envelope: SignedEnvelope) -> GatewayResponse:
        try:
            # Bounds the whole exchange, not just each socket operation.
            async with asyncio.timeout(self._timeout):
                return await self._post(envelope)
        except (TimeoutError, httpx.TimeoutException) as exc:
            raise TransportError(f"SMS gateway timed out after {self._timeout}s") from exc
        except (httpx.TransportError, httpx.InvalidURL) as exc:
            raise TransportError(f"SMS gateway unreachable: {exc.__class__.__name__}") from exc

    async def _post(self, envelope: SignedEnvelope) -> GatewayResponse:
        async with httpx.AsyncClient(
            transport=self._transport, timeout=self._timeout, verify=True,
        ) as client:
            async with client.stream(
                "POST",
                self._url,
                content=envelope.canonical_body,
                headers=envelope.headers,
            ) as resp:
                body = await resp.aread()
                return GatewayResponse(
                    http_status=resp.status_code,
                    raw_body=body,
                    message=resp.reason_phrase,
                )
