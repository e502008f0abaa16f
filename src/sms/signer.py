"""Canonical request serialization and HMAC-SHA512 signing for the SMS gateway.

The gateway authenticates each call by recomputing
``base64(HMAC-SHA512(secret, " {key} {nonce} {body} "))`` over the exact body
bytes it receives, so the digest layout, field order and encoding here are
part of the wire contract.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import json

from src.config import SmsGatewaySettings
from src.sms.models import OutboundMessageRequest, SignedEnvelope

_SEPARATOR = " "


class ConfigurationError(Exception):
    """Raised when gateway credentials are missing."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(f"Missing SMS gateway settings: {', '.join(missing)}")


def canonical_body(request: OutboundMessageRequest) -> bytes:
    payload = {
        "requestId": request.correlation_id,
        "mobileNumber": request.recipient_number,
        "message": request.body,
        "channel": request.channel,
    }
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode()


def digest_string(api_key: str, nonce: str, body: bytes) -> bytes:
    return _SEPARATOR.join(["", api_key, nonce, body.decode(), ""]).encode()


def sign(api_secret: str, digest: bytes) -> str:
    mac = hmac.new(api_secret.encode(), digest, hashlib.sha512).digest()
    return base64.b64encode(mac).decode()


class SignedRequestBuilder:
    """Builds signed envelopes from validated requests."""

    def __init__(self, credentials: SmsGatewaySettings) -> None:
        self._credentials = credentials

    def check_credentials(self) -> None:
        missing = [
            env_name
            for env_name, value in (
                ("SMS_APIKEY", self._credentials.api_key),
                ("SMS_APISECRET", self._credentials.api_secret),
                ("SMS_NOUNCE", self._credentials.nonce),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(missing)

    def build(self, request: OutboundMessageRequest) -> SignedEnvelope:
        self.check_credentials()
        creds = self._credentials
        body = canonical_body(request)
        signature = sign(creds.api_secret, digest_string(creds.api_key, creds.nonce, body))
        return SignedEnvelope(
            canonical_body=body,
            signature=signature,
            api_key=creds.api_key,
            nonce=creds.nonce,
        )
