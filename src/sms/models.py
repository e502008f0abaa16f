"""Data models for the SMS dispatch pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.models import SmsResponse

_AUTH_SCHEME = "HmacSHA512"


class OutboundMessageRequest(BaseModel):
    """A validated SMS send request, bound to one correlation id."""

    model_config = ConfigDict(frozen=True)

    correlation_id: str = Field(min_length=1)
    recipient_number: str = Field(min_length=10, pattern=r"^[0-9]+$")
    body: str = Field(min_length=1, max_length=160)
    channel: str = Field(min_length=1)


@dataclass(frozen=True)
class SignedEnvelope:
    """Canonical body plus the material for the gateway Authorization header."""

    canonical_body: bytes
    signature: str = field(repr=False)
    api_key: str
    nonce: str = field(repr=False)

    @property
    def authorization(self) -> str:
        return f"{_AUTH_SCHEME} {self.api_key}:{self.nonce}:{self.signature}"

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Content-Type": "application/json",
            "Authorization": self.authorization,
        }


@dataclass
class GatewayResponse:
    """Raw gateway reply, consumed immediately by the response mapper."""

    http_status: int
    raw_body: bytes
    message: str = ""

    @property
    def success(self) -> bool:
        return self.http_status < 400


@dataclass(frozen=True)
class Success:
    message: str
    correlation_id: str


@dataclass(frozen=True)
class GatewayError:
    http_status: int
    detail: dict[str, Any] | str


@dataclass(frozen=True)
class DispatchOutcome:
    """What the HTTP layer sends back for one SMS request."""

    status_code: int
    response: SmsResponse
