"""Shared Pydantic data models for the relay service."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

# --- Enums ---


class ResponseStatus(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


class AuditEventType(str, Enum):
    SMS_DISPATCH = "sms_dispatch"
    EMAIL_DISPATCH = "email_dispatch"


class RiskLevel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    INFO = "info"


# --- API Models ---


class SmsResponse(BaseModel):
    """Body returned by ``POST /api/sms``."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    message: str
    status: ResponseStatus
    request_id: str | None = Field(default=None, alias="requestId")

    def to_wire(self) -> dict[str, str]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class EmailRequest(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    email: str = Field(min_length=3, max_length=254, pattern=r"^[^@\s]+@[^@\s]+$")
    name: str = Field(min_length=1, max_length=200)


# --- Audit Models ---


def _now_iso() -> str:
    return datetime.now(UTC).isoformat()


class AuditEvent(BaseModel):
    timestamp: str = Field(default_factory=_now_iso)
    event_type: AuditEventType
    correlation_id: str | None = None
    action: str
    result: str  # "started" | "success" | "failure" | "completed"
    risk_level: RiskLevel
    details: dict[str, object] | None = None
