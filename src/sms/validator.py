"""Inbound SMS request validation."""

from __future__ import annotations

from collections.abc import Mapping

import pydantic
from pydantic import BaseModel, ConfigDict, Field

from src.sms.models import OutboundMessageRequest

MAX_MESSAGE_LENGTH = 160
MIN_PHONE_DIGITS = 10

# Reported in this order when several fields fail.
_FIELD_ORDER = ("name", "phoneNumber", "message")


class ValidationError(Exception):
    """Raised when an inbound SMS request is malformed."""

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"{field}: {reason}")


class _SmsForm(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = Field(min_length=1)
    phone_number: str = Field(
        alias="phoneNumber", min_length=MIN_PHONE_DIGITS, pattern=r"^[0-9]+$",
    )
    message: str = Field(min_length=1, max_length=MAX_MESSAGE_LENGTH)


def _reason(error: dict[str, object]) -> str:
    kind = error.get("type")
    if kind == "missing":
        return "is required"
    if kind == "string_pattern_mismatch":
        return "must contain digits only"
    if kind == "string_too_short":
        ctx = error.get("ctx") or {}
        minimum = ctx.get("min_length", 1) if isinstance(ctx, dict) else 1
        return "is required" if minimum == 1 else f"must be at least {minimum} digits"
    if kind == "string_too_long":
        return f"must be at most {MAX_MESSAGE_LENGTH} characters"
    return str(error.get("msg", "is invalid"))


def validate_sms_request(
    raw: Mapping[str, str], correlation_id: str,
) -> OutboundMessageRequest:
    """Turn raw inbound parameters into an ``OutboundMessageRequest``.

    Raises ValidationError naming the first offending inbound field.
    """
    try:
        form = _SmsForm.model_validate(dict(raw))
    except pydantic.ValidationError as exc:
        errors = exc.errors()
        by_field = {str(e["loc"][0]): e for e in errors if e.get("loc")}
        for name in _FIELD_ORDER:
            if name in by_field:
                raise ValidationError(name, _reason(by_field[name])) from None
        raise ValidationError("request", "is invalid") from None

    return OutboundMessageRequest(
        correlation_id=correlation_id,
        recipient_number=form.phone_number,
        body=form.message,
        channel=form.name,
    )
