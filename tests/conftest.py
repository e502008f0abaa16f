"""Shared test fixtures for the relay service."""

from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

from src.audit.logger import AuditLogger
from src.config import Settings, SmsGatewaySettings, SmtpSettings
from src.models import AuditEvent, AuditEventType, RiskLevel
from src.sms.models import OutboundMessageRequest

SMS_URL = "https://sms.example.test/api/send"


@pytest.fixture
def mock_audit_logger() -> MagicMock:
    return MagicMock(spec=AuditLogger)


@pytest.fixture
def valid_params() -> dict[str, str]:
    return {"name": "club", "phoneNumber": "5551234567", "message": "hi"}


# --- Factory functions for test data ---


def make_sms_settings(**kwargs: Any) -> SmsGatewaySettings:
    """Factory for SmsGatewaySettings with working credentials."""
    defaults: dict[str, Any] = {
        "api_key": "K",
        "api_secret": "S",
        "nonce": "N",
        "url": SMS_URL,
        "timeout_seconds": 10.0,
    }
    defaults.update(kwargs)
    return SmsGatewaySettings(**defaults)


def make_smtp_settings(**kwargs: Any) -> SmtpSettings:
    defaults: dict[str, Any] = {
        "host": "smtp.example.test",
        "port": 587,
        "username": "club@example.test",
        "password": "pw",
    }
    defaults.update(kwargs)
    return SmtpSettings(**defaults)


def make_settings(**kwargs: Any) -> Settings:
    defaults: dict[str, Any] = {
        "sms": make_sms_settings(),
        "email": make_smtp_settings(),
        "static_dir": "does-not-exist",
    }
    defaults.update(kwargs)
    return Settings(**defaults)


def make_outbound_request(**kwargs: Any) -> OutboundMessageRequest:
    defaults: dict[str, Any] = {
        "correlation_id": "r",
        "recipient_number": "5551234567",
        "body": "hi",
        "channel": "c",
    }
    defaults.update(kwargs)
    return OutboundMessageRequest(**defaults)


def make_audit_event(**kwargs: Any) -> AuditEvent:
    defaults: dict[str, Any] = {
        "event_type": AuditEventType.SMS_DISPATCH,
        "correlation_id": "abc123",
        "action": "test_action",
        "result": "success",
        "risk_level": RiskLevel.INFO,
    }
    defaults.update(kwargs)
    return AuditEvent(**defaults)


def read_events(log_path: Path) -> Iterator[dict[str, Any]]:
    """Yield parsed entries from one audit log file, oldest first."""
    if not log_path.exists():
        return
    with open(log_path) as f:
        for line in f:
            line = line.strip()
            if line:
                yield json.loads(line)
