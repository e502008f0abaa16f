"""Tests for settings loading from the environment."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from src.config import Settings


def test_reads_sms_variables() -> None:
    settings = Settings.from_env({
        "SMS_APIKEY": "key",
        "SMS_APISECRET": "secret",
        "SMS_NOUNCE": "nonce",
        "SMS_URL": "https://gw.example.test/send",
    })
    assert settings.sms.api_key == "key"
    assert settings.sms.api_secret == "secret"
    assert settings.sms.nonce == "nonce"
    assert settings.sms.url == "https://gw.example.test/send"


def test_defaults() -> None:
    settings = Settings.from_env({})
    assert settings.sms.timeout_seconds == 10.0
    assert settings.sms.log_bodies is False
    assert settings.sms.api_key == ""
    assert settings.email.port == 587
    assert settings.audit_log_path is None
    assert settings.log_level == "INFO"


def test_reads_email_and_ops_variables() -> None:
    settings = Settings.from_env({
        "GMAIL_HOST": "smtp.gmail.com",
        "GMAIL_PORT": "2525",
        "GMAIL_USERNAME": "club@gmail.com",
        "GMAIL_PASSWORD": "pw",
        "AUDIT_LOG_PATH": "data/audit.jsonl",
        "SMS_TIMEOUT_SECONDS": "2.5",
        "SMS_LOG_BODIES": "true",
        "LOG_LEVEL": "debug",
    })
    assert settings.email.host == "smtp.gmail.com"
    assert settings.email.port == 2525
    assert settings.audit_log_path == "data/audit.jsonl"
    assert settings.sms.timeout_seconds == 2.5
    assert settings.sms.log_bodies is True
    assert settings.log_level == "DEBUG"


def test_secrets_hidden_from_repr() -> None:
    settings = Settings.from_env({"SMS_APISECRET": "hunter2", "GMAIL_PASSWORD": "pw-xyz"})
    assert "hunter2" not in repr(settings)
    assert "pw-xyz" not in repr(settings)


def test_settings_are_frozen() -> None:
    settings = Settings.from_env({})
    with pytest.raises(ValidationError):
        settings.sms.api_key = "changed"  # type: ignore[misc]


def test_invalid_timeout_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings.from_env({"SMS_TIMEOUT_SECONDS": "0"})
