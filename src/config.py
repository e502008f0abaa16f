"""Process settings, read once from the environment at startup."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

_TRUTHY = {"1", "true", "yes", "on"}
_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class SmsGatewaySettings(BaseModel):
    """Credentials and endpoint for the HMAC-signed SMS gateway."""

    model_config = ConfigDict(frozen=True)

    api_key: str = ""
    api_secret: str = Field(default="", repr=False)
    nonce: str = Field(default="", repr=False)
    url: str = ""
    timeout_seconds: float = Field(default=10.0, gt=0)
    log_bodies: bool = False


class SmtpSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    host: str = ""
    port: int = Field(default=587, gt=0, le=65535)
    username: str = ""
    password: str = Field(default="", repr=False)
    timeout_seconds: float = Field(default=30.0, gt=0)
    sender_name: str = "Software Club"
    subject: str = "Welcome to Software club"


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    sms: SmsGatewaySettings = Field(default_factory=SmsGatewaySettings)
    email: SmtpSettings = Field(default_factory=SmtpSettings)
    audit_log_path: str | None = None
    audit_log_max_bytes: int = Field(default=10_485_760, gt=0)
    audit_log_backup_count: int = Field(default=5, ge=0)
    static_dir: str = "src/template"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        """Build settings from environment variables.

        Empty credentials are allowed here; they surface per request as
        configuration errors so the rest of the service keeps serving.
        """
        env = os.environ if environ is None else environ
        sms = SmsGatewaySettings(
            api_key=env.get("SMS_APIKEY", ""),
            api_secret=env.get("SMS_APISECRET", ""),
            nonce=env.get("SMS_NOUNCE", ""),
            url=env.get("SMS_URL", ""),
            timeout_seconds=float(env.get("SMS_TIMEOUT_SECONDS", "10")),
            log_bodies=env.get("SMS_LOG_BODIES", "").strip().lower() in _TRUTHY,
        )
        email = SmtpSettings(
            host=env.get("GMAIL_HOST", ""),
            port=int(env.get("GMAIL_PORT", "587")),
            username=env.get("GMAIL_USERNAME", ""),
            password=env.get("GMAIL_PASSWORD", ""),
        )
        return cls(
            sms=sms,
            email=email,
            audit_log_path=env.get("AUDIT_LOG_PATH") or None,
            audit_log_max_bytes=int(env.get("AUDIT_LOG_MAX_BYTES", "10485760")),
            audit_log_backup_count=int(env.get("AUDIT_LOG_BACKUP_COUNT", "5")),
            static_dir=env.get("STATIC_DIR", "src/template"),
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=_LOG_FORMAT)
