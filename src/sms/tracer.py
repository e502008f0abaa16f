"""Per-request correlation ids and structured trace events."""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Iterator
from contextlib import contextmanager

from src.audit.logger import AuditLogger
from src.models import AuditEvent, AuditEventType, RiskLevel

logger = logging.getLogger(__name__)

DISPLAY_ID_LENGTH = 16
REDACTED = "[redacted]"
_SENSITIVE_KEYS = frozenset({"signature", "api_secret", "authorization", "secret", "password"})


def new_correlation_id() -> str:
    """Full 128-bit random id; the display prefix is for log lines only."""
    return uuid.uuid4().hex


def _redact(details: dict[str, object]) -> dict[str, object]:
    return {k: (REDACTED if k.lower() in _SENSITIVE_KEYS else v) for k, v in details.items()}


class Trace:
    """Trace handle for a single request."""

    def __init__(
        self,
        correlation_id: str,
        event_type: AuditEventType,
        audit_logger: AuditLogger | None,
        log_bodies: bool,
    ) -> None:
        self.correlation_id = correlation_id
        self.display_id = correlation_id[:DISPLAY_ID_LENGTH]
        self._event_type = event_type
        self._audit = audit_logger
        self._log_bodies = log_bodies
        self._started = time.monotonic()

    @property
    def elapsed_ms(self) -> int:
        return int((time.monotonic() - self._started) * 1000)

    def event(self, action: str, result: str = "success", **details: object) -> None:
        clean = _redact(details)
        logger.info("[%s] %s %s", self.display_id, action, clean or "")
        self._record(action, result, RiskLevel.INFO, clean)

    def failure(self, stage: str, **details: object) -> None:
        clean = _redact(details)
        logger.warning("[%s] %s failed %s", self.display_id, stage, clean)
        self._record(stage, "failure", RiskLevel.MEDIUM, clean)

    def body(self, label: str, payload: bytes | str) -> None:
        """Log a raw body, only when diagnostic body logging is on."""
        if not self._log_bodies:
            return
        text = payload.decode(errors="replace") if isinstance(payload, bytes) else payload
        logger.info("[%s] %s: %s", self.display_id, label, text)

    def _record(
        self, action: str, result: str, risk: RiskLevel, details: dict[str, object],
    ) -> None:
        if not self._audit:
            return
        event = AuditEvent(
            event_type=self._event_type,
            correlation_id=self.correlation_id,
            action=action,
            result=result,
            risk_level=risk,
            details=details or None,
        )
        # The audit sink is best-effort; a request never fails because of it.
        try:
            self._audit.log(event)
        except OSError as exc:
            logger.warning("[%s] audit write failed: %s", self.display_id, exc.__class__.__name__)


class RequestTracer:
    """Opens a ``Trace`` around each request and logs start and completion."""

    def __init__(
        self,
        audit_logger: AuditLogger | None = None,
        log_bodies: bool = False,
        event_type: AuditEventType = AuditEventType.SMS_DISPATCH,
    ) -> None:
        self._audit = audit_logger
        self._log_bodies = log_bodies
        self._event_type = event_type

    @contextmanager
    def trace(self) -> Iterator[Trace]:
        trace = Trace(new_correlation_id(), self._event_type, self._audit, self._log_bodies)
        trace.event("request_started", result="started")
        try:
            yield trace
        except Exception as exc:
            trace.failure("unhandled", error=exc.__class__.__name__)
            raise
        finally:
            trace.event("request_completed", result="completed", duration_ms=trace.elapsed_ms)
