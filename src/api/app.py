"""FastAPI application exposing the SMS and email relay endpoints."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import httpx
import pydantic
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from src.audit.logger import AuditLogger
from src.config import Settings, configure_logging
from src.mail.sender import EmailConfigurationError, EmailDeliveryError, EmailSender
from src.models import EmailRequest, ResponseStatus
from src.sms.dispatcher import SmsDispatcher

logger = logging.getLogger(__name__)

_FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def create_app_from_env(env_file: str | None = None) -> FastAPI:
    """Factory for uvicorn --factory: reads config from environment variables."""
    load_dotenv(env_file)
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    return create_app(settings)


def create_app(
    settings: Settings,
    sms_transport: httpx.AsyncBaseTransport | None = None,
    email_sender: EmailSender | None = None,
    audit_logger: AuditLogger | None = None,
) -> FastAPI:
    """Create the relay app. Settings are fixed for the app's lifetime."""
    app = FastAPI(docs_url=None, redoc_url=None)

    if audit_logger is None and settings.audit_log_path:
        audit_logger = AuditLogger(
            settings.audit_log_path,
            max_bytes=settings.audit_log_max_bytes,
            backup_count=settings.audit_log_backup_count,
        )
    dispatcher = SmsDispatcher(
        settings.sms, transport=sms_transport, audit_logger=audit_logger,
    )
    sender = email_sender or EmailSender(settings.email)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/sms")
    async def post_sms(request: Request) -> JSONResponse:
        params: dict[str, str] = dict(request.query_params)
        if request.headers.get("content-type", "").startswith(_FORM_TYPES):
            form = await request.form()
            params.update({k: v for k, v in form.items() if isinstance(v, str)})

        outcome = await dispatcher.dispatch(params)
        return JSONResponse(outcome.response.to_wire(), status_code=outcome.status_code)

    @app.post("/api/email")
    async def post_email(request: Request) -> JSONResponse:
        try:
            sender.check_configuration()
        except EmailConfigurationError:
            logger.error("Email settings are not configured")
            return _error("Environment variables not set", 500)

        try:
            email_request = await _parse_email_request(request)
        except (ValueError, pydantic.ValidationError) as exc:
            return JSONResponse(
                {
                    "message": "Invalid request body",
                    "status": ResponseStatus.ERROR.value,
                    "error": _describe(exc),
                },
                status_code=400,
            )

        try:
            await sender.send(email_request)
        except EmailDeliveryError:
            return _error("Failed to send email", 502)

        return JSONResponse({
            "message": "Email Sent Successfully",
            "status": ResponseStatus.SUCCESS.value,
        })

    # Mounted last so it never shadows the API routes.
    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")

    return app


async def _parse_email_request(request: Request) -> EmailRequest:
    content_type = request.headers.get("content-type", "")
    if content_type.startswith(_FORM_TYPES):
        form = await request.form()
        data: object = {k: v for k, v in form.items() if isinstance(v, str)}
    else:
        data = json.loads(await request.body() or b"null")
    if not isinstance(data, dict):
        raise ValueError("expected an object with email and name")
    return EmailRequest.model_validate(data)


def _describe(exc: Exception) -> str:
    if isinstance(exc, pydantic.ValidationError):
        return "; ".join(
            f"{'.'.join(str(p) for p in e['loc'])}: {e['msg']}" for e in exc.errors()
        )
    return str(exc)


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(
        {"message": message, "status": ResponseStatus.ERROR.value},
        status_code=status_code,
    )
