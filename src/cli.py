"""Click CLI for running the relay and debugging gateway signatures."""

from __future__ import annotations

import click
from dotenv import load_dotenv

from src.config import Settings
from src.sms.models import OutboundMessageRequest
from src.sms.signer import ConfigurationError, SignedRequestBuilder
from src.sms.tracer import new_correlation_id


@click.group()
@click.option("--env-file", default=None, help="Path to a .env file to load first.")
@click.pass_context
def cli(ctx: click.Context, env_file: str | None) -> None:
    """SMS and email relay."""
    ctx.ensure_object(dict)
    ctx.obj["env_file"] = env_file
    load_dotenv(env_file)


@cli.command()
@click.option("--host", default="0.0.0.0", help="Bind address.")
@click.option("--port", default=3000, type=int, help="Bind port.")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int) -> None:
    """Run the HTTP relay with uvicorn."""
    import uvicorn

    from src.api.app import create_app_from_env

    uvicorn.run(create_app_from_env(ctx.obj["env_file"]), host=host, port=port)


@cli.command()
@click.option("--phone", required=True, help="Recipient number, digits only.")
@click.option("--message", required=True, help="Message body.")
@click.option("--channel", required=True, help="Sender channel name.")
@click.option("--request-id", default=None, help="Request id; random when omitted.")
def sign(phone: str, message: str, channel: str, request_id: str | None) -> None:
    """Print the canonical body and Authorization header for a request."""
    settings = Settings.from_env()
    request = OutboundMessageRequest(
        correlation_id=request_id or new_correlation_id(),
        recipient_number=phone,
        body=message,
        channel=channel,
    )
    try:
        envelope = SignedRequestBuilder(settings.sms).build(request)
    except ConfigurationError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(envelope.canonical_body.decode())
    click.echo(f"Authorization: {envelope.authorization}")


def main() -> None:
    cli(obj={})
