"""
Wasender CLI.

Command-line access to common WasenderAPI calls and a webhook receiver for
local development. Credentials come from the same WASENDERAPI_* environment
variables (or .env file) as the library.
"""

import asyncio
import json
from collections.abc import Awaitable, Callable
from typing import Any

import aiohttp
import typer

from wasender.core.config.settings import settings
from wasender.core.exceptions import WasenderApiError, WasenderError
from wasender.messaging.client import WasenderClient
from wasender.messaging.models import RetryConfig

app = typer.Typer(help="WasenderAPI command-line client")


def _run(call: Callable[[WasenderClient], Awaitable[dict[str, Any]]]) -> None:
    """Run one client call with a private session and print the JSON result."""

    async def runner() -> dict[str, Any]:
        async with WasenderClient(config=settings) as client:
            return await call(client)

    try:
        result = asyncio.run(runner())
    except WasenderApiError as e:
        typer.echo(f"❌ API error {e.status_code}: {e.response or e.message}", err=True)
        raise typer.Exit(1) from e
    except WasenderError as e:
        typer.echo(f"❌ {e.message}", err=True)
        raise typer.Exit(1) from e
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        typer.echo(f"❌ Request failed: {str(e) or type(e).__name__}", err=True)
        raise typer.Exit(1) from e

    typer.echo(json.dumps(result, indent=2, ensure_ascii=False))


@app.command("send-text")
def send_text(
    to: str = typer.Argument(..., help="Recipient phone number or group JID"),
    text: str = typer.Argument(..., help="Message text"),
    retries: int = typer.Option(
        0, "--retries", "-r", min=0, help="Retries on 429 rate limiting"
    ),
):
    """
    Send a text message.

    Examples:
        wasender send-text +1234567890 "Hello"
        wasender send-text +1234567890 "Hello" --retries 3
    """
    retry_config = RetryConfig(enabled=retries > 0, max_retries=retries)
    _run(lambda client: client.send_text(to, text, retry_config=retry_config))


@app.command()
def contacts():
    """List the contacts of the session."""
    _run(lambda client: client.get_contacts())


@app.command("session-status")
def session_status(
    session_id: str = typer.Argument(..., help="WhatsApp session ID"),
):
    """Show the status of a WhatsApp session (needs a personal access token)."""
    _run(lambda client: client.get_session_status(session_id))


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", "--host", "-h", help="Host to bind to"),
    port: int = typer.Option(settings.port, "--port", "-p", help="Port to bind to"),
):
    """
    Run a webhook receiver that logs every incoming event.

    Point your WasenderAPI webhook at http://<host>:<port><WASENDERAPI_WEBHOOK_ROUTE>.
    """
    import uvicorn

    from wasender.core.app import create_app
    from wasender.core.events import WasenderEventDispatcher
    from wasender.core.logging.logger import get_logger

    logger = get_logger("wasender.cli")
    dispatcher = WasenderEventDispatcher()

    def log_event(event) -> None:
        logger.info(f"{type(event).__name__}: {json.dumps(event.payload, default=str)}")

    dispatcher.subscribe_all(log_event)

    uvicorn.run(
        create_app(dispatcher, settings),
        host=host,
        port=port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    app()
