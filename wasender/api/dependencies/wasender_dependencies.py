"""
Wasender dependency injection.

FastAPI dependencies that hand route handlers the objects WasenderCorePlugin
stores on `app.state` during startup.
"""

from fastapi import Request

from wasender.core.events import WasenderEventDispatcher
from wasender.messaging.client import WasenderClient


async def get_wasender_client(request: Request) -> WasenderClient:
    """Get the application's WasenderClient.

    Raises:
        RuntimeError: If WasenderCorePlugin has not started
    """
    client = getattr(request.app.state, "wasender_client", None)
    if client is None:
        raise RuntimeError(
            "WasenderClient is not available - is WasenderCorePlugin installed?"
        )
    return client


async def get_event_dispatcher(request: Request) -> WasenderEventDispatcher:
    """Get the application's event dispatcher."""
    dispatcher = getattr(request.app.state, "event_dispatcher", None)
    if dispatcher is None:
        raise RuntimeError(
            "Event dispatcher is not available - is WasenderCorePlugin installed?"
        )
    return dispatcher
