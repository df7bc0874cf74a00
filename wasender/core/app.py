"""
Application factory for the common case.

    dispatcher = WasenderEventDispatcher()
    app = create_app(dispatcher)

builds a FastAPI app with the webhook route, the shared HTTP session and a
WasenderClient on `app.state`. Use WasenderBuilder directly to add more
plugins or middleware.
"""

from typing import Any

from fastapi import FastAPI

from .config.settings import Settings, settings
from .events import WasenderEventDispatcher
from .factory.wasender_builder import WasenderBuilder
from .plugins.wasender_core_plugin import WasenderCorePlugin


def create_app(
    event_dispatcher: WasenderEventDispatcher | None = None,
    config: Settings | None = None,
    **fastapi_config: Any,
) -> FastAPI:
    """
    Create a FastAPI application that receives Wasender webhooks.

    Args:
        event_dispatcher: Dispatcher receiving webhook events
        config: Settings (global settings if omitted)
        **fastapi_config: FastAPI constructor overrides

    Returns:
        Configured FastAPI application
    """
    config = config or settings
    builder = WasenderBuilder().add_plugin(
        WasenderCorePlugin(event_dispatcher, config)
    )
    builder.configure(
        version=config.version,
        docs_url="/docs" if config.is_development else None,
        redoc_url="/redoc" if config.is_development else None,
    )
    if fastapi_config:
        builder.configure(**fastapi_config)
    return builder.build()
