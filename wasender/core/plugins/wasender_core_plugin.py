"""
Wasender Core Plugin

Mounts the webhook route and manages the shared HTTP session and
WasenderClient for the application lifetime.
"""

from typing import TYPE_CHECKING

import aiohttp
from fastapi import FastAPI

from wasender.api.routes.webhooks import create_webhook_router
from wasender.messaging.client import WasenderClient

from ..config.settings import Settings, settings
from ..events import WasenderEventDispatcher
from ..logging.logger import get_app_logger, setup_logging

if TYPE_CHECKING:
    from ..factory.wasender_builder import WasenderBuilder


class WasenderCorePlugin:
    """
    Core Wasender functionality as a plugin.

    - Webhook route at `settings.webhook_route`
    - Logging setup on startup
    - Persistent aiohttp session and WasenderClient on `app.state`
    - Session cleanup on shutdown

    The dispatcher is stored on `app.state.event_dispatcher` as well, so
    routes can reach it through get_event_dispatcher().
    """

    def __init__(
        self,
        event_dispatcher: WasenderEventDispatcher | None = None,
        config: Settings | None = None,
        configure_logging: bool = True,
    ):
        """
        Args:
            event_dispatcher: Dispatcher for webhook events (created if omitted)
            config: Settings for client and webhook (global settings if omitted)
            configure_logging: Install the Rich logging handlers on startup
        """
        self.event_dispatcher = event_dispatcher or WasenderEventDispatcher()
        self.config = config or settings
        self.configure_logging = configure_logging

    def configure(self, builder: "WasenderBuilder") -> None:
        """Register the webhook router and the core lifespan hooks."""
        builder.add_router(create_webhook_router(self.event_dispatcher, self.config))
        builder.add_startup_hook(self._core_startup, priority=10)  # First to run
        builder.add_shutdown_hook(self._core_shutdown, priority=90)  # Last to run

    async def _core_startup(self, app: FastAPI) -> None:
        """Set up logging, the HTTP session and the client."""
        if self.configure_logging:
            setup_logging(
                level=self.config.log_level,
                mode=self.config.environment,
                log_dir=self.config.log_dir if self.config.is_development else None,
            )
        logger = get_app_logger()

        logger.info(f"🚀 Starting Wasender SDK v{self.config.version}")
        logger.info(f"📊 Environment: {self.config.environment}")
        logger.info(f"🌐 API base URL: {self.config.base_url}")

        connector = aiohttp.TCPConnector(
            limit=100,
            keepalive_timeout=30,
            enable_cleanup_closed=True,
        )
        session = aiohttp.ClientSession(
            connector=connector,
            timeout=aiohttp.ClientTimeout(total=self.config.request_timeout),
        )
        app.state.http_session = session
        app.state.wasender_client = WasenderClient(session, config=self.config)
        app.state.event_dispatcher = self.event_dispatcher

        logger.info(f"📍 Webhook route: POST {self.config.webhook_route}")
        logger.info(f"🔑 Signature header: {self.config.webhook_signature_header}")
        if not self.config.api_key:
            logger.warning("⚠️ WASENDERAPI_API_KEY is not set - API calls will fail")

    async def _core_shutdown(self, app: FastAPI) -> None:
        """Close the HTTP session."""
        logger = get_app_logger()

        session = getattr(app.state, "http_session", None)
        if session is not None:
            await session.close()
            logger.info("🌐 HTTP session closed")
        app.state.wasender_client = None
