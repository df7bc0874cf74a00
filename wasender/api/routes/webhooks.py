"""
Webhook route for WasenderAPI callbacks.

The route handles only HTTP wiring and delegates to WebhookController.
"""

from fastapi import APIRouter, Request

from wasender.api.controllers import WebhookController
from wasender.core.config.settings import Settings, settings
from wasender.core.events import WasenderEventDispatcher


def create_webhook_router(
    event_dispatcher: WasenderEventDispatcher,
    config: Settings | None = None,
) -> APIRouter:
    """
    Create the webhook router.

    Args:
        event_dispatcher: Dispatcher receiving the typed events
        config: Settings with the webhook route, secret and header name

    Returns:
        APIRouter with a POST endpoint at `config.webhook_route`
    """
    config = config or settings
    webhook_controller = WebhookController(event_dispatcher, config)

    router = APIRouter(
        tags=["Webhooks"],
        responses={
            400: {"description": "Invalid signature or malformed payload"},
        },
    )

    @router.post(config.webhook_route)
    async def process_webhook(request: Request):
        """Receive a WasenderAPI webhook and dispatch it as a typed event."""
        return await webhook_controller.process_webhook(request)

    return router
