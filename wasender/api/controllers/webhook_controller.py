"""
Webhook controller for WasenderAPI callbacks.

Routes handle only HTTP wiring; this controller validates the shared-secret
signature, parses the payload, resolves the typed event and dispatches it.
Validation failures are answered with 400 responses, never raised.
"""

import hmac
import json
from typing import Any

from fastapi import Request
from fastapi.responses import PlainTextResponse

from wasender.core.config.settings import Settings, settings
from wasender.core.events import WasenderEventDispatcher, create_webhook_event
from wasender.core.logging.context import set_webhook_context
from wasender.core.logging.logger import get_logger


class WebhookController:
    """
    Validates and dispatches inbound WasenderAPI webhooks.

    The signature check compares the configured secret with the configured
    header value for equality; WasenderAPI sends the secret itself, not an
    HMAC of the body.
    """

    def __init__(
        self,
        event_dispatcher: WasenderEventDispatcher,
        config: Settings | None = None,
    ):
        """
        Args:
            event_dispatcher: Dispatcher that delivers events to the application
            config: Settings holding the webhook secret and header name
        """
        config = config or settings
        self.event_dispatcher = event_dispatcher
        self.webhook_secret = config.webhook_secret
        self.signature_header = config.webhook_signature_header
        self.logger = get_logger(__name__)

        if not self.webhook_secret:
            self.logger.warning(
                "WASENDERAPI_WEBHOOK_SECRET is not set - every webhook will be rejected"
            )

    def verify_signature(self, signature: str | None) -> bool:
        """Check a signature header value against the configured secret."""
        if not signature or not self.webhook_secret:
            return False
        return hmac.compare_digest(
            signature.encode("utf-8"), self.webhook_secret.encode("utf-8")
        )

    @staticmethod
    def parse_payload(body: bytes) -> dict[str, Any] | None:
        """Parse a webhook body; None unless it is a JSON object with a string `event`."""
        try:
            payload = json.loads(body)
        except (ValueError, UnicodeDecodeError):
            return None
        if not isinstance(payload, dict) or not isinstance(payload.get("event"), str):
            return None
        return payload

    async def process_webhook(self, request: Request) -> PlainTextResponse:
        """
        Process an incoming webhook request.

        Returns:
            400 "Invalid signature" / "Invalid payload" on validation failure,
            200 "OK" once the event has been dispatched
        """
        signature = request.headers.get(self.signature_header)
        if not self.verify_signature(signature):
            self.logger.warning(
                f"Rejected webhook with {'invalid' if signature else 'missing'} "
                f"signature header '{self.signature_header}'"
            )
            return PlainTextResponse("Invalid signature", status_code=400)

        payload = self.parse_payload(await request.body())
        if payload is None:
            self.logger.warning("Rejected webhook with malformed payload")
            return PlainTextResponse("Invalid payload", status_code=400)

        event = create_webhook_event(payload)
        set_webhook_context(session_id=event.session_id, event_type=event.event)

        self.logger.info(f"📨 Webhook {event.event} → {type(event).__name__}")
        await self.event_dispatcher.dispatch(event)

        return PlainTextResponse("OK", status_code=200)
