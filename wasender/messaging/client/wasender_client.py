"""
WasenderAPI REST client.

Key Design Decisions:
- The aiohttp session is injected (shared, managed by the FastAPI lifespan);
  the client only opens its own session when used as an async context manager
- Send operations accept discrete parameters or a send-message model and
  normalize both into the model, so there is a single payload path
- Only /send-message goes through the 429 retry policy
- Session-management endpoints authenticate with the personal access token,
  everything else with the session API key
"""

import asyncio
import json
from typing import Any

import aiohttp

from wasender.core.config.settings import Settings, settings
from wasender.core.exceptions import WasenderApiError, WasenderConfigurationError
from wasender.core.logging.logger import get_logger
from wasender.messaging.client.retry import SleepFunc, run_with_retry
from wasender.messaging.models.message_models import (
    SendAudioMessageData,
    SendContactMessageData,
    SendDocumentMessageData,
    SendImageMessageData,
    SendLocationMessageData,
    SendMessageData,
    SendStickerMessageData,
    SendTextMessageData,
    SendVideoMessageData,
)
from wasender.messaging.models.retry_models import RetryConfig

SEND_MESSAGE_PATH = "/send-message"
USER_AGENT = "wasenderapi-python-sdk"

_NOT_JSON = object()


class WasenderUrlBuilder:
    """Builds URLs for WasenderAPI endpoints."""

    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip("/")

    def get_endpoint_url(self, path: str) -> str:
        """Build the full URL for an API path such as `/contacts`."""
        if not path.startswith("/"):
            path = f"/{path}"
        return f"{self.base_url}{path}"


class WasenderClient:
    """
    WasenderAPI client with dependency-injected HTTP session.

    Usage:
        client = WasenderClient(session, api_key="...")
        await client.send_text("123", "hi")
        await client.send_text(SendTextMessageData(to="123", text="hi"))

        async with WasenderClient(api_key="...") as client:
            await client.get_contacts()
    """

    def __init__(
        self,
        session: aiohttp.ClientSession | None = None,
        api_key: str | None = None,
        personal_access_token: str | None = None,
        base_url: str | None = None,
        logger: Any | None = None,
        config: Settings | None = None,
        sleep: SleepFunc = asyncio.sleep,
    ):
        """Initialize the client.

        Explicit arguments win over `config`, which defaults to the global
        settings.

        Args:
            session: Persistent aiohttp session (managed by the host application)
            api_key: WasenderAPI session API key
            personal_access_token: Account token for session-management endpoints
            base_url: API base URL
            logger: Pre-configured logger instance
            config: Settings to read defaults from
            sleep: Awaitable used by the retry policy between attempts
        """
        config = config or settings
        self.session = session
        self._owns_session = False
        self.api_key = api_key if api_key is not None else config.api_key
        self.personal_access_token = (
            personal_access_token
            if personal_access_token is not None
            else config.personal_access_token
        )
        self.timeout = aiohttp.ClientTimeout(total=config.request_timeout)
        self.logger = logger or get_logger(__name__)
        self.url_builder = WasenderUrlBuilder(base_url or config.base_url)
        self._sleep = sleep

        self.logger.debug(
            f"Wasender client initialized for {self.url_builder.base_url}, "
            f"personal token: {'yes' if self.personal_access_token else 'no'}"
        )

    async def __aenter__(self) -> "WasenderClient":
        if self.session is None:
            self.session = aiohttp.ClientSession(timeout=self.timeout)
            self._owns_session = True
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP session if this client opened it."""
        if self._owns_session and self.session is not None:
            await self.session.close()
            self.session = None
            self._owns_session = False

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    async def send_text(
        self,
        to: str | SendTextMessageData,
        text: str | None = None,
        *,
        options: dict[str, Any] | None = None,
        retry_config: RetryConfig | None = None,
    ) -> dict[str, Any]:
        """Send a text message."""
        data = (
            to
            if isinstance(to, SendTextMessageData)
            else SendTextMessageData(to=to, text=text)
        )
        return await self.send_message(data, options=options, retry_config=retry_config)

    async def send_image(
        self,
        to: str | SendImageMessageData,
        url: str | None = None,
        caption: str | None = None,
        *,
        options: dict[str, Any] | None = None,
        retry_config: RetryConfig | None = None,
    ) -> dict[str, Any]:
        """Send an image from a public URL with an optional caption."""
        data = (
            to
            if isinstance(to, SendImageMessageData)
            else SendImageMessageData(to=to, image_url=url, text=caption)
        )
        return await self.send_message(data, options=options, retry_config=retry_config)

    async def send_video(
        self,
        to: str | SendVideoMessageData,
        url: str | None = None,
        caption: str | None = None,
        *,
        options: dict[str, Any] | None = None,
        retry_config: RetryConfig | None = None,
    ) -> dict[str, Any]:
        """Send a video from a public URL with an optional caption."""
        data = (
            to
            if isinstance(to, SendVideoMessageData)
            else SendVideoMessageData(to=to, video_url=url, text=caption)
        )
        return await self.send_message(data, options=options, retry_config=retry_config)

    async def send_document(
        self,
        to: str | SendDocumentMessageData,
        url: str | None = None,
        caption: str | None = None,
        *,
        options: dict[str, Any] | None = None,
        retry_config: RetryConfig | None = None,
    ) -> dict[str, Any]:
        """Send a document from a public URL with an optional caption."""
        data = (
            to
            if isinstance(to, SendDocumentMessageData)
            else SendDocumentMessageData(to=to, document_url=url, text=caption)
        )
        return await self.send_message(data, options=options, retry_config=retry_config)

    async def send_audio(
        self,
        to: str | SendAudioMessageData,
        url: str | None = None,
        *,
        options: dict[str, Any] | None = None,
        retry_config: RetryConfig | None = None,
    ) -> dict[str, Any]:
        """Send an audio file from a public URL."""
        data = (
            to
            if isinstance(to, SendAudioMessageData)
            else SendAudioMessageData(to=to, audio_url=url)
        )
        return await self.send_message(data, options=options, retry_config=retry_config)

    async def send_sticker(
        self,
        to: str | SendStickerMessageData,
        url: str | None = None,
        *,
        options: dict[str, Any] | None = None,
        retry_config: RetryConfig | None = None,
    ) -> dict[str, Any]:
        """Send a sticker from a public URL."""
        data = (
            to
            if isinstance(to, SendStickerMessageData)
            else SendStickerMessageData(to=to, sticker_url=url)
        )
        return await self.send_message(data, options=options, retry_config=retry_config)

    async def send_contact(
        self,
        to: str | SendContactMessageData,
        contact_name: str | None = None,
        contact_phone: str | None = None,
        *,
        options: dict[str, Any] | None = None,
        retry_config: RetryConfig | None = None,
    ) -> dict[str, Any]:
        """Send a contact card."""
        data = (
            to
            if isinstance(to, SendContactMessageData)
            else SendContactMessageData(
                to=to, contact_name=contact_name, contact_phone=contact_phone
            )
        )
        return await self.send_message(data, options=options, retry_config=retry_config)

    async def send_location(
        self,
        to: str | SendLocationMessageData,
        latitude: float | None = None,
        longitude: float | None = None,
        name: str | None = None,
        address: str | None = None,
        *,
        options: dict[str, Any] | None = None,
        retry_config: RetryConfig | None = None,
    ) -> dict[str, Any]:
        """Send a location pin."""
        data = (
            to
            if isinstance(to, SendLocationMessageData)
            else SendLocationMessageData(
                to=to,
                latitude=latitude,
                longitude=longitude,
                name=name,
                address=address,
            )
        )
        return await self.send_message(data, options=options, retry_config=retry_config)

    async def send_message(
        self,
        data: SendMessageData,
        *,
        options: dict[str, Any] | None = None,
        retry_config: RetryConfig | None = None,
    ) -> dict[str, Any]:
        """Send any send-message model through the retrying POST helper.

        `options` is merged under the model's fields; model fields win on
        key collision.
        """
        payload = {**(options or {}), **data.to_payload()}
        return await self.post_with_retry(SEND_MESSAGE_PATH, payload, retry_config)

    # ------------------------------------------------------------------
    # Contacts
    # ------------------------------------------------------------------

    async def get_contacts(self) -> dict[str, Any]:
        """Get all contacts of the session."""
        return await self.get("/contacts")

    async def get_contact_info(self, phone: str) -> dict[str, Any]:
        return await self.get(f"/contacts/{phone}")

    async def get_contact_profile_picture(self, phone: str) -> dict[str, Any]:
        return await self.get(f"/contacts/{phone}/profile-picture")

    async def block_contact(self, phone: str) -> dict[str, Any]:
        return await self.post(f"/contacts/{phone}/block")

    async def unblock_contact(self, phone: str) -> dict[str, Any]:
        return await self.post(f"/contacts/{phone}/unblock")

    # ------------------------------------------------------------------
    # Groups
    # ------------------------------------------------------------------

    async def get_groups(self) -> dict[str, Any]:
        """Get all groups the session participates in."""
        return await self.get("/groups")

    async def get_group_metadata(self, jid: str) -> dict[str, Any]:
        return await self.get(f"/groups/{jid}/metadata")

    async def get_group_participants(self, jid: str) -> dict[str, Any]:
        return await self.get(f"/groups/{jid}/participants")

    async def add_group_participants(
        self, jid: str, participants: list[str]
    ) -> dict[str, Any]:
        return await self.post(
            f"/groups/{jid}/participants/add", {"participants": participants}
        )

    async def remove_group_participants(
        self, jid: str, participants: list[str]
    ) -> dict[str, Any]:
        return await self.post(
            f"/groups/{jid}/participants/remove", {"participants": participants}
        )

    async def update_group_settings(
        self, jid: str, group_settings: dict[str, Any]
    ) -> dict[str, Any]:
        return await self.put(f"/groups/{jid}/settings", group_settings)

    # ------------------------------------------------------------------
    # WhatsApp sessions (personal access token)
    # ------------------------------------------------------------------

    async def get_all_whatsapp_sessions(self) -> dict[str, Any]:
        return await self.get("/whatsapp-sessions", use_personal_token=True)

    async def create_whatsapp_session(self, payload: dict[str, Any]) -> dict[str, Any]:
        return await self.post("/whatsapp-sessions", payload, use_personal_token=True)

    async def get_whatsapp_session_details(self, session_id: int) -> dict[str, Any]:
        return await self.get(
            f"/whatsapp-sessions/{session_id}", use_personal_token=True
        )

    async def update_whatsapp_session(
        self, session_id: int, payload: dict[str, Any]
    ) -> dict[str, Any]:
        return await self.put(
            f"/whatsapp-sessions/{session_id}", payload, use_personal_token=True
        )

    async def delete_whatsapp_session(self, session_id: int) -> dict[str, Any]:
        return await self.delete(
            f"/whatsapp-sessions/{session_id}", use_personal_token=True
        )

    async def connect_whatsapp_session(
        self, session_id: int, qr_as_image: bool = False
    ) -> dict[str, Any]:
        """Start connecting a session; optionally ask for the QR code as an image."""
        params = {"qrAsImage": "true"} if qr_as_image else None
        return await self.request(
            "POST",
            f"/whatsapp-sessions/{session_id}/connect",
            params=params,
            use_personal_token=True,
        )

    async def get_whatsapp_session_qr_code(self, session_id: int) -> dict[str, Any]:
        return await self.get(
            f"/whatsapp-sessions/{session_id}/qr-code", use_personal_token=True
        )

    async def disconnect_whatsapp_session(self, session_id: int) -> dict[str, Any]:
        return await self.post(
            f"/whatsapp-sessions/{session_id}/disconnect", use_personal_token=True
        )

    async def regenerate_api_key(self, session_id: int) -> dict[str, Any]:
        return await self.post(
            f"/whatsapp-sessions/{session_id}/regenerate-api-key",
            use_personal_token=True,
        )

    async def get_session_status(self, session_id: str) -> dict[str, Any]:
        return await self.get(f"/sessions/{session_id}/status", use_personal_token=True)

    # ------------------------------------------------------------------
    # HTTP helpers
    # ------------------------------------------------------------------

    async def get(self, path: str, use_personal_token: bool = False) -> dict[str, Any]:
        return await self.request("GET", path, use_personal_token=use_personal_token)

    async def post(
        self,
        path: str,
        payload: dict[str, Any] | None = None,
        use_personal_token: bool = False,
    ) -> dict[str, Any]:
        return await self.request(
            "POST", path, payload, use_personal_token=use_personal_token
        )

    async def put(
        self,
        path: str,
        payload: dict[str, Any],
        use_personal_token: bool = False,
    ) -> dict[str, Any]:
        return await self.request(
            "PUT", path, payload, use_personal_token=use_personal_token
        )

    async def delete(
        self, path: str, use_personal_token: bool = False
    ) -> dict[str, Any]:
        return await self.request("DELETE", path, use_personal_token=use_personal_token)

    async def post_with_retry(
        self,
        path: str,
        payload: dict[str, Any],
        retry_config: RetryConfig | None = None,
    ) -> dict[str, Any]:
        """POST with the 429 retry policy. Used for send-message only."""
        return await run_with_retry(
            lambda: self.post(path, payload),
            retry_config,
            sleep=self._sleep,
            logger=self.logger,
        )

    def _get_headers(self, use_personal_token: bool = False) -> dict[str, str]:
        """Get HTTP headers for a request.

        Raises:
            WasenderConfigurationError: If the endpoint needs a personal access
                token and none is configured
        """
        if use_personal_token:
            if not self.personal_access_token:
                raise WasenderConfigurationError(
                    "This endpoint requires a personal access token "
                    "(WASENDERAPI_PERSONAL_ACCESS_TOKEN)"
                )
            token = self.personal_access_token
        else:
            token = self.api_key

        return {
            "Accept": "application/json",
            "Authorization": f"Bearer {token}",
            "User-Agent": USER_AGENT,
        }

    async def request(
        self,
        method: str,
        path: str,
        payload: dict[str, Any] | None = None,
        *,
        params: dict[str, str] | None = None,
        use_personal_token: bool = False,
    ) -> dict[str, Any]:
        """Send a request to WasenderAPI and return the parsed JSON body.

        Args:
            method: HTTP method
            path: API path (without base URL)
            payload: Optional JSON body
            params: Optional query parameters
            use_personal_token: Authenticate with the personal access token

        Returns:
            JSON response from WasenderAPI

        Raises:
            WasenderConfigurationError: Missing personal access token
            WasenderApiError: For non-success HTTP responses
            aiohttp.ClientError: For transport failures
        """
        headers = self._get_headers(use_personal_token)
        url = self.url_builder.get_endpoint_url(path)

        if self.session is None:
            raise WasenderConfigurationError(
                "No HTTP session: inject an aiohttp.ClientSession or use "
                "'async with WasenderClient(...)'"
            )

        self.logger.debug(f"{method} {url}")
        if payload is not None:
            self.logger.debug(f"Payload: {payload}")

        try:
            async with self.session.request(
                method,
                url,
                headers=headers,
                json=payload,
                params=params,
                timeout=self.timeout,
            ) as response:
                status = response.status
                body_text = await response.text()
        except aiohttp.ClientError as err:
            self.logger.error(f"Request to {url} failed: {err}")
            raise

        body = self._parse_body(body_text)
        error_body = None if body is _NOT_JSON else body

        if not 200 <= status < 300:
            if status == 401:
                self.logger.error(
                    "WasenderAPI rejected the credentials (401 Unauthorized) - "
                    f"check the {'personal access token' if use_personal_token else 'API key'}"
                )
            else:
                self.logger.error(f"HTTP error {status} for {method} {path}: {body_text}")
            raise WasenderApiError(
                f"Wasender API error: {body_text}", status, error_body
            )

        if body is _NOT_JSON:
            raise WasenderApiError(
                f"Invalid JSON response from Wasender API: {body_text}", status
            )
        # Empty body or JSON null
        if body is None:
            return {}
        if not isinstance(body, dict):
            raise WasenderApiError(
                f"Unexpected response from Wasender API, expected a JSON object: "
                f"{body_text}",
                status,
            )

        self.logger.debug(f"Response: {body}")
        return body

    @staticmethod
    def _parse_body(body_text: str) -> Any:
        """Parse a response body as JSON.

        Returns None for an empty body and _NOT_JSON when it is not JSON.
        """
        if not body_text:
            return None
        try:
            return json.loads(body_text)
        except ValueError:
            return _NOT_JSON
