"""
Typed webhook events.

Every callback WasenderAPI posts carries an `event` discriminator. Sixteen
known discriminators map to their own event class; anything else becomes a
WasenderWebhookEvent that keeps the original discriminator.
"""

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field


class WasenderWebhookEvent(BaseModel):
    """Webhook event with its discriminator and the full JSON payload.

    Dispatched as-is for discriminators without a dedicated class.
    """

    model_config = ConfigDict(frozen=True)

    event_type: ClassVar[str | None] = None
    handler_name: ClassVar[str] = "on_unknown_event"

    event: str = Field(..., description="Event discriminator as received")
    payload: dict[str, Any] = Field(
        default_factory=dict, description="Full webhook JSON body"
    )

    @property
    def data(self) -> Any:
        """The `data` section of the payload, if present."""
        return self.payload.get("data")

    @property
    def session_id(self) -> str | None:
        """WhatsApp session the callback belongs to, if present."""
        session_id = self.payload.get("sessionId")
        return str(session_id) if session_id is not None else None

    @property
    def timestamp(self) -> Any:
        return self.payload.get("timestamp")


class ChatsUpserted(WasenderWebhookEvent):
    event_type: ClassVar[str] = "chats.upsert"
    handler_name: ClassVar[str] = "on_chats_upserted"


class ChatsUpdated(WasenderWebhookEvent):
    event_type: ClassVar[str] = "chats.update"
    handler_name: ClassVar[str] = "on_chats_updated"


class ChatsDeleted(WasenderWebhookEvent):
    event_type: ClassVar[str] = "chats.delete"
    handler_name: ClassVar[str] = "on_chats_deleted"


class GroupsUpserted(WasenderWebhookEvent):
    event_type: ClassVar[str] = "groups.upsert"
    handler_name: ClassVar[str] = "on_groups_upserted"


class GroupsUpdated(WasenderWebhookEvent):
    event_type: ClassVar[str] = "groups.update"
    handler_name: ClassVar[str] = "on_groups_updated"


class GroupParticipantsUpdated(WasenderWebhookEvent):
    event_type: ClassVar[str] = "group-participants.update"
    handler_name: ClassVar[str] = "on_group_participants_updated"


class ContactsUpserted(WasenderWebhookEvent):
    event_type: ClassVar[str] = "contacts.upsert"
    handler_name: ClassVar[str] = "on_contacts_upserted"


class ContactsUpdated(WasenderWebhookEvent):
    event_type: ClassVar[str] = "contacts.update"
    handler_name: ClassVar[str] = "on_contacts_updated"


class MessagesUpserted(WasenderWebhookEvent):
    """New incoming or outgoing messages."""

    event_type: ClassVar[str] = "messages.upsert"
    handler_name: ClassVar[str] = "on_messages_upserted"


class MessagesUpdated(WasenderWebhookEvent):
    event_type: ClassVar[str] = "messages.update"
    handler_name: ClassVar[str] = "on_messages_updated"


class MessagesDeleted(WasenderWebhookEvent):
    event_type: ClassVar[str] = "messages.delete"
    handler_name: ClassVar[str] = "on_messages_deleted"


class MessagesReaction(WasenderWebhookEvent):
    event_type: ClassVar[str] = "messages.reaction"
    handler_name: ClassVar[str] = "on_messages_reaction"


class MessageReceiptUpdated(WasenderWebhookEvent):
    """Delivery or read receipt for a sent message."""

    event_type: ClassVar[str] = "message-receipt.update"
    handler_name: ClassVar[str] = "on_message_receipt_updated"


class MessageSent(WasenderWebhookEvent):
    event_type: ClassVar[str] = "message.sent"
    handler_name: ClassVar[str] = "on_message_sent"


class SessionStatus(WasenderWebhookEvent):
    """Connection status change of a WhatsApp session."""

    event_type: ClassVar[str] = "session.status"
    handler_name: ClassVar[str] = "on_session_status"


class QrCodeUpdated(WasenderWebhookEvent):
    """New QR code to scan while a session is connecting."""

    event_type: ClassVar[str] = "qrcode.updated"
    handler_name: ClassVar[str] = "on_qrcode_updated"


EVENT_TYPE_MAP: dict[str, type[WasenderWebhookEvent]] = {
    event_cls.event_type: event_cls
    for event_cls in (
        ChatsUpserted,
        ChatsUpdated,
        ChatsDeleted,
        GroupsUpserted,
        GroupsUpdated,
        GroupParticipantsUpdated,
        ContactsUpserted,
        ContactsUpdated,
        MessagesUpserted,
        MessagesUpdated,
        MessagesDeleted,
        MessagesReaction,
        MessageReceiptUpdated,
        MessageSent,
        SessionStatus,
        QrCodeUpdated,
    )
}


def resolve_event_class(event_type: str) -> type[WasenderWebhookEvent]:
    """Return the event class for a discriminator, or the generic fallback."""
    return EVENT_TYPE_MAP.get(event_type, WasenderWebhookEvent)


def create_webhook_event(payload: dict[str, Any]) -> WasenderWebhookEvent:
    """Build the typed event for a webhook payload.

    Args:
        payload: Parsed webhook body; must contain a string `event` field

    Raises:
        ValueError: If `event` is missing or not a string
    """
    event_type = payload.get("event")
    if not isinstance(event_type, str):
        raise ValueError("Webhook payload has no 'event' field")

    event_cls = resolve_event_class(event_type)
    return event_cls(event=event_type, payload=payload)
