"""
Wasender webhook events.

Typed events for every WasenderAPI callback, the in-process dispatcher that
delivers them, and an optional handler base class.
"""

from .event_dispatcher import WasenderEventDispatcher
from .event_handler import WasenderEventHandler
from .webhook_events import (
    EVENT_TYPE_MAP,
    ChatsDeleted,
    ChatsUpdated,
    ChatsUpserted,
    ContactsUpdated,
    ContactsUpserted,
    GroupParticipantsUpdated,
    GroupsUpdated,
    GroupsUpserted,
    MessageReceiptUpdated,
    MessagesDeleted,
    MessageSent,
    MessagesReaction,
    MessagesUpdated,
    MessagesUpserted,
    QrCodeUpdated,
    SessionStatus,
    WasenderWebhookEvent,
    create_webhook_event,
    resolve_event_class,
)

__all__ = [
    "EVENT_TYPE_MAP",
    "ChatsDeleted",
    "ChatsUpdated",
    "ChatsUpserted",
    "ContactsUpdated",
    "ContactsUpserted",
    "GroupParticipantsUpdated",
    "GroupsUpdated",
    "GroupsUpserted",
    "MessageReceiptUpdated",
    "MessageSent",
    "MessagesDeleted",
    "MessagesReaction",
    "MessagesUpdated",
    "MessagesUpserted",
    "QrCodeUpdated",
    "SessionStatus",
    "WasenderEventDispatcher",
    "WasenderEventHandler",
    "WasenderWebhookEvent",
    "create_webhook_event",
    "resolve_event_class",
]
