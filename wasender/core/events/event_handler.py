"""
Base event handler class for Wasender applications.

Subclass it and override the `on_*` methods for the events you care about,
then register it with a WasenderEventDispatcher.
"""

from typing import TYPE_CHECKING

from wasender.core.logging.logger import get_logger

if TYPE_CHECKING:
    from .event_dispatcher import WasenderEventDispatcher
    from .webhook_events import (
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
    )


class WasenderEventHandler:
    """
    Base class for handling Wasender webhook events.

    handle() looks up the method named by the event's `handler_name` and
    awaits it. Every method is a no-op by default, so subclasses only
    override what they need.

    Example:
        class MyHandler(WasenderEventHandler):
            async def on_messages_upserted(self, event):
                await client.send_text(event.data["key"]["remoteJid"], "Got it")

        MyHandler().register(dispatcher)
    """

    def __init__(self):
        self.logger = get_logger(self.__class__.__module__)

    def register(self, dispatcher: "WasenderEventDispatcher") -> "WasenderEventHandler":
        """Subscribe this handler to every event of `dispatcher`."""
        dispatcher.subscribe_all(self.handle)
        return self

    async def handle(self, event: "WasenderWebhookEvent") -> None:
        """Route an event to its `on_*` method."""
        method = getattr(self, event.handler_name, None)
        if method is None:
            method = self.on_unknown_event
        await method(event)

    # Chats

    async def on_chats_upserted(self, event: "ChatsUpserted") -> None:
        pass

    async def on_chats_updated(self, event: "ChatsUpdated") -> None:
        pass

    async def on_chats_deleted(self, event: "ChatsDeleted") -> None:
        pass

    # Groups

    async def on_groups_upserted(self, event: "GroupsUpserted") -> None:
        pass

    async def on_groups_updated(self, event: "GroupsUpdated") -> None:
        pass

    async def on_group_participants_updated(
        self, event: "GroupParticipantsUpdated"
    ) -> None:
        pass

    # Contacts

    async def on_contacts_upserted(self, event: "ContactsUpserted") -> None:
        pass

    async def on_contacts_updated(self, event: "ContactsUpdated") -> None:
        pass

    # Messages

    async def on_messages_upserted(self, event: "MessagesUpserted") -> None:
        pass

    async def on_messages_updated(self, event: "MessagesUpdated") -> None:
        pass

    async def on_messages_deleted(self, event: "MessagesDeleted") -> None:
        pass

    async def on_messages_reaction(self, event: "MessagesReaction") -> None:
        pass

    async def on_message_receipt_updated(self, event: "MessageReceiptUpdated") -> None:
        pass

    async def on_message_sent(self, event: "MessageSent") -> None:
        pass

    # Sessions

    async def on_session_status(self, event: "SessionStatus") -> None:
        pass

    async def on_qrcode_updated(self, event: "QrCodeUpdated") -> None:
        pass

    async def on_unknown_event(self, event: "WasenderWebhookEvent") -> None:
        """Called for discriminators without a dedicated event class."""
        self.logger.debug(f"Unhandled webhook event: {event.event}")
