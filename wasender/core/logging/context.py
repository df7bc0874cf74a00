"""
Webhook context management using contextvars for automatic propagation.

The webhook controller sets the session and event of the callback being
processed once; every logger created with get_logger() picks them up without
manual parameter passing.
"""

from contextvars import ContextVar

_session_context: ContextVar[str | None] = ContextVar(
    "session_id", default=None
)  # From webhook JSON
_event_context: ContextVar[str | None] = ContextVar(
    "event_type", default=None
)  # From webhook JSON


def set_webhook_context(
    session_id: str | None = None,
    event_type: str | None = None,
) -> None:
    """
    Set the webhook context for the current async context.

    Args:
        session_id: WhatsApp session identifier from the webhook payload
        event_type: Event discriminator from the webhook payload
    """
    if session_id is not None:
        _session_context.set(session_id)
    if event_type is not None:
        _event_context.set(event_type)


def get_current_session_context() -> str | None:
    """Get the current session ID, or None if not set."""
    return _session_context.get()


def get_current_event_context() -> str | None:
    """Get the current event discriminator, or None if not set."""
    return _event_context.get()


def clear_webhook_context() -> None:
    """
    Clear the webhook context.

    Context is isolated per request already; this is mostly useful in tests.
    """
    _session_context.set(None)
    _event_context.set(None)


def get_context_info() -> dict[str, str | None]:
    """
    Get current context information for debugging.

    Returns:
        Dictionary with current session_id and event_type
    """
    return {
        "session_id": get_current_session_context(),
        "event_type": get_current_event_context(),
    }
