from .wasender_dependencies import get_event_dispatcher, get_wasender_client

__all__ = ["get_event_dispatcher", "get_wasender_client"]
