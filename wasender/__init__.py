"""
Wasender - WasenderAPI SDK for FastAPI applications

Send WhatsApp messages and manage contacts, groups and sessions through
WasenderAPI, and receive its webhooks as typed events.
"""

from .core.app import create_app
from .core.config.settings import Settings, settings
from .core.events import WasenderEventDispatcher, WasenderEventHandler
from .core.exceptions import (
    WasenderApiError,
    WasenderConfigurationError,
    WasenderError,
)
from .core.factory import WasenderBuilder, WasenderPlugin
from .core.plugins import WasenderCorePlugin
from .messaging import RetryConfig, WasenderClient

__version__ = settings.version

__all__ = [
    "RetryConfig",
    "Settings",
    "WasenderApiError",
    "WasenderBuilder",
    "WasenderClient",
    "WasenderConfigurationError",
    "WasenderCorePlugin",
    "WasenderError",
    "WasenderEventDispatcher",
    "WasenderEventHandler",
    "WasenderPlugin",
    "create_app",
]
