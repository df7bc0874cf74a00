"""
Wasender Core Components

Configuration, logging, exceptions, webhook events and the application
factory system.
"""

from .config.settings import Settings, settings
from .exceptions import WasenderApiError, WasenderConfigurationError, WasenderError
from .logging import get_app_logger, get_logger, setup_app_logging

__all__ = [
    # Configuration
    "Settings",
    "settings",
    # Errors
    "WasenderApiError",
    "WasenderConfigurationError",
    "WasenderError",
    # Logging
    "get_app_logger",
    "get_logger",
    "setup_app_logging",
]
