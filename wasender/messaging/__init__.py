"""
Outbound messaging for WasenderAPI.

Usage:
    from wasender.messaging import WasenderClient, RetryConfig, SendTextMessageData
"""

from .client import WasenderClient
from .models import (
    RetryConfig,
    SendAudioMessageData,
    SendContactMessageData,
    SendDocumentMessageData,
    SendImageMessageData,
    SendLocationMessageData,
    SendStickerMessageData,
    SendTextMessageData,
    SendVideoMessageData,
)

__all__ = [
    "RetryConfig",
    "SendAudioMessageData",
    "SendContactMessageData",
    "SendDocumentMessageData",
    "SendImageMessageData",
    "SendLocationMessageData",
    "SendStickerMessageData",
    "SendTextMessageData",
    "SendVideoMessageData",
    "WasenderClient",
]
