"""
WasenderAPI request models.

Send-message schemas for every supported message kind plus the per-call
retry configuration.
"""

from .message_models import (
    CaptionedMediaData,
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
from .retry_models import RetryConfig

__all__ = [
    "CaptionedMediaData",
    "RetryConfig",
    "SendAudioMessageData",
    "SendContactMessageData",
    "SendDocumentMessageData",
    "SendImageMessageData",
    "SendLocationMessageData",
    "SendMessageData",
    "SendStickerMessageData",
    "SendTextMessageData",
    "SendVideoMessageData",
]
