"""
Send-message models for WasenderAPI.

Pydantic schemas for every message kind accepted by the /send-message
endpoint. Each model validates its required fields and owns the mapping to
the wire payload, so the discrete-parameter and structured call forms of
WasenderClient share one payload-construction path.
"""

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field


class SendMessageData(BaseModel):
    """Base schema for all send-message models."""

    model_config = ConfigDict(frozen=True)

    to: str = Field(
        ..., min_length=1, description="Recipient phone number or group JID"
    )

    def to_payload(self) -> dict[str, Any]:
        """Build the JSON payload for the /send-message endpoint."""
        raise NotImplementedError


class SendTextMessageData(SendMessageData):
    """Plain text message."""

    text: str = Field(..., min_length=1, description="Text content of the message")

    def to_payload(self) -> dict[str, Any]:
        return {"to": self.to, "text": self.text}


class CaptionedMediaData(SendMessageData):
    """Media message whose optional caption is sent as `text`.

    Subclasses name the model field holding the URL and the payload key it is
    sent under.
    """

    url_field: ClassVar[str]
    payload_url_key: ClassVar[str]

    text: str | None = Field(None, description="Optional caption")

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "to": self.to,
            self.payload_url_key: getattr(self, self.url_field),
        }
        if self.text:
            payload["text"] = self.text
        return payload


class SendImageMessageData(CaptionedMediaData):
    """Image message sent from a public URL."""

    url_field: ClassVar[str] = "image_url"
    payload_url_key: ClassVar[str] = "imageUrl"

    image_url: str = Field(..., min_length=1, description="Public image URL")


class SendVideoMessageData(CaptionedMediaData):
    """Video message sent from a public URL."""

    url_field: ClassVar[str] = "video_url"
    payload_url_key: ClassVar[str] = "videoUrl"

    video_url: str = Field(..., min_length=1, description="Public video URL")


class SendDocumentMessageData(CaptionedMediaData):
    """Document message sent from a public URL."""

    url_field: ClassVar[str] = "document_url"
    payload_url_key: ClassVar[str] = "documentUrl"

    document_url: str = Field(..., min_length=1, description="Public document URL")


class SendAudioMessageData(SendMessageData):
    """Audio message (voice note) sent from a public URL. No caption."""

    audio_url: str = Field(..., min_length=1, description="Public audio URL")

    def to_payload(self) -> dict[str, Any]:
        return {"to": self.to, "audioUrl": self.audio_url}


class SendStickerMessageData(SendMessageData):
    """Sticker message sent from a public .webp URL. No caption."""

    sticker_url: str = Field(..., min_length=1, description="Public sticker URL")

    def to_payload(self) -> dict[str, Any]:
        return {"to": self.to, "stickerUrl": self.sticker_url}


class SendContactMessageData(SendMessageData):
    """Contact card message."""

    contact_name: str = Field(..., min_length=1, description="Contact display name")
    contact_phone: str = Field(..., min_length=1, description="Contact phone number")

    def to_payload(self) -> dict[str, Any]:
        return {
            "to": self.to,
            "contact": {"name": self.contact_name, "phone": self.contact_phone},
        }


class SendLocationMessageData(SendMessageData):
    """Location pin message."""

    latitude: float = Field(..., ge=-90, le=90, description="Latitude coordinate")
    longitude: float = Field(..., ge=-180, le=180, description="Longitude coordinate")
    name: str | None = Field(None, description="Optional location name")
    address: str | None = Field(None, description="Optional location address")

    def to_payload(self) -> dict[str, Any]:
        location: dict[str, Any] = {
            "latitude": self.latitude,
            "longitude": self.longitude,
        }
        if self.name:
            location["name"] = self.name
        if self.address:
            location["address"] = self.address
        return {"to": self.to, "messageType": "location", "location": location}
