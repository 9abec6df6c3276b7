"""Static tables mapping media/message types to wire field names and MIME types.

This module is the single source of truth for the multipart contract with
the remote service. A lookup for a type the table does not know is a
client/server contract mismatch and raises :class:`ConfigurationError`.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, TypeVar

from .errors import ConfigurationError
from .types import MediaType, MessageType, Operation

K = TypeVar("K")
V = TypeVar("V")

MEDIA_TYPE_FIELD = "media_type"
MESSAGE_TYPE_FIELD = "message_type"
PASSPHRASE_FIELD = "passphrase"
TEXT_FIELD = "text"

ACCEPT_FILTERS: Mapping[MediaType, str] = MappingProxyType(
    {
        MediaType.IMAGE: "image/*",
        MediaType.AUDIO: "audio/*",
        MediaType.VIDEO: "video/*",
    }
)

MEDIA_LABELS: Mapping[MediaType, str] = MappingProxyType(
    {
        MediaType.IMAGE: "Image",
        MediaType.AUDIO: "Audio",
        MediaType.VIDEO: "Video",
    }
)

CARRIER_FIELDS: Mapping[tuple[Operation, MediaType], str] = MappingProxyType(
    {
        (Operation.EMBED, MediaType.IMAGE): "carrier_image",
        (Operation.EMBED, MediaType.AUDIO): "carrier_audio",
        (Operation.EMBED, MediaType.VIDEO): "carrier_video",
        (Operation.EXTRACT, MediaType.IMAGE): "image",
        (Operation.EXTRACT, MediaType.AUDIO): "audio",
        (Operation.EXTRACT, MediaType.VIDEO): "video",
    }
)

PAYLOAD_FIELDS: Mapping[MessageType, str] = MappingProxyType(
    {
        MessageType.TEXT: TEXT_FIELD,
        MessageType.IMAGE: "message_image",
        MessageType.AUDIO: "message_audio",
        MessageType.VIDEO: "message_video",
    }
)

# MIME type assumed when rendering extracted content; text has none.
RENDER_MIME: Mapping[MessageType, str | None] = MappingProxyType(
    {
        MessageType.TEXT: None,
        MessageType.IMAGE: "image/png",
        MessageType.AUDIO: "audio/mpeg",
        MessageType.VIDEO: "video/mp4",
    }
)

EXTRACT_EXTENSIONS: Mapping[MessageType, str] = MappingProxyType(
    {
        MessageType.TEXT: ".txt",
        MessageType.IMAGE: ".png",
        MessageType.AUDIO: ".mp3",
        MessageType.VIDEO: ".mp4",
    }
)


def _lookup(table: Mapping[K, V], key: K, what: str) -> V:
    try:
        return table[key]
    except (KeyError, TypeError):
        raise ConfigurationError(f"No {what} registered for {key!r}") from None


def media_type(value: str | MediaType) -> MediaType:
    try:
        return MediaType(value)
    except ValueError:
        raise ConfigurationError(f"Unknown media type: {value!r}") from None


def message_type(value: str | MessageType) -> MessageType:
    try:
        return MessageType(value)
    except ValueError:
        raise ConfigurationError(f"Unknown message type: {value!r}") from None


def accept_filter(media: MediaType) -> str:
    return _lookup(ACCEPT_FILTERS, media, "accept filter")


def media_label(media: MediaType) -> str:
    return _lookup(MEDIA_LABELS, media, "label")


def carrier_field(operation: Operation, media: MediaType) -> str:
    """Wire field name for the carrier attachment of *operation*."""

    return _lookup(CARRIER_FIELDS, (operation, media), "carrier field")


def payload_field(message: MessageType) -> str:
    """Wire field name for the payload of *message* type."""

    return _lookup(PAYLOAD_FIELDS, message, "payload field")


def render_mime(message: MessageType) -> str | None:
    return _lookup(RENDER_MIME, message, "render MIME type")


def extract_extension(message: MessageType) -> str:
    return _lookup(EXTRACT_EXTENSIONS, message, "file extension")


__all__ = [
    "ACCEPT_FILTERS",
    "CARRIER_FIELDS",
    "MEDIA_TYPE_FIELD",
    "MESSAGE_TYPE_FIELD",
    "PASSPHRASE_FIELD",
    "PAYLOAD_FIELDS",
    "TEXT_FIELD",
    "accept_filter",
    "carrier_field",
    "extract_extension",
    "media_label",
    "media_type",
    "message_type",
    "payload_field",
    "render_mime",
]
