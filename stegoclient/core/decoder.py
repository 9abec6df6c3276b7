"""Interpret service responses for the embed and extract paths."""
from __future__ import annotations

import base64
import binascii
import mimetypes
import time
from dataclasses import dataclass, field
from pathlib import PurePath

from utils.logger import setup_logger

from . import registry
from .errors import DecodeError, DomainError
from .transport import ContainerResponse
from .types import DEFAULT_MIME, ExtractResult, FileSource, MessageType, mime_family

logger = setup_logger(__name__)

DOMAIN_FALLBACK = "Extraction process failed"


def run_suffix() -> str:
    """Suffix that makes generated download names unique within a session."""

    return str(time.time_ns() // 1_000_000)


@dataclass(frozen=True, slots=True)
class DecodedContainer:
    data: bytes = field(repr=False)
    mime_type: str
    suggested_filename: str

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True, slots=True)
class DecodedPayload:
    message_type: MessageType
    data: bytes = field(repr=False)
    text: str | None = None

    @property
    def size(self) -> int:
        return len(self.data)


def _container_extension(carrier: FileSource, mime_type: str) -> str:
    suffix = PurePath(carrier.name).suffix.lower()
    if suffix:
        return suffix
    return mimetypes.guess_extension(mime_type) or ".bin"


def decode_container(response: ContainerResponse, carrier: FileSource) -> DecodedContainer:
    """Wrap the opaque embed body; the container format is never parsed."""

    mime_type = response.content_type
    if not mime_type or mime_type == DEFAULT_MIME:
        mime_type = carrier.mime_type or DEFAULT_MIME

    expected = mime_family(carrier.mime_type)
    actual = mime_family(mime_type)
    if expected and actual and expected != actual:
        logger.warning("Container type %s does not match carrier type %s", mime_type, carrier.mime_type)

    stem = PurePath(carrier.name).stem or "container"
    filename = f"{stem}_stego_{run_suffix()}{_container_extension(carrier, mime_type)}"
    return DecodedContainer(data=response.data, mime_type=mime_type, suggested_filename=filename)


def decode_base64(content: str) -> bytes:
    """Strict base64 decode; embedded whitespace is ignored."""

    compact = "".join(content.split())
    try:
        return base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise DecodeError(f"Payload is not valid base64: {exc}") from exc


def decode_extract(result: ExtractResult) -> DecodedPayload:
    """Dispatch on the envelope's message type and decode its content."""

    if not result.success:
        raise DomainError(result.error_message or DOMAIN_FALLBACK)

    try:
        message = MessageType(result.message_type)
    except ValueError:
        raise DecodeError(f"Unexpected message type from server: {result.message_type!r}") from None

    content = result.content
    if not isinstance(content, str):
        raise DecodeError(f"Expected string content for a {message.value} payload")

    if message is MessageType.TEXT:
        try:
            data = content.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise DecodeError("Text payload is not valid UTF-8") from exc
        return DecodedPayload(message_type=message, data=data, text=content)

    data = decode_base64(content)
    logger.debug("Decoded %s payload (%d bytes, render as %s)", message.value, len(data), registry.render_mime(message))
    return DecodedPayload(message_type=message, data=data)


__all__ = [
    "DecodedContainer",
    "DecodedPayload",
    "decode_base64",
    "decode_container",
    "decode_extract",
    "run_suffix",
]
