"""Turn decoded results and failures into presentation-ready descriptors."""
from __future__ import annotations

import io
from dataclasses import dataclass, field

from PIL import Image, UnidentifiedImageError

from . import registry
from .decoder import DecodedContainer, DecodedPayload, run_suffix
from .errors import StegoClientError
from .types import Artifact, ArtifactKind, ByteHandle, ExtractResult, FileSource, MediaType, MessageType, Operation

PREVIEW_KINDS = {
    "image": ArtifactKind.PREVIEW_IMAGE,
    "audio": ArtifactKind.PREVIEW_AUDIO,
    "video": ArtifactKind.PREVIEW_VIDEO,
}

ERROR_TITLES = {
    Operation.EMBED: "Embedding Failed",
    Operation.EXTRACT: "Extraction Failed",
}

HINTS = {
    "validation": (
        "Ensure all required fields are filled",
        "Select a container file that matches the chosen media type",
        "Enter a passphrase",
    ),
    "configuration": (
        "The client and the service disagree on the request format",
        "Update the client or check the service version",
    ),
    "transport": (
        "Confirm network connectivity",
        "Check that the service address is correct and the service is running",
        "Retry once the connection is available",
    ),
    "server": (
        "Check file format compatibility",
        "Verify file size limitations",
        "The payload may be too large for the selected container",
    ),
    "domain": (
        "Incorrect decryption passphrase",
        "File does not contain embedded data",
        "Container file may be corrupted",
    ),
    "decode": (
        "The service returned content that could not be decoded",
        "Incompatible steganographic format",
        "Try the extraction again or contact the service operator",
    ),
    "busy": (
        "Wait for the current submission to finish",
    ),
}
GENERIC_HINTS = ("Try again",)


@dataclass(slots=True)
class RenderedResult:
    """Artifact plus the human-readable summary shown next to it."""

    title: str
    artifact: Artifact
    summary: list[tuple[str, str]] = field(default_factory=list)

    def summary_text(self) -> str:
        width = max((len(label) for label, _ in self.summary), default=0)
        return "\n".join(f"{label:<{width}} : {value}" for label, value in self.summary)


@dataclass(frozen=True, slots=True)
class ErrorDescriptor:
    title: str
    message: str
    kind: str
    hints: tuple[str, ...]

    def as_text(self) -> str:
        lines = [self.title, self.message]
        lines.extend(f"  - {hint}" for hint in self.hints)
        return "\n".join(lines)


def format_size(size: int) -> str:
    if size < 1024:
        return f"{size} bytes"
    if size < 1024 * 1024:
        return f"{size / 1024:.2f} KB"
    return f"{size / 1024 / 1024:.2f} MB"


def image_dimensions(data: bytes) -> tuple[int, int] | None:
    """Pixel size of *data* if Pillow can identify it, else ``None``."""

    try:
        with Image.open(io.BytesIO(data)) as image:
            return image.size
    except (UnidentifiedImageError, OSError, ValueError):
        return None


def _artifact_kind(mime_type: str, fallback: str) -> ArtifactKind:
    family = mime_type.split("/", 1)[0] if mime_type else fallback
    return PREVIEW_KINDS.get(family, PREVIEW_KINDS[fallback])


def _add_dimensions(summary: list[tuple[str, str]], artifact: Artifact) -> None:
    if artifact.kind is ArtifactKind.PREVIEW_IMAGE:
        dimensions = image_dimensions(artifact.handle.data)
        if dimensions:
            summary.append(("Dimensions", f"{dimensions[0]} x {dimensions[1]} px"))


def render_container(
    decoded: DecodedContainer,
    carrier: FileSource,
    media_type: MediaType,
    message_type: MessageType,
) -> RenderedResult:
    """Describe a freshly embedded container."""

    artifact = Artifact(
        kind=_artifact_kind(decoded.mime_type, media_type.value),
        mime_type=decoded.mime_type,
        suggested_filename=decoded.suggested_filename,
        handle=ByteHandle(decoded.data),
    )
    summary = [
        ("Original File", carrier.name),
        ("Container Size", format_size(decoded.size)),
        ("Media Type", registry.media_label(media_type)),
        ("Payload Type", message_type.value.upper()),
    ]
    _add_dimensions(summary, artifact)
    return RenderedResult(title="Embedding Successful", artifact=artifact, summary=summary)


def render_payload(
    decoded: DecodedPayload,
    carrier: FileSource,
    envelope: ExtractResult | None = None,
) -> RenderedResult:
    """Describe a recovered payload."""

    message = decoded.message_type
    extension = registry.extract_extension(message)
    filename = f"extracted_{message.value}_{run_suffix()}{extension}"
    if message is MessageType.TEXT:
        artifact = Artifact(
            kind=ArtifactKind.TEXT,
            mime_type="text/plain",
            suggested_filename=filename,
            handle=ByteHandle(decoded.data),
            text=decoded.text,
        )
    else:
        artifact = Artifact(
            kind=PREVIEW_KINDS[message.value],
            mime_type=registry.render_mime(message),
            suggested_filename=filename,
            handle=ByteHandle(decoded.data),
        )

    summary = [
        ("Container", carrier.name),
        ("Payload Type", message.value.upper()),
        ("Payload Size", format_size(decoded.size)),
    ]
    _add_dimensions(summary, artifact)
    if envelope is not None and envelope.size is not None:
        summary.append(("Reported Size", format_size(envelope.size)))
    if envelope is not None and envelope.timestamp is not None:
        summary.append(("Server Timestamp", str(envelope.timestamp)))
    return RenderedResult(title="Extraction Successful", artifact=artifact, summary=summary)


def render_error(error: BaseException, operation: Operation | str) -> ErrorDescriptor:
    """Descriptor with a title, the failure message and hints for its kind."""

    title = ERROR_TITLES[Operation(operation)]
    if isinstance(error, StegoClientError):
        kind = error.kind
        message = error.message
    else:
        kind = "unexpected"
        message = str(error) or error.__class__.__name__
    return ErrorDescriptor(title=title, message=message, kind=kind, hints=HINTS.get(kind, GENERIC_HINTS))


__all__ = [
    "ErrorDescriptor",
    "HINTS",
    "RenderedResult",
    "format_size",
    "image_dimensions",
    "render_container",
    "render_error",
    "render_payload",
]
