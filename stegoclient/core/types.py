"""Shared dataclasses and enums used across STEGOCLIENT."""
from __future__ import annotations

import mimetypes
import os
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Literal

DEFAULT_MIME = "application/octet-stream"


class MediaType(str, Enum):
    """Carrier family."""

    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"


class MessageType(str, Enum):
    """Payload family."""

    TEXT = "text"
    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"


class Operation(str, Enum):
    EMBED = "embed"
    EXTRACT = "extract"


class ArtifactKind(str, Enum):
    PREVIEW_IMAGE = "preview-image"
    PREVIEW_AUDIO = "preview-audio"
    PREVIEW_VIDEO = "preview-video"
    TEXT = "text"


def guess_mime(name: str) -> str:
    mime, _ = mimetypes.guess_type(name)
    return mime or DEFAULT_MIME


def mime_family(mime_type: str | None) -> str | None:
    """Return the top-level MIME family (``image`` for ``image/png``)."""

    if not mime_type or mime_type == DEFAULT_MIME or "/" not in mime_type:
        return None
    return mime_type.split("/", 1)[0].strip().lower()


@dataclass(frozen=True, slots=True)
class FileSource:
    """A user-selected file held in memory with its declared MIME type."""

    name: str
    data: bytes = field(repr=False)
    mime_type: str = DEFAULT_MIME

    @classmethod
    def from_path(cls, path: Path | str) -> "FileSource":
        candidate = Path(path)
        return cls(name=candidate.name, data=candidate.read_bytes(), mime_type=guess_mime(candidate.name))

    @classmethod
    def from_bytes(cls, name: str, data: bytes, mime_type: str | None = None) -> "FileSource":
        return cls(name=name, data=bytes(data), mime_type=mime_type or guess_mime(name))

    @property
    def size(self) -> int:
        return len(self.data)


class ByteHandle:
    """Scoped, revocable reference to an in-memory byte buffer.

    The owner calls :meth:`release` once the artifact is superseded; any
    later read raises ``RuntimeError``.
    """

    __slots__ = ("handle_id", "_data")

    def __init__(self, data: bytes) -> None:
        self.handle_id = uuid.uuid4().hex
        self._data: bytes | None = bytes(data)

    @property
    def released(self) -> bool:
        return self._data is None

    @property
    def data(self) -> bytes:
        if self._data is None:
            raise RuntimeError(f"Byte handle {self.handle_id} has been released")
        return self._data

    @property
    def size(self) -> int:
        return len(self.data)

    def release(self) -> None:
        self._data = None

    def __repr__(self) -> str:
        state = "released" if self.released else f"{len(self._data or b'')} bytes"
        return f"ByteHandle({self.handle_id[:8]}, {state})"


@dataclass(slots=True)
class Artifact:
    """Presentation/download unit produced from a successful response."""

    kind: ArtifactKind
    mime_type: str
    suggested_filename: str
    handle: ByteHandle
    text: str | None = None

    @property
    def size(self) -> int:
        return self.handle.size

    def release(self) -> None:
        self.handle.release()

    def save(self, destination: str | Path) -> Path:
        """Write the artifact to *destination*.

        An existing directory, or a path spelled with a trailing separator,
        receives the suggested file name.
        """

        raw = str(destination)
        target = Path(destination)
        if target.is_dir() or raw.endswith(("/", os.sep)):
            target = target / self.suggested_filename
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(self.handle.data)
        return target


@dataclass(frozen=True, slots=True)
class ExtractResult:
    """Parsed ``/extract`` JSON envelope."""

    success: bool
    message_type: str | None = None
    content: object = None
    error_message: str | None = None
    timestamp: int | None = None
    size: int | None = None


@dataclass(slots=True)
class OperationRecord:
    """Represents the outcome of a submission, kept in the session history."""

    operation: Literal["embed", "extract"]
    target: str
    success: bool
    message: str
    size: int | None = None
    created_at: datetime = field(default_factory=datetime.now)
