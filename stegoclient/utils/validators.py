"""Validation helpers shared between the CLI and GUI."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from ..core.types import FileSource, MediaType, mime_family

IMAGE_EXTENSIONS = {".png", ".bmp", ".gif", ".tif", ".tiff", ".jpg", ".jpeg", ".webp"}
AUDIO_EXTENSIONS = {".wav", ".mp3", ".flac", ".ogg", ".aac", ".wma", ".m4a"}
VIDEO_EXTENSIONS = {".mp4", ".avi", ".mkv", ".mov", ".webm", ".ogv"}

EXTENSIONS_BY_MEDIA = {
    MediaType.IMAGE: IMAGE_EXTENSIONS,
    MediaType.AUDIO: AUDIO_EXTENSIONS,
    MediaType.VIDEO: VIDEO_EXTENSIONS,
}


@dataclass(frozen=True)
class ValidationResult:
    """Simple structure describing a validation outcome."""

    valid: bool
    message: str = ""


def _normalize_extension(name: str) -> str:
    return Path(name).suffix.lower()


def detect_media_type(name: str) -> MediaType | None:
    """Guess the media family of a file from its extension."""

    suffix = _normalize_extension(name)
    for media, extensions in EXTENSIONS_BY_MEDIA.items():
        if suffix in extensions:
            return media
    return None


def validate_carrier(source: FileSource, media: MediaType) -> ValidationResult:
    """Check that *source* is non-empty and belongs to the *media* family.

    A declared MIME type decides the family; files without a recognisable
    MIME type fall back to the extension, and are accepted when neither is
    known.
    """

    if source.size == 0:
        return ValidationResult(False, f"Carrier file is empty: {source.name}")

    family = mime_family(source.mime_type)
    if family is None:
        detected = detect_media_type(source.name)
        family = detected.value if detected else None

    if family is not None and family != media.value:
        return ValidationResult(
            False,
            f"Carrier {source.name} does not look like {media.value} (detected {family})",
        )

    return ValidationResult(True, "OK")


def supported_extensions(media: MediaType | None = None) -> Iterable[str]:
    """Return the supported carrier file extensions, optionally for one family."""

    if media is None:
        combined: set[str] = set()
        for extensions in EXTENSIONS_BY_MEDIA.values():
            combined |= extensions
        return sorted(combined)
    return sorted(EXTENSIONS_BY_MEDIA[media])


def file_dialog_filter(media: MediaType, label: str) -> str:
    """Qt file dialog filter string for *media* (``"Image (*.png *.jpg)"``)."""

    patterns = " ".join(f"*{ext}" for ext in supported_extensions(media))
    return f"{label} ({patterns})"


__all__ = [
    "ValidationResult",
    "detect_media_type",
    "file_dialog_filter",
    "supported_extensions",
    "validate_carrier",
]
