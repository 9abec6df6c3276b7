"""Tests for validator helpers."""
from __future__ import annotations

from stegoclient.core.types import FileSource, MediaType
from stegoclient.utils.validators import (
    detect_media_type,
    file_dialog_filter,
    supported_extensions,
    validate_carrier,
)


def test_validate_carrier_accepts_matching_family(png_bytes) -> None:
    result = validate_carrier(FileSource.from_bytes("sample.png", png_bytes), MediaType.IMAGE)
    assert result.valid


def test_validate_carrier_rejects_other_family() -> None:
    result = validate_carrier(FileSource.from_bytes("clip.mp4", b"data"), MediaType.AUDIO)
    assert not result.valid
    assert "video" in result.message


def test_validate_carrier_accepts_unknown_type() -> None:
    source = FileSource("upload", b"data", "application/octet-stream")
    assert validate_carrier(source, MediaType.VIDEO).valid


def test_validate_carrier_falls_back_to_extension() -> None:
    source = FileSource("track.flac", b"data", "application/octet-stream")
    assert validate_carrier(source, MediaType.AUDIO).valid
    assert not validate_carrier(source, MediaType.IMAGE).valid


def test_validate_carrier_rejects_empty() -> None:
    result = validate_carrier(FileSource.from_bytes("sample.png", b""), MediaType.IMAGE)
    assert not result.valid


def test_detect_media_type() -> None:
    assert detect_media_type("a.JPG") is MediaType.IMAGE
    assert detect_media_type("a.wav") is MediaType.AUDIO
    assert detect_media_type("a.mkv") is MediaType.VIDEO
    assert detect_media_type("a.txt") is None


def test_dialog_filter_lists_extensions() -> None:
    text = file_dialog_filter(MediaType.IMAGE, "Image")
    assert text.startswith("Image (")
    assert "*.png" in text
    assert ".mp4" in supported_extensions()
