from __future__ import annotations

import base64

import pytest

from stegoclient.core import form_state as fs
from stegoclient.core.types import FileSource, Operation

MINIMAL_PNG = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR4nGP4z8DwHwAFAAH/iZk9HQAAAABJRU5ErkJggg=="
)


@pytest.fixture
def png_bytes() -> bytes:
    return MINIMAL_PNG


@pytest.fixture
def carriers(png_bytes) -> dict:
    return {
        "image": FileSource.from_bytes("cover.png", png_bytes),
        "audio": FileSource.from_bytes("song.mp3", b"ID3\x03\x00fake-mp3"),
        "video": FileSource.from_bytes("clip.mp4", b"\x00\x00\x00\x18ftypmp42"),
    }


@pytest.fixture
def payload_files(png_bytes) -> dict:
    return {
        "image": FileSource.from_bytes("secret.png", png_bytes),
        "audio": FileSource.from_bytes("voice.mp3", b"ID3voice"),
        "video": FileSource.from_bytes("movie.mp4", b"\x00\x00\x00\x18ftypisom"),
    }


@pytest.fixture
def embed_state(carriers):
    """Complete embed form: image carrier, text payload."""

    state = fs.new_form(Operation.EMBED)
    state = fs.select_media_type(state, "image")
    state = fs.choose_carrier(state, carriers["image"])
    state = fs.select_message_type(state, "text")
    state = fs.set_payload_text(state, "hello")
    return fs.set_passphrase(state, "secret1")


@pytest.fixture
def extract_state(carriers):
    state = fs.new_form(Operation.EXTRACT)
    state = fs.select_media_type(state, "image")
    state = fs.choose_carrier(state, carriers["image"])
    return fs.set_passphrase(state, "secret1")
