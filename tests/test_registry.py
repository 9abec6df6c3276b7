"""Tests for the type registry tables."""
from __future__ import annotations

import pytest

from stegoclient.core import registry
from stegoclient.core.errors import ConfigurationError
from stegoclient.core.types import MediaType, MessageType, Operation


def test_carrier_fields_are_distinct_per_media_and_operation():
    embed = {registry.carrier_field(Operation.EMBED, media) for media in MediaType}
    extract = {registry.carrier_field(Operation.EXTRACT, media) for media in MediaType}
    assert embed == {"carrier_image", "carrier_audio", "carrier_video"}
    assert extract == {"image", "audio", "video"}


def test_payload_fields_never_collide_with_embed_carrier_fields():
    carriers = {registry.carrier_field(Operation.EMBED, media) for media in MediaType}
    payloads = {registry.payload_field(message) for message in MessageType}
    assert payloads == {"text", "message_image", "message_audio", "message_video"}
    assert not carriers & payloads


@pytest.mark.parametrize(
    "message, expected",
    [
        (MessageType.TEXT, None),
        (MessageType.IMAGE, "image/png"),
        (MessageType.AUDIO, "audio/mpeg"),
        (MessageType.VIDEO, "video/mp4"),
    ],
)
def test_render_mime(message, expected):
    assert registry.render_mime(message) == expected


def test_accept_filter_and_label():
    assert registry.accept_filter(MediaType.AUDIO) == "audio/*"
    assert registry.media_label(MediaType.VIDEO) == "Video"


def test_unknown_types_are_configuration_faults():
    with pytest.raises(ConfigurationError):
        registry.media_type("pdf")
    with pytest.raises(ConfigurationError):
        registry.message_type("pdf")
    with pytest.raises(ConfigurationError):
        registry.payload_field("pdf")
    with pytest.raises(ConfigurationError):
        registry.carrier_field(Operation.EMBED, "pdf")
