"""Build multipart wire requests from a validated form state."""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from . import registry
from .form_state import FormState, validate_embed, validate_extract
from .errors import ConfigurationError
from .types import FileSource, MessageType, Operation


@dataclass(frozen=True, slots=True)
class WireRequest:
    """One outbound multipart request: plain fields plus file attachments."""

    operation: Operation
    path: str
    fields: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    files: Mapping[str, FileSource] = field(default_factory=lambda: MappingProxyType({}))
    carrier_field: str = ""

    @property
    def carrier(self) -> FileSource:
        return self.files[self.carrier_field]

    def describe(self) -> str:
        """Loggable summary; secret values are replaced by their length."""

        parts = []
        for name in sorted(self.fields):
            value = self.fields[name]
            if name in (registry.PASSPHRASE_FIELD, registry.TEXT_FIELD):
                value = f"<{len(value)} chars>"
            parts.append(f"{name}={value}")
        parts.extend(f"{name}=<{source.name}, {source.size} bytes>" for name, source in sorted(self.files.items()))
        return f"POST /{self.path} " + " ".join(parts)


def build_embed_request(state: FormState) -> WireRequest:
    """Return the ``/embed`` request for *state* or raise ``ValidationError``."""

    if state.operation is not Operation.EMBED:
        raise ConfigurationError(f"Cannot build an embed request from a {state.operation.value} form")
    validate_embed(state)

    media = state.media_type
    message = state.message_type
    carrier_name = registry.carrier_field(Operation.EMBED, media)
    payload_name = registry.payload_field(message)

    fields = {
        registry.MEDIA_TYPE_FIELD: media.value,
        registry.MESSAGE_TYPE_FIELD: message.value,
        registry.PASSPHRASE_FIELD: state.passphrase,
    }
    files = {carrier_name: state.carrier}
    if message is MessageType.TEXT:
        fields[payload_name] = state.payload_text
    else:
        if payload_name == carrier_name:
            raise ConfigurationError(f"Payload field {payload_name!r} collides with the carrier field")
        files[payload_name] = state.payload_file

    return WireRequest(
        operation=Operation.EMBED,
        path=Operation.EMBED.value,
        fields=MappingProxyType(fields),
        files=MappingProxyType(files),
        carrier_field=carrier_name,
    )


def build_extract_request(state: FormState) -> WireRequest:
    """Return the ``/extract`` request for *state* or raise ``ValidationError``."""

    if state.operation is not Operation.EXTRACT:
        raise ConfigurationError(f"Cannot build an extract request from a {state.operation.value} form")
    validate_extract(state)

    carrier_name = registry.carrier_field(Operation.EXTRACT, state.media_type)
    fields = {
        registry.MEDIA_TYPE_FIELD: state.media_type.value,
        registry.PASSPHRASE_FIELD: state.passphrase,
    }
    return WireRequest(
        operation=Operation.EXTRACT,
        path=Operation.EXTRACT.value,
        fields=MappingProxyType(fields),
        files=MappingProxyType({carrier_name: state.carrier}),
        carrier_field=carrier_name,
    )


__all__ = ["WireRequest", "build_embed_request", "build_extract_request"]
