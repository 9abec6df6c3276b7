"""Selection-driven form state for the embed and extract forms.

The state is an immutable :class:`FormState` value. Handlers take the
current state plus one user event and return a new state;
:func:`derive_visibility` turns a state into the set of visible, enabled
and required input groups. Nothing here touches the network or Qt.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Mapping

from . import registry
from .errors import ValidationError
from .types import FileSource, MediaType, MessageType, Operation
from ..utils.validators import validate_carrier


def _frozen(mapping: Mapping | None = None) -> Mapping:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True, slots=True)
class FormState:
    """Current selections and inputs of one form."""

    operation: Operation
    media_type: MediaType | None = None
    message_type: MessageType | None = None
    carriers: Mapping[MediaType, FileSource] = field(default_factory=_frozen)
    payload_text: str = ""
    payload_files: Mapping[MessageType, FileSource] = field(default_factory=_frozen)
    passphrase: str = ""

    @property
    def carrier(self) -> FileSource | None:
        """Carrier selected for the current media type, if any."""

        if self.media_type is None:
            return None
        return self.carriers.get(self.media_type)

    @property
    def payload_file(self) -> FileSource | None:
        if self.message_type is None or self.message_type is MessageType.TEXT:
            return None
        return self.payload_files.get(self.message_type)


@dataclass(frozen=True, slots=True)
class FormLayout:
    """Derived visibility/requiredness of the input groups."""

    visible_carriers: frozenset[MediaType]
    enabled_carriers: frozenset[MediaType]
    required_carriers: frozenset[MediaType]
    visible_payloads: frozenset[MessageType]
    required_payloads: frozenset[MessageType]
    accept: str | None
    carrier_label: str | None
    show_message_type: bool


def new_form(operation: Operation | str) -> FormState:
    return FormState(operation=Operation(operation))


def select_media_type(state: FormState, media: MediaType | str | None) -> FormState:
    """Switch the carrier family, clearing carriers chosen for other families."""

    if media is None:
        return replace(state, media_type=None, carriers=_frozen())
    selected = registry.media_type(media)
    kept = {key: value for key, value in state.carriers.items() if key is selected}
    return replace(state, media_type=selected, carriers=_frozen(kept))


def select_message_type(state: FormState, message: MessageType | str | None) -> FormState:
    if state.operation is Operation.EXTRACT:
        # the service decides the message type on extract
        return state
    selected = registry.message_type(message) if message is not None else None
    return replace(state, message_type=selected)


def choose_carrier(state: FormState, source: FileSource | None) -> FormState:
    """Attach *source* to the carrier group of the current media type."""

    if state.media_type is None:
        raise ValidationError("media_type", "Please select a media type")
    carriers = dict(state.carriers)
    if source is None:
        carriers.pop(state.media_type, None)
    else:
        carriers[state.media_type] = source
    return replace(state, carriers=_frozen(carriers))


def set_payload_text(state: FormState, text: str) -> FormState:
    return replace(state, payload_text=text or "")


def choose_payload_file(state: FormState, message: MessageType | str, source: FileSource | None) -> FormState:
    selected = registry.message_type(message)
    if selected is MessageType.TEXT:
        raise ValidationError("message_type", "Text payloads are entered as text, not as a file")
    files = dict(state.payload_files)
    if source is None:
        files.pop(selected, None)
    else:
        files[selected] = source
    return replace(state, payload_files=_frozen(files))


def set_passphrase(state: FormState, passphrase: str) -> FormState:
    return replace(state, passphrase=passphrase or "")


def reset(state: FormState) -> FormState:
    return new_form(state.operation)


def derive_visibility(state: FormState) -> FormLayout:
    """Return which input groups are visible, enabled and required for *state*."""

    if state.media_type is None:
        carriers: frozenset[MediaType] = frozenset()
        accept = None
        label = None
    else:
        carriers = frozenset({state.media_type})
        accept = registry.accept_filter(state.media_type)
        label = f"Select {registry.media_label(state.media_type)} Container"

    is_embed = state.operation is Operation.EMBED
    if is_embed and state.message_type is not None:
        payloads: frozenset[MessageType] = frozenset({state.message_type})
    else:
        payloads = frozenset()

    return FormLayout(
        visible_carriers=carriers,
        enabled_carriers=carriers,
        required_carriers=carriers,
        visible_payloads=payloads,
        required_payloads=payloads,
        accept=accept,
        carrier_label=label,
        show_message_type=is_embed,
    )


def _require_carrier(state: FormState) -> FileSource:
    if state.media_type is None:
        raise ValidationError("media_type", "Please select a media type")
    carrier = state.carrier
    if carrier is None:
        raise ValidationError("carrier", "Please select a container file")
    check = validate_carrier(carrier, state.media_type)
    if not check.valid:
        raise ValidationError("carrier", check.message)
    return carrier


def _require_passphrase(state: FormState) -> str:
    if not state.passphrase:
        raise ValidationError("passphrase", "Please enter a passphrase")
    return state.passphrase


def validate_embed(state: FormState) -> None:
    """Fail fast with the first missing embed input."""

    _require_carrier(state)
    if state.message_type is None:
        raise ValidationError("message_type", "Please select a payload type")
    _require_passphrase(state)
    if state.message_type is MessageType.TEXT:
        if not state.payload_text.strip():
            raise ValidationError("text", "Please enter secret text")
    elif state.payload_file is None:
        raise ValidationError(
            registry.payload_field(state.message_type),
            f"Please select the {state.message_type.value} payload file",
        )


def validate_extract(state: FormState) -> None:
    """Fail fast with the first missing extract input."""

    _require_carrier(state)
    _require_passphrase(state)


__all__ = [
    "FormLayout",
    "FormState",
    "choose_carrier",
    "choose_payload_file",
    "derive_visibility",
    "new_form",
    "reset",
    "select_media_type",
    "select_message_type",
    "set_passphrase",
    "set_payload_text",
    "validate_embed",
    "validate_extract",
]
