"""End-to-end embed/extract pipeline: build, submit, decode, render."""
from __future__ import annotations

from typing import Callable

from utils.logger import log_operation, setup_logger

from .decoder import decode_container, decode_extract
from .errors import StegoClientError
from .form_state import FormState
from .renderer import ErrorDescriptor, render_container, render_error, render_payload
from .request_builder import build_embed_request, build_extract_request
from .submission import Outcome
from .transport import TransportClient
from .types import Operation, OperationRecord

logger = setup_logger(__name__)


def run_embed(state: FormState, client: TransportClient) -> Outcome:
    """Run one embed submission; every failure comes back as an error descriptor."""

    try:
        request = build_embed_request(state)
        response = client.submit_embed(request)
        decoded = decode_container(response, request.carrier)
        result = render_container(decoded, request.carrier, state.media_type, state.message_type)
    except StegoClientError as exc:
        log_operation(logger, "Embed", status="FAILED", details=f"{exc.kind}: {exc.message}")
        return render_error(exc, Operation.EMBED)
    log_operation(logger, "Embed", details=f"{result.artifact.suggested_filename}, {result.artifact.size} bytes")
    return result


def run_extract(state: FormState, client: TransportClient) -> Outcome:
    """Run one extract submission; every failure comes back as an error descriptor."""

    try:
        request = build_extract_request(state)
        envelope = client.submit_extract(request)
        decoded = decode_extract(envelope)
        result = render_payload(decoded, request.carrier, envelope)
    except StegoClientError as exc:
        log_operation(logger, "Extract", status="FAILED", details=f"{exc.kind}: {exc.message}")
        return render_error(exc, Operation.EXTRACT)
    log_operation(logger, "Extract", details=f"{decoded.message_type.value}, {decoded.size} bytes")
    return result


def run_submission(state: FormState, client: TransportClient) -> Outcome:
    if state.operation is Operation.EMBED:
        return run_embed(state, client)
    return run_extract(state, client)


def execute_submission(state: FormState, client_factory: Callable[[], TransportClient]) -> Outcome:
    """Run one submission on a fresh client; used from worker threads."""

    with client_factory() as client:
        return run_submission(state, client)


def to_record(outcome: Outcome, operation: Operation, state: FormState) -> OperationRecord:
    """History entry for a finished submission."""

    carrier = state.carrier
    target = carrier.name if carrier is not None else ""
    if isinstance(outcome, ErrorDescriptor):
        return OperationRecord(operation=operation.value, target=target, success=False, message=outcome.message)
    return OperationRecord(
        operation=operation.value,
        target=target,
        success=True,
        message=outcome.title,
        size=outcome.artifact.size,
    )


__all__ = ["execute_submission", "run_embed", "run_extract", "run_submission", "to_record"]
