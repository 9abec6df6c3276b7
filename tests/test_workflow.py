"""End-to-end scenarios through builder, transport, decoder and renderer."""
from __future__ import annotations

import base64
import re

from fakes import FakeResponse, FakeSession
from stegoclient.core import form_state as fs
from stegoclient.core.renderer import ErrorDescriptor, RenderedResult
from stegoclient.core.submission import SubmissionController
from stegoclient.core.transport import TransportClient
from stegoclient.core.types import ArtifactKind, Operation
from stegoclient.core.workflow import execute_submission, run_embed, run_extract, to_record


def _client(session: FakeSession) -> TransportClient:
    return TransportClient(base_url="http://stego.test/api", timeout=3, session=session)


def test_scenario_a_text_into_image(embed_state, png_bytes):
    session = FakeSession(FakeResponse(200, png_bytes, {"Content-Type": "image/png"}))
    outcome = run_embed(embed_state, _client(session))

    call = session.calls[0]
    assert set(call["files"]) == {"carrier_image"}
    assert call["data"]["message_type"] == "text"
    assert call["data"]["text"] == "hello"
    assert call["data"]["passphrase"] == "secret1"

    assert isinstance(outcome, RenderedResult)
    artifact = outcome.artifact
    assert artifact.kind is ArtifactKind.PREVIEW_IMAGE
    assert re.fullmatch(r"cover_stego_\d+\.png", artifact.suggested_filename)
    assert artifact.size == len(png_bytes)
    summary = dict(outcome.summary)
    assert summary["Container Size"] == f"{len(png_bytes)} bytes"
    assert summary["Payload Type"] == "TEXT"


def test_scenario_b_wrong_passphrase(carriers):
    state = fs.select_media_type(fs.new_form(Operation.EXTRACT), "audio")
    state = fs.set_passphrase(fs.choose_carrier(state, carriers["audio"]), "wrong")
    session = FakeSession(FakeResponse.json_body({"success": False, "message": "Incorrect passphrase"}))

    outcome = run_extract(state, _client(session))

    assert set(session.calls[0]["files"]) == {"audio"}
    assert isinstance(outcome, ErrorDescriptor)
    assert outcome.kind == "domain"
    assert outcome.message == "Incorrect passphrase"
    assert outcome.title == "Extraction Failed"


def test_scenario_c_image_payload(extract_state, png_bytes):
    body = {"success": True, "message_type": "image", "content": base64.b64encode(png_bytes).decode("ascii")}
    outcome = run_extract(extract_state, _client(FakeSession(FakeResponse.json_body(body))))

    assert isinstance(outcome, RenderedResult)
    artifact = outcome.artifact
    assert artifact.handle.data.startswith(b"\x89PNG\r\n\x1a\n")
    assert artifact.handle.data == png_bytes
    assert artifact.kind is ArtifactKind.PREVIEW_IMAGE
    assert artifact.mime_type == "image/png"
    assert re.fullmatch(r"extracted_image_\d+\.png", artifact.suggested_filename)


def test_scenario_d_missing_carrier_never_hits_network(embed_state):
    session = FakeSession()
    outcome = run_embed(fs.choose_carrier(embed_state, None), _client(session))

    assert isinstance(outcome, ErrorDescriptor)
    assert outcome.kind == "validation"
    assert session.calls == []


def test_corrupt_payload_renders_no_artifact(extract_state):
    body = {"success": True, "message_type": "video", "content": "%%%"}
    outcome = run_extract(extract_state, _client(FakeSession(FakeResponse.json_body(body))))
    assert isinstance(outcome, ErrorDescriptor)
    assert outcome.kind == "decode"


def test_lone_surrogate_text_renders_decode_error(extract_state):
    raw = b'{"success": true, "message_type": "text", "content": "\\ud800"}'
    session = FakeSession(FakeResponse(200, raw, {"Content-Type": "application/json"}))
    outcome = run_extract(extract_state, _client(session))
    assert isinstance(outcome, ErrorDescriptor)
    assert outcome.kind == "decode"
    assert outcome.message == "Text payload is not valid UTF-8"


def test_server_error_is_rendered(embed_state):
    session = FakeSession(FakeResponse.json_body({"success": False, "message": "invalid message_type"}, 400))
    outcome = run_embed(embed_state, _client(session))
    assert isinstance(outcome, ErrorDescriptor)
    assert outcome.kind == "server"
    assert outcome.message == "invalid message_type"


def test_execute_submission_closes_client(extract_state):
    session = FakeSession(FakeResponse.json_body({"success": True, "message_type": "text", "content": "hi"}))
    outcome = execute_submission(extract_state, lambda: _client(session))
    assert isinstance(outcome, RenderedResult)
    assert session.closed


def test_interleaved_submissions_show_only_latest(embed_state, png_bytes):
    controller = SubmissionController("embed")
    client = _client(FakeSession(FakeResponse(200, png_bytes, {"Content-Type": "image/png"})))

    first = controller.begin()
    second = controller.begin()
    second_outcome = run_embed(embed_state, client)
    first_outcome = run_embed(embed_state, client)

    assert controller.finish(second, second_outcome)
    assert not controller.finish(first, first_outcome)
    assert controller.slot.current is second_outcome.artifact
    assert first_outcome.artifact.handle.released


def test_to_record(embed_state, png_bytes):
    ok = run_embed(embed_state, _client(FakeSession(FakeResponse(200, png_bytes, {"Content-Type": "image/png"}))))
    record = to_record(ok, Operation.EMBED, embed_state)
    assert record.success and record.target == "cover.png" and record.size == len(png_bytes)

    failed = run_embed(fs.set_passphrase(embed_state, ""), _client(FakeSession()))
    record = to_record(failed, Operation.EMBED, embed_state)
    assert not record.success
    assert record.message == "Please enter a passphrase"
