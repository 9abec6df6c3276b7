"""Tests for single-flight submissions and artifact ownership."""
from __future__ import annotations

import pytest

from stegoclient.core.errors import DomainError, SubmissionInProgress
from stegoclient.core.renderer import RenderedResult, render_error
from stegoclient.core.submission import REJECT, ArtifactSlot, SubmissionController
from stegoclient.core.types import Artifact, ArtifactKind, ByteHandle


def _result(data: bytes) -> RenderedResult:
    artifact = Artifact(
        kind=ArtifactKind.TEXT,
        mime_type="text/plain",
        suggested_filename="extracted_text_1.txt",
        handle=ByteHandle(data),
        text=data.decode(),
    )
    return RenderedResult(title="Extraction Successful", artifact=artifact)


def test_byte_handle_release():
    handle = ByteHandle(b"abc")
    assert handle.data == b"abc"
    handle.release()
    assert handle.released
    with pytest.raises(RuntimeError):
        _ = handle.data


def test_slot_releases_previous_artifact():
    slot = ArtifactSlot()
    first, second = _result(b"one"), _result(b"two")
    slot.replace(first.artifact)
    slot.replace(second.artifact)
    assert first.artifact.handle.released
    assert not second.artifact.handle.released
    slot.discard()
    assert second.artifact.handle.released
    assert slot.current is None


def test_busy_flag_follows_submission():
    controller = SubmissionController("extract")
    assert not controller.busy
    ticket = controller.begin()
    assert controller.busy
    assert controller.finish(ticket, _result(b"done"))
    assert not controller.busy


def test_later_submission_wins_when_earlier_completes_last():
    controller = SubmissionController("extract")
    first = controller.begin()
    second = controller.begin()

    newer, older = _result(b"new"), _result(b"old")
    assert controller.finish(second, newer) is True
    assert controller.finish(first, older) is False

    assert controller.outcome is newer
    assert controller.slot.current is newer.artifact
    assert older.artifact.handle.released


def test_earlier_completion_is_dropped_while_later_is_pending():
    controller = SubmissionController("embed")
    first = controller.begin()
    second = controller.begin()

    stale = _result(b"stale")
    assert controller.finish(first, stale) is False
    assert controller.outcome is None
    assert controller.busy
    assert stale.artifact.handle.released

    fresh = _result(b"fresh")
    assert controller.finish(second, fresh) is True
    assert controller.slot.current is fresh.artifact


def test_ticket_cannot_be_accepted_twice():
    controller = SubmissionController("extract")
    ticket = controller.begin()
    assert controller.finish(ticket, _result(b"a"))
    assert not controller.finish(ticket, _result(b"b"))


def test_error_outcome_releases_displayed_artifact():
    controller = SubmissionController("extract")
    ok = _result(b"ok")
    controller.finish(controller.begin(), ok)

    error = render_error(DomainError("Incorrect passphrase"), "extract")
    assert controller.finish(controller.begin(), error)
    assert controller.outcome is error
    assert controller.slot.current is None
    assert ok.artifact.handle.released


def test_reject_policy_refuses_second_submission():
    controller = SubmissionController("embed", policy=REJECT)
    ticket = controller.begin()
    with pytest.raises(SubmissionInProgress):
        controller.begin()
    assert controller.finish(ticket, _result(b"x"))
    controller.begin()


def test_forms_are_independent():
    embed = SubmissionController("embed")
    extract = SubmissionController("extract")
    embed_ticket = embed.begin()
    extract_ticket = extract.begin()
    assert embed.finish(embed_ticket, _result(b"e"))
    assert extract.finish(extract_ticket, _result(b"x"))


def test_unknown_policy_is_rejected():
    with pytest.raises(ValueError):
        SubmissionController("embed", policy="queue")


def test_artifact_save_into_existing_directory(tmp_path):
    artifact = _result(b"payload").artifact
    target = artifact.save(tmp_path)
    assert target == tmp_path / "extracted_text_1.txt"
    assert target.read_bytes() == b"payload"


def test_artifact_save_to_new_directory_with_trailing_slash(tmp_path):
    artifact = _result(b"payload").artifact
    target = artifact.save(f"{tmp_path / 'fresh'}/")
    assert target == tmp_path / "fresh" / "extracted_text_1.txt"
    assert target.is_file()


def test_artifact_save_to_explicit_file(tmp_path):
    artifact = _result(b"payload").artifact
    target = artifact.save(tmp_path / "nested" / "message.txt")
    assert target.read_bytes() == b"payload"


def test_abandon_drops_in_flight_result():
    controller = SubmissionController("extract")
    shown = _result(b"shown")
    controller.finish(controller.begin(), shown)

    ticket = controller.begin()
    assert controller.abandon() == ticket
    assert not controller.busy
    assert controller.outcome is None
    assert shown.artifact.handle.released

    late = _result(b"late")
    assert controller.finish(ticket, late) is False
    assert controller.slot.current is None
    assert late.artifact.handle.released


def test_abandon_when_idle_is_harmless():
    controller = SubmissionController("embed")
    assert controller.abandon() is None
    assert not controller.busy
