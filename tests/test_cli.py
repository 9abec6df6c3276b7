"""Tests for the command line front end."""
from __future__ import annotations

import base64
import os
from pathlib import Path

from fakes import FakeResponse, FakeSession
from cli import StegoClientCLI
from main import parse_arguments
from stegoclient.core.transport import TransportClient


def _cli(argv, session: FakeSession) -> StegoClientCLI:
    args = parse_arguments(argv)
    return StegoClientCLI(args, client_factory=lambda: TransportClient(base_url="http://stego.test/api", session=session))


def test_embed_saves_container(tmp_path: Path, png_bytes, capsys) -> None:
    cover = tmp_path / "cover.png"
    cover.write_bytes(png_bytes)
    output = tmp_path / "out.png"
    session = FakeSession(FakeResponse(200, b"\x89PNG-stego", {"Content-Type": "image/png"}))

    ok = _cli(
        ["embed", "-m", "image", "-c", str(cover), "-t", "hello", "--passphrase", "pw", "-o", str(output)],
        session,
    ).run()

    assert ok
    assert output.read_bytes() == b"\x89PNG-stego"
    assert session.calls[0]["data"]["text"] == "hello"
    assert "Embedding Successful" in capsys.readouterr().out


def test_embed_infers_payload_type_from_file(tmp_path: Path, png_bytes) -> None:
    cover = tmp_path / "cover.png"
    cover.write_bytes(png_bytes)
    secret = tmp_path / "voice.mp3"
    secret.write_bytes(b"ID3voice")
    session = FakeSession(FakeResponse(200, b"stego", {"Content-Type": "image/png"}))

    ok = _cli(
        ["embed", "-m", "image", "-c", str(cover), "-p", str(secret), "--pw", "pw", "-o", str(tmp_path)],
        session,
    ).run()

    assert ok
    call = session.calls[0]
    assert call["data"]["message_type"] == "audio"
    assert set(call["files"]) == {"carrier_image", "message_audio"}
    assert len(list(tmp_path.glob("cover_stego_*.png"))) == 1


def test_extract_prints_text_payload(tmp_path: Path, png_bytes, capsys) -> None:
    stego = tmp_path / "stego.png"
    stego.write_bytes(png_bytes)
    session = FakeSession(FakeResponse.json_body({"success": True, "message_type": "text", "content": "top secret"}))

    assert _cli(["extract", "-m", "image", "-c", str(stego), "--pw", "pw"], session).run()
    out = capsys.readouterr().out
    assert "Recovered message" in out
    assert "top secret" in out


def test_extract_saves_binary_payload(tmp_path: Path, png_bytes) -> None:
    stego = tmp_path / "stego.png"
    stego.write_bytes(png_bytes)
    body = {"success": True, "message_type": "image", "content": base64.b64encode(png_bytes).decode("ascii")}
    out_dir = tmp_path / "out"
    out_dir.mkdir()

    assert _cli(["extract", "-m", "image", "-c", str(stego), "--pw", "pw", "-o", str(out_dir)],
                FakeSession(FakeResponse.json_body(body))).run()
    saved = list(out_dir.glob("extracted_image_*.png"))
    assert len(saved) == 1
    assert saved[0].read_bytes() == png_bytes


def test_extract_failure_returns_false(tmp_path: Path, png_bytes, capsys) -> None:
    stego = tmp_path / "stego.wav"
    stego.write_bytes(b"RIFFdata")
    session = FakeSession(FakeResponse.json_body({"success": False, "message": "Incorrect passphrase"}))

    assert not _cli(["extract", "-m", "audio", "-c", str(stego), "--pw", "bad"], session).run()
    out = capsys.readouterr().out
    assert "Extraction Failed" in out
    assert "Incorrect passphrase" in out


def test_missing_carrier_file(tmp_path: Path, capsys) -> None:
    session = FakeSession()
    missing = tmp_path / "missing.png"
    assert not _cli(["embed", "-m", "image", "-c", str(missing), "-t", "x", "--pw", "pw"], session).run()
    assert session.calls == []
    assert "Carrier file not found" in capsys.readouterr().out


def test_output_with_trailing_separator_creates_directory(tmp_path: Path, png_bytes, monkeypatch) -> None:
    cover = tmp_path / "cover.png"
    cover.write_bytes(png_bytes)
    monkeypatch.chdir(tmp_path)
    session = FakeSession(FakeResponse(200, b"\x89PNG-stego", {"Content-Type": "image/png"}))

    ok = _cli(
        ["embed", "-m", "image", "-c", str(cover), "-t", "hi", "--pw", "pw", "-o", "out" + os.sep],
        session,
    ).run()

    assert ok
    out_dir = tmp_path / "out"
    assert out_dir.is_dir()
    saved = list(out_dir.glob("cover_stego_*.png"))
    assert len(saved) == 1
    assert saved[0].read_bytes() == b"\x89PNG-stego"
