"""HTTP transport for the embed/extract endpoints.

One blocking ``requests`` call per submission. The body is streamed so the
whole exchange is bounded by the configured timeout. Failures are reported
upward as :class:`TransportError` (could not talk to the service, or the
reply has an unexpected shape) or :class:`ServerError` (non-2xx status).
Nothing is retried.
"""
from __future__ import annotations

import json
import time
from dataclasses import dataclass, field
from typing import Any

import requests

from config import API_SETTINGS, resolve_api_base
from utils.logger import setup_logger

from .errors import ServerError, TransportError
from .request_builder import WireRequest
from .types import DEFAULT_MIME, ExtractResult, Operation

logger = setup_logger(__name__)

CHUNK_SIZE = 64 * 1024
_monotonic = time.monotonic

FALLBACK_MESSAGES = {
    Operation.EMBED: "Embedding process failed",
    Operation.EXTRACT: "Extraction process failed",
}


@dataclass(frozen=True, slots=True)
class ContainerResponse:
    """Successful ``/embed`` reply: the new container bytes."""

    data: bytes = field(repr=False)
    content_type: str = DEFAULT_MIME

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True, slots=True)
class _Reply:
    status_code: int
    content_type: str | None
    body: bytes = field(repr=False)


def _media_type_of(header: str | None) -> str:
    if not header:
        return DEFAULT_MIME
    return header.split(";", 1)[0].strip().lower() or DEFAULT_MIME


def _optional_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    return None


def parse_extract_envelope(payload: Any) -> ExtractResult:
    """Turn the decoded JSON body of ``/extract`` into an :class:`ExtractResult`."""

    if not isinstance(payload, dict):
        raise TransportError("Unexpected response from server: expected a JSON object")
    success = payload.get("success")
    if not isinstance(success, bool):
        raise TransportError("Unexpected response from server: missing 'success' flag")

    timestamp = _optional_int(payload.get("timestamp"))
    size = _optional_int(payload.get("size"))
    if not success:
        message = payload.get("message")
        return ExtractResult(
            success=False,
            error_message=message if isinstance(message, str) and message else None,
            timestamp=timestamp,
            size=size,
        )
    return ExtractResult(
        success=True,
        message_type=payload.get("message_type"),
        content=payload.get("content"),
        timestamp=timestamp,
        size=size,
    )


class TransportClient:
    """Submits wire requests to ``{base_url}/embed`` and ``{base_url}/extract``."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = resolve_api_base(base_url)
        self.timeout = float(timeout if timeout is not None else API_SETTINGS["timeout"])
        self._session = session or requests.Session()

    def endpoint(self, request: WireRequest) -> str:
        return f"{self.base_url}/{request.path}"

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "TransportClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _post(self, request: WireRequest) -> _Reply:
        url = self.endpoint(request)
        files = {
            name: (source.name, source.data, source.mime_type)
            for name, source in request.files.items()
        }
        logger.info("Submitting %s", request.describe())
        deadline = _monotonic() + self.timeout
        try:
            response = self._session.post(
                url, data=dict(request.fields), files=files, timeout=self.timeout, stream=True
            )
            try:
                body = self._read_body(response, url, deadline)
            finally:
                response.close()
        except requests.Timeout as exc:
            raise TransportError(f"Request to {url} timed out after {self.timeout:g}s") from exc
        except requests.ConnectionError as exc:
            raise TransportError(f"Could not reach the steganography service at {self.base_url}") from exc
        except requests.RequestException as exc:
            raise TransportError(f"Request to {url} failed: {exc}") from exc

        logger.info("Response %s from %s (%s bytes)", response.status_code, url, len(body))
        reply = _Reply(response.status_code, response.headers.get("Content-Type"), body)
        if not response.ok:
            raise self._server_error(request, reply)
        return reply

    def _read_body(self, response: requests.Response, url: str, deadline: float) -> bytes:
        # self.timeout bounds the whole exchange, not each socket read
        chunks = []
        for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
            if _monotonic() > deadline:
                raise TransportError(f"Request to {url} timed out after {self.timeout:g}s")
            chunks.append(chunk)
        return b"".join(chunks)

    @staticmethod
    def _server_error(request: WireRequest, reply: _Reply) -> ServerError:
        message = None
        try:
            body = json.loads(reply.body)
        except ValueError:
            body = None
        if isinstance(body, dict):
            candidate = body.get("message")
            if isinstance(candidate, str) and candidate:
                message = candidate
        if message is None:
            message = f"{FALLBACK_MESSAGES[request.operation]} (HTTP {reply.status_code})"
        return ServerError(message, status_code=reply.status_code)

    def submit_embed(self, request: WireRequest) -> ContainerResponse:
        """POST an embed request and return the container bytes."""

        reply = self._post(request)
        return ContainerResponse(data=reply.body, content_type=_media_type_of(reply.content_type))

    def submit_extract(self, request: WireRequest) -> ExtractResult:
        """POST an extract request and return the parsed JSON envelope."""

        reply = self._post(request)
        try:
            payload = json.loads(reply.body)
        except ValueError as exc:
            raise TransportError("Unexpected response from server: body is not JSON") from exc
        return parse_extract_envelope(payload)


__all__ = ["ContainerResponse", "TransportClient", "parse_extract_envelope"]
