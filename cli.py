"""Command line interface for STEGOCLIENT.

This module implements the command dispatcher used by :mod:`main`. The
``embed`` and ``extract`` sub-commands drive the same form state, request
builder, transport and renderer as the GUI, so both front ends submit
identical requests and show the same summaries and errors.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Iterable, Optional

from config import APP_NAME, APP_VERSION
from utils.logger import log_operation, setup_logger

from stegoclient.core import form_state as fs
from stegoclient.core.renderer import ErrorDescriptor, RenderedResult
from stegoclient.core.transport import TransportClient
from stegoclient.core.types import ArtifactKind, FileSource, MessageType, Operation
from stegoclient.core.workflow import run_embed, run_extract
from stegoclient.utils.validators import detect_media_type

logger = setup_logger(__name__)


class CLIError(RuntimeError):
    """Custom error raised for recoverable CLI failures."""


def _ensure_exists(path: Path, description: str) -> Path:
    if not path.is_file():
        raise CLIError(f"{description} not found: {path}")
    return path


def _infer_message_type(args) -> MessageType:
    if args.message_type:
        return MessageType(args.message_type)
    if args.text is not None:
        return MessageType.TEXT
    media = detect_media_type(args.payload)
    if media is None:
        raise CLIError("Cannot infer the payload type; pass --message-type")
    return MessageType(media.value)


class StegoClientCLI:
    """CLI dispatcher for STEGOCLIENT."""

    def __init__(self, args, client_factory: Optional[Callable[[], TransportClient]] = None) -> None:
        self.args = args
        self.command = getattr(args, "command", None)
        self._client_factory = client_factory or self._default_client

    def _default_client(self) -> TransportClient:
        return TransportClient(
            base_url=getattr(self.args, "api_base", None),
            timeout=getattr(self.args, "timeout", None),
        )

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------
    def run(self) -> bool:
        try:
            if self.command == "embed":
                return self._handle_embed()
            if self.command == "extract":
                return self._handle_extract()
            raise CLIError("No command specified. Use --help for usage information.")
        except CLIError as exc:
            logger.error("CLI error: %s", exc)
            print(f"Error: {exc}")
            return False
        except KeyboardInterrupt:
            print("Operation cancelled by user.")
            return False
        except Exception as exc:
            logger.exception("Unhandled CLI exception")
            print(f"Unexpected error: {exc}")
            return False

    # ------------------------------------------------------------------
    # Embed command
    # ------------------------------------------------------------------
    def _build_embed_state(self) -> fs.FormState:
        args = self.args
        carrier_path = _ensure_exists(Path(args.carrier), "Carrier file")
        message = _infer_message_type(args)

        state = fs.new_form(Operation.EMBED)
        state = fs.select_media_type(state, args.media_type)
        state = fs.choose_carrier(state, FileSource.from_path(carrier_path))
        state = fs.select_message_type(state, message)
        state = fs.set_passphrase(state, args.passphrase)
        if message is MessageType.TEXT:
            if args.text is None:
                raise CLIError("A text payload requires --text")
            state = fs.set_payload_text(state, args.text)
        else:
            if args.payload is None:
                raise CLIError(f"A {message.value} payload requires --payload")
            payload_path = _ensure_exists(Path(args.payload), "Payload file")
            state = fs.choose_payload_file(state, message, FileSource.from_path(payload_path))
        return state

    @log_operation("CLI Embed")
    def _handle_embed(self) -> bool:
        state = self._build_embed_state()
        with self._client_factory() as client:
            outcome = run_embed(state, client)
        if isinstance(outcome, ErrorDescriptor):
            self._print_error(outcome)
            return False

        default_dir = Path(self.args.carrier).resolve().parent
        saved = self._save(outcome, self.args.output, default_dir)
        self._print_result("Embed", outcome, saved)
        return True

    # ------------------------------------------------------------------
    # Extract command
    # ------------------------------------------------------------------
    def _build_extract_state(self) -> fs.FormState:
        args = self.args
        carrier_path = _ensure_exists(Path(args.carrier), "Stego file")
        state = fs.new_form(Operation.EXTRACT)
        state = fs.select_media_type(state, args.media_type)
        state = fs.choose_carrier(state, FileSource.from_path(carrier_path))
        return fs.set_passphrase(state, args.passphrase)

    @log_operation("CLI Extract")
    def _handle_extract(self) -> bool:
        state = self._build_extract_state()
        with self._client_factory() as client:
            outcome = run_extract(state, client)
        if isinstance(outcome, ErrorDescriptor):
            self._print_error(outcome)
            return False

        saved: Optional[Path] = None
        if outcome.artifact.kind is not ArtifactKind.TEXT or self.args.output:
            default_dir = Path(self.args.carrier).resolve().parent
            saved = self._save(outcome, self.args.output, default_dir)
        self._print_result("Extract", outcome, saved)
        if outcome.artifact.kind is ArtifactKind.TEXT and saved is None:
            print("\nRecovered message:\n")
            print(outcome.artifact.text)
        return True

    # ------------------------------------------------------------------
    # Output helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _save(result: RenderedResult, output_arg: Optional[str], default_dir: Path) -> Path:
        destination = output_arg if output_arg else default_dir
        try:
            return result.artifact.save(destination)
        finally:
            result.artifact.release()

    @staticmethod
    def _print_result(action: str, result: RenderedResult, saved: Optional[Path]) -> None:
        print(f"\n{APP_NAME} v{APP_VERSION} - {action}")
        print(result.title)
        print(result.summary_text())
        if saved is not None:
            print(f"Saved : {saved}")

    @staticmethod
    def _print_error(error: ErrorDescriptor) -> None:
        print(f"\n{error.title}")
        print(f"Error: {error.message}")
        print("Troubleshooting:")
        for hint in error.hints:
            print(f"  - {hint}")


def main(argv: Optional[Iterable[str]] = None) -> int:
    """Entry point used by unit tests."""

    from main import parse_arguments  # Lazy import to avoid circular dependency.

    args = parse_arguments(list(argv) if argv is not None else None)
    cli = StegoClientCLI(args)
    return 0 if cli.run() else 1


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    sys.exit(main(sys.argv[1:]))
