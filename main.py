"""Entry point module for the STEGOCLIENT application."""

from __future__ import annotations

import argparse
import sys
from typing import Iterable, Optional

from config import API_SETTINGS, APP_DESCRIPTION, APP_NAME, APP_VERSION
from utils.logger import setup_logger

logger = setup_logger(__name__)

MEDIA_CHOICES = ["image", "audio", "video"]
MESSAGE_CHOICES = ["text", "image", "audio", "video"]


def parse_arguments(argv: Optional[Iterable[str]] = None):
    """Return parsed command line arguments."""

    parser = argparse.ArgumentParser(
        prog="stegoclient",
        description=f"{APP_DESCRIPTION} v{APP_VERSION}",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"{APP_NAME} v{APP_VERSION}")
    parser.add_argument(
        "--api-base",
        help=f"Service base URL (defaults to ${API_SETTINGS['env_var']} or {API_SETTINGS['base_url']})",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=API_SETTINGS["timeout"],
        help="Seconds to wait for the service before giving up",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="command")

    # ------------------------------------------------------------------
    # Embed command
    # ------------------------------------------------------------------
    embed = subparsers.add_parser(
        "embed",
        help="Hide a payload inside a carrier file",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    embed.add_argument("-m", "--media-type", required=True, choices=MEDIA_CHOICES, help="Carrier media type")
    embed.add_argument("-c", "--carrier", required=True, help="Path to the carrier file")
    payload_group = embed.add_mutually_exclusive_group(required=True)
    payload_group.add_argument("-p", "--payload", help="Path to the payload file")
    payload_group.add_argument("-t", "--text", help="Text to hide inside the carrier")
    embed.add_argument(
        "-T",
        "--message-type",
        choices=MESSAGE_CHOICES,
        help="Payload type (inferred from --text or the payload file when omitted)",
    )
    embed.add_argument("--passphrase", "--pw", required=True, help="Passphrase used by the service")
    embed.add_argument("-o", "--output", help="Where to store the resulting container")

    # ------------------------------------------------------------------
    # Extract command
    # ------------------------------------------------------------------
    extract = subparsers.add_parser(
        "extract",
        help="Recover a payload from a carrier",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    extract.add_argument("-m", "--media-type", required=True, choices=MEDIA_CHOICES, help="Carrier media type")
    extract.add_argument("-c", "--carrier", required=True, help="Path to the stego file")
    extract.add_argument("--passphrase", "--pw", required=True, help="Passphrase used by the service")
    extract.add_argument("-o", "--output", help="Where to store the recovered payload")

    return parser.parse_args(args=list(argv) if argv is not None else None)


def run_gui(args) -> int:
    """Launch the graphical user interface."""

    logger.info("Starting %s in GUI mode", APP_NAME)
    from stegoclient.app import run_gui as launch

    return launch(base_url=getattr(args, "api_base", None))


def run_cli(args) -> int:
    """Execute a CLI command."""

    from cli import StegoClientCLI

    cli = StegoClientCLI(args)
    return 0 if cli.run() else 1


def main(argv: Optional[Iterable[str]] = None) -> int:
    """Main entry point used by ``python -m`` and executable scripts."""

    args = parse_arguments(argv)
    if getattr(args, "command", None) is None:
        return run_gui(args)
    return run_cli(args)


if __name__ == "__main__":  # pragma: no cover - script entry point
    sys.exit(main())
