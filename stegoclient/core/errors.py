"""Error taxonomy for the embed/extract pipeline."""
from __future__ import annotations


class StegoClientError(Exception):
    """Base class for every failure a submission can end with."""

    kind = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(StegoClientError, ValueError):
    """Raised before any request is built when user input is incomplete."""

    kind = "validation"

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class ConfigurationError(StegoClientError):
    """Raised when a media/message type is missing from the type registry."""

    kind = "configuration"


class TransportError(StegoClientError):
    """Network failure, timeout, or a response of unexpected shape."""

    kind = "transport"


class ServerError(StegoClientError):
    """Non-2xx HTTP response from the service."""

    kind = "server"

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class DomainError(StegoClientError):
    """2xx response reporting a logical failure (wrong passphrase, nothing hidden)."""

    kind = "domain"


class DecodeError(StegoClientError):
    """Response content could not be interpreted for its message type."""

    kind = "decode"


class SubmissionInProgress(StegoClientError):
    """Raised by the ``reject`` single-flight policy while a submission is pending."""

    kind = "busy"


__all__ = [
    "ConfigurationError",
    "DecodeError",
    "DomainError",
    "ServerError",
    "StegoClientError",
    "SubmissionInProgress",
    "TransportError",
    "ValidationError",
]
