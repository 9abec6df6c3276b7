"""Compatibility imports for ``stegoclient.utils``."""

from .validators import (
    ValidationResult,
    detect_media_type,
    file_dialog_filter,
    supported_extensions,
    validate_carrier,
)

__all__ = [
    "ValidationResult",
    "detect_media_type",
    "file_dialog_filter",
    "supported_extensions",
    "validate_carrier",
]
