"""Extract view implementation."""
from __future__ import annotations

from ...core.types import Operation
from .submission_view import SubmissionView


class ExtractView(SubmissionView):
    """UI for recovering hidden payloads; the service reports the payload type."""

    operation = Operation.EXTRACT
    title = "Extract hidden payloads"
    submit_label = "Extract"
    busy_label = "Extracting…"
