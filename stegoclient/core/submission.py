"""Single-flight submissions and ownership of the displayed artifact."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from config import SUBMISSION_SETTINGS
from utils.logger import setup_logger

from .errors import SubmissionInProgress
from .renderer import ErrorDescriptor, RenderedResult
from .types import Artifact

logger = setup_logger(__name__)

Outcome = Union[RenderedResult, ErrorDescriptor]

SUPERSEDE = "supersede"
REJECT = "reject"


@dataclass(frozen=True, slots=True)
class SubmissionTicket:
    form: str
    generation: int


class ArtifactSlot:
    """Holds the artifact currently on display and releases the one it replaces."""

    def __init__(self) -> None:
        self._current: Artifact | None = None

    @property
    def current(self) -> Artifact | None:
        return self._current

    def replace(self, artifact: Artifact | None) -> None:
        previous = self._current
        self._current = artifact
        if previous is not None and previous is not artifact:
            previous.release()
            logger.debug("Released artifact %s", previous.suggested_filename)

    def discard(self) -> None:
        self.replace(None)


class SubmissionController:
    """At most one accepted in-flight submission per form.

    ``begin`` hands out tickets with increasing generations. Under the
    ``supersede`` policy a new ticket makes every earlier one stale; under
    ``reject`` a second ``begin`` while busy raises
    :class:`SubmissionInProgress`. ``finish`` accepts only the newest ticket
    and drops (and releases) anything else.
    """

    def __init__(self, form: str, policy: str | None = None, slot: ArtifactSlot | None = None) -> None:
        policy = policy or SUBMISSION_SETTINGS.get("policy", SUPERSEDE)
        if policy not in (SUPERSEDE, REJECT):
            raise ValueError(f"Unknown submission policy: {policy}")
        self.form = form
        self.policy = policy
        self.slot = slot or ArtifactSlot()
        self._generation = 0
        self._pending: SubmissionTicket | None = None
        self._outcome: Outcome | None = None

    @property
    def busy(self) -> bool:
        return self._pending is not None

    @property
    def outcome(self) -> Outcome | None:
        """Outcome of the most recently accepted submission."""

        return self._outcome

    def begin(self) -> SubmissionTicket:
        if self._pending is not None:
            if self.policy == REJECT:
                raise SubmissionInProgress("A submission is already in progress")
            logger.info("[%s] Superseding submission #%d", self.form, self._pending.generation)
        self._generation += 1
        ticket = SubmissionTicket(form=self.form, generation=self._generation)
        self._pending = ticket
        return ticket

    def is_current(self, ticket: SubmissionTicket) -> bool:
        return self._pending is not None and ticket == self._pending

    def finish(self, ticket: SubmissionTicket, outcome: Outcome) -> bool:
        """Record *outcome* for *ticket*; return False when it was dropped as stale."""

        if not self.is_current(ticket):
            logger.info("[%s] Dropping stale result of submission #%d", self.form, ticket.generation)
            if isinstance(outcome, RenderedResult):
                outcome.artifact.release()
            return False

        self._pending = None
        self._outcome = outcome
        if isinstance(outcome, RenderedResult):
            self.slot.replace(outcome.artifact)
        else:
            self.slot.discard()
        return True

    def clear(self) -> None:
        """Forget the displayed outcome and release its artifact."""

        self._outcome = None
        self.slot.discard()

    def abandon(self) -> SubmissionTicket | None:
        """Drop the in-flight ticket (if any) and clear; its late result becomes stale."""

        ticket = self._pending
        if ticket is not None:
            logger.info("[%s] Abandoning submission #%d", self.form, ticket.generation)
        self._pending = None
        self.clear()
        return ticket


__all__ = [
    "ArtifactSlot",
    "Outcome",
    "REJECT",
    "SUPERSEDE",
    "SubmissionController",
    "SubmissionTicket",
]
