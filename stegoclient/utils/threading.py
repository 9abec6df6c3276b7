"""Run submissions on a thread pool without blocking the UI."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar

from PyQt6.QtCore import QObject, QRunnable, pyqtSignal, pyqtSlot


T = TypeVar("T")


class WorkerSignals(QObject):
    """Signals used by :class:`Worker`; each carries the submission ticket."""

    started = pyqtSignal(object)
    finished = pyqtSignal(object)
    result = pyqtSignal(object, object)
    error = pyqtSignal(object, Exception)
    cancelled = pyqtSignal(object, object)


@dataclass
class WorkerConfig(Generic[T]):
    """Configuration used when constructing a :class:`Worker`."""

    fn: Callable[..., T]
    ticket: Any
    args: tuple[Any, ...] = ()
    kwargs: dict[str, Any] | None = None


class Worker(QRunnable):
    """QRunnable wrapper that executes one submission on a thread pool.

    The HTTP call cannot be interrupted, so :meth:`cancel` only marks the
    worker: a cancelled worker reports its result through ``cancelled``
    instead of ``result`` so the receiver can drop it.
    """

    def __init__(self, config: WorkerConfig[T]) -> None:
        super().__init__()
        self._config = config
        self.signals = WorkerSignals()
        self._is_cancelled = False

    @property
    def ticket(self) -> Any:
        return self._config.ticket

    @pyqtSlot()
    def run(self) -> None:
        ticket = self._config.ticket
        self.signals.started.emit(ticket)
        try:
            result = self._config.fn(*self._config.args, **(self._config.kwargs or {}))
        except Exception as exc:
            self.signals.error.emit(ticket, exc)
        else:
            if self._is_cancelled:
                self.signals.cancelled.emit(ticket, result)
            else:
                self.signals.result.emit(ticket, result)
        finally:
            self.signals.finished.emit(ticket)

    def cancel(self) -> None:
        self._is_cancelled = True
