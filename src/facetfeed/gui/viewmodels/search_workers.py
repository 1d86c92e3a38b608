"""Run page requests on a Qt thread pool and deliver results on the GUI thread."""

from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal, Slot

from facetfeed.application.interfaces import SearchBackend
from facetfeed.domain.models.query import ResultPage
from facetfeed.gui.viewmodels.page_requests import CompletedCallback, FailedCallback, PageTicket

_logger = logging.getLogger(__name__)


class _SearchPageSignals(QObject):
    completed = Signal(object, object)
    failed = Signal(object, object)


class _SearchPageWorker(QRunnable):
    def __init__(self, backend: SearchBackend, ticket: PageTicket) -> None:
        super().__init__()
        self._backend = backend
        self._ticket = ticket
        self.signals = _SearchPageSignals()

    def run(self) -> None:
        _logger.debug(
            "[SEARCH-WORKER] page=%d generation=%d request=%d",
            self._ticket.page, self._ticket.generation, self._ticket.request_id,
        )
        try:
            result = self._backend.search(self._ticket.query)
        except Exception as exc:
            self.signals.failed.emit(self._ticket, exc)
            return
        self.signals.completed.emit(self._ticket, result)


class QtPageLauncher(QObject):
    """Execute page requests on a ``QThreadPool``.

    Worker signals are connected to slots on this object, which lives on the
    GUI thread, so callbacks always run there via queued connections.
    """

    def __init__(
        self,
        backend: SearchBackend,
        pool: Optional[QThreadPool] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._backend = backend
        self._pool = pool or QThreadPool.globalInstance()
        # request_id -> (signals, on_completed, on_failed); holding the signals
        # object keeps it alive until the worker has reported back.
        self._pending: Dict[int, Tuple[QObject, CompletedCallback, FailedCallback]] = {}

    def pending_count(self) -> int:
        return len(self._pending)

    def submit(
        self,
        ticket: PageTicket,
        on_completed: CompletedCallback,
        on_failed: FailedCallback,
    ) -> None:
        worker = _SearchPageWorker(self._backend, ticket)
        worker.signals.completed.connect(self._handle_completed)
        worker.signals.failed.connect(self._handle_failed)
        self._pending[ticket.request_id] = (worker.signals, on_completed, on_failed)
        self._pool.start(worker)

    def shutdown(self) -> None:
        """Forget pending callbacks; late worker results are dropped."""
        self._pending.clear()

    @Slot(object, object)
    def _handle_completed(self, ticket: PageTicket, result: ResultPage) -> None:
        entry = self._pending.pop(ticket.request_id, None)
        if entry is None:
            return
        signals, on_completed, _on_failed = entry
        signals.deleteLater()
        on_completed(ticket, result)

    @Slot(object, object)
    def _handle_failed(self, ticket: PageTicket, error: Exception) -> None:
        entry = self._pending.pop(ticket.request_id, None)
        if entry is None:
            return
        signals, _on_completed, on_failed = entry
        signals.deleteLater()
        on_failed(ticket, error)
