"""Generation-tagged page fetching for the search result buffer."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, List, Optional

from facetfeed.application.services.query_builder import build_query
from facetfeed.config import DEFAULT_PER_PAGE
from facetfeed.domain.models.query import ResultPage
from facetfeed.errors import RemoteSearchError
from facetfeed.errors.handler import ErrorHandler, ErrorSeverity
from facetfeed.events.bus import EventBus
from facetfeed.events.search_events import (
    PageAcceptedEvent,
    StaleResponseDiscardedEvent,
)
from facetfeed.gui.viewmodels.base import BaseViewModel
from facetfeed.gui.viewmodels.facet_store import FacetStore
from facetfeed.gui.viewmodels.page_requests import PageLauncher, PageTicket
from facetfeed.gui.viewmodels.signal import ObservableProperty

_logger = logging.getLogger(__name__)


class SequencerState(Enum):
    IDLE = "idle"
    LOADING = "loading"


class FetchOutcome(Enum):
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    STALE = "stale"


class FetchSequencer(BaseViewModel):
    """Own the result buffer and keep it consistent with the facet store.

    Each request carries the generation that was current when it was issued.
    A delivery is applied only while that generation is still current; anything
    older is dropped without touching the buffer.  There is no network abort:
    superseded requests finish in the background and are ignored.

    At most one request per generation is in flight.  :meth:`load_page` is a
    no-op while one is outstanding, which also absorbs duplicate triggers from
    the scroll observer.
    """

    def __init__(
        self,
        store: FacetStore,
        launcher: PageLauncher,
        *,
        per_page: int = DEFAULT_PER_PAGE,
        event_bus: Optional[EventBus] = None,
        error_handler: Optional[ErrorHandler] = None,
    ) -> None:
        super().__init__()
        if per_page < 1:
            raise ValueError(f"per_page must be >= 1, got {per_page}")
        self._store = store
        self._launcher = launcher
        self._per_page = per_page
        self._events = event_bus
        self._error_handler = error_handler
        self._in_flight: Optional[PageTicket] = None
        self.last_outcome: Optional[FetchOutcome] = None

        # Observable state
        self.items: ObservableProperty[List[Any]] = ObservableProperty([])
        self.loading = ObservableProperty(False)
        self.has_more = ObservableProperty(True)
        self.current_page = ObservableProperty(0)
        self.error: ObservableProperty[Optional[str]] = ObservableProperty(None)

        # Signals
        self.buffer_reset = self.own_signal()
        self.page_accepted = self.own_signal()  # emits (page, page_items)
        self.buffer_changed = self.own_signal()  # emits (items)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    @property
    def state(self) -> SequencerState:
        return SequencerState.LOADING if self._in_flight is not None else SequencerState.IDLE

    @property
    def loading_page(self) -> Optional[int]:
        return self._in_flight.page if self._in_flight is not None else None

    @property
    def per_page(self) -> int:
        return self._per_page

    def is_in_flight(self) -> bool:
        return self._in_flight is not None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def load_page(self, page: int) -> bool:
        """Request *page* for the current facet state.

        Returns ``True`` when a request was issued.
        """

        if self._disposed:
            return False
        if self._in_flight is not None:
            return False
        if page > 1 and not self.has_more.value:
            return False

        query = build_query(self._store.state, page, self._per_page)
        ticket = PageTicket(generation=self._store.generation, page=page, query=query)
        self._in_flight = ticket
        self.error.value = None
        self.loading.value = True
        _logger.debug(
            "Loading page %d under generation %d (request %d)",
            page, ticket.generation, ticket.request_id,
        )
        self._launcher.submit(ticket, self._on_page_completed, self._on_page_failed)
        return True

    def reset(self, *_args: Any) -> None:
        """Discard the buffer and start over from page 1.

        Connected to :attr:`FacetStore.state_changed`; the extra arguments of
        that signal are ignored.
        """

        if self._disposed:
            return
        # The outstanding request belongs to a superseded generation; its
        # delivery will be rejected, so it must not block the new page 1.
        self._in_flight = None
        self.items.value = []
        self.has_more.value = True
        self.current_page.value = 0
        self.error.value = None
        # ``loading`` is left as is: load_page(1) below sets it again.
        self.buffer_reset.emit()
        self.buffer_changed.emit(self.items.value)
        self.load_page(1)

    def retry(self) -> bool:
        """Re-request the page after the last accepted one following a failure."""

        if self.error.value is None or self._in_flight is not None:
            return False
        return self.load_page(self.current_page.value + 1)

    def dispose(self) -> None:
        self._in_flight = None
        self._launcher.shutdown()
        super().dispose()

    # ------------------------------------------------------------------
    # Deliveries
    # ------------------------------------------------------------------
    def _is_stale(self, ticket: PageTicket, *, failed: bool) -> bool:
        current = self._store.generation
        outstanding = self._in_flight
        if (
            ticket.generation == current
            and outstanding is not None
            and outstanding.request_id == ticket.request_id
        ):
            return False
        self.last_outcome = FetchOutcome.STALE
        _logger.debug(
            "Discarding %s for page %d: generation %d is no longer current (%d)",
            "failure" if failed else "response", ticket.page, ticket.generation, current,
        )
        if self._events is not None and not self._disposed:
            self._events.publish(
                StaleResponseDiscardedEvent(
                    generation=ticket.generation,
                    current_generation=current,
                    page=ticket.page,
                    failed=failed,
                )
            )
        return True

    def _on_page_completed(self, ticket: PageTicket, result: ResultPage) -> None:
        if self._is_stale(ticket, failed=False):
            return

        self._in_flight = None
        if ticket.page == 1:
            self.items.value = list(result.items)
        else:
            self.items.value = self.items.value + list(result.items)
        self.has_more.value = bool(result.has_more)
        self.current_page.value = ticket.page
        self.last_outcome = FetchOutcome.ACCEPTED
        self.loading.value = False
        _logger.info(
            "Accepted page %d (%d items, has_more=%s, generation %d)",
            ticket.page, len(result.items), result.has_more, ticket.generation,
        )
        if self._events is not None:
            self._events.publish(
                PageAcceptedEvent(
                    generation=ticket.generation,
                    page=ticket.page,
                    item_count=len(result.items),
                    has_more=bool(result.has_more),
                )
            )
        self.page_accepted.emit(ticket.page, list(result.items))
        self.buffer_changed.emit(self.items.value)

    def _on_page_failed(self, ticket: PageTicket, error: Exception) -> None:
        if self._is_stale(ticket, failed=True):
            return

        self._in_flight = None
        message = str(error) or "Failed to fetch results"
        self.error.value = message
        self.last_outcome = FetchOutcome.REJECTED
        self.loading.value = False
        context = {"page": ticket.page, "generation": ticket.generation}
        if isinstance(error, RemoteSearchError) and error.status_code is not None:
            context["status_code"] = error.status_code
        # The handler both logs and publishes ErrorOccurredEvent.
        if self._error_handler is not None:
            self._error_handler.handle(error, ErrorSeverity.WARNING, context)
        else:
            _logger.warning("Search page %d failed: %s", ticket.page, message)
