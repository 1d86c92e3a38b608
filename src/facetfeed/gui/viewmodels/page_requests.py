"""Page request tickets and the launcher strategy contract."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Callable, Protocol

from facetfeed.application.interfaces import SearchBackend
from facetfeed.domain.models.query import RemoteQuery, ResultPage

_request_ids = itertools.count(1)


@dataclass(frozen=True)
class PageTicket:
    """One remote request, tagged with the generation it was issued under."""

    generation: int
    page: int
    query: RemoteQuery = field(compare=False)
    request_id: int = field(default_factory=lambda: next(_request_ids))


CompletedCallback = Callable[[PageTicket, ResultPage], None]
FailedCallback = Callable[[PageTicket, Exception], None]


class PageLauncher(Protocol):
    """Strategy used by the fetch sequencer to execute one page request.

    Implementations must invoke exactly one of the callbacks per ticket, on the
    thread that owns the sequencer, unless :meth:`shutdown` ran first.
    """

    def submit(
        self,
        ticket: PageTicket,
        on_completed: CompletedCallback,
        on_failed: FailedCallback,
    ) -> None: ...

    def shutdown(self) -> None: ...


class ImmediatePageLauncher:
    """Run the backend inline on the calling thread.

    Suitable for scripts and tests; a GUI should use
    :class:`facetfeed.gui.viewmodels.search_workers.QtPageLauncher`.
    """

    def __init__(self, backend: SearchBackend) -> None:
        self._backend = backend
        self._closed = False

    def submit(
        self,
        ticket: PageTicket,
        on_completed: CompletedCallback,
        on_failed: FailedCallback,
    ) -> None:
        if self._closed:
            return
        try:
            result = self._backend.search(ticket.query)
        except Exception as exc:
            on_failed(ticket, exc)
            return
        on_completed(ticket, result)

    def shutdown(self) -> None:
        self._closed = True
