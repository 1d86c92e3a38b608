"""Qt-aware search session tying facets, fetching and scrolling together."""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from PySide6.QtCore import QObject, Signal
from PySide6.QtWidgets import QAbstractScrollArea, QWidget

from ..application.interfaces import SearchBackend
from ..errors import SessionClosedError
from ..errors.handler import ErrorHandler, ErrorSeverity
from ..events.bus import EventBus
from ..infrastructure.anilist import AniListSearchBackend
from ..settings import merge_with_defaults
from ..utils.logging import get_logger
from .ui.controllers.scroll_trigger import ScrollTrigger
from .ui.models.search_results_model import SearchResultsModel
from .utils.debounce import Debouncer
from .viewmodels.facet_store import FacetStore
from .viewmodels.fetch_sequencer import FetchSequencer
from .viewmodels.page_requests import PageLauncher
from .viewmodels.signal import ObservableProperty
from .viewmodels.search_workers import QtPageLauncher


class SearchSession(QObject):
    """Explicitly lifetimed owner of one faceted search.

    The session is the facet edit surface for the UI layer: ``update_text``,
    ``set_facet``, ``remove_badge`` and ``clear_all`` are the only mutation
    entry points.  Every facet mutation resets the fetch sequencer, which then
    reloads page 1 under the new generation.

    Call :meth:`start` once the view is mounted and :meth:`close` when it goes
    away; closing cancels the pending debounce, detaches the scroll observer and
    drops any response still on the wire.
    """

    badgesChanged = Signal(list)
    loadingChanged = Signal(bool)
    errorRaised = Signal(str)
    inputTextChanged = Signal(str)

    def __init__(
        self,
        backend: Optional[SearchBackend] = None,
        *,
        settings: Optional[Mapping[str, Any]] = None,
        launcher: Optional[PageLauncher] = None,
        event_bus: Optional[EventBus] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._logger = get_logger(__name__)
        self._settings = merge_with_defaults(settings)
        self._owned_backend: Optional[AniListSearchBackend] = None
        if launcher is None:
            if backend is None:
                backend = self._owned_backend = AniListSearchBackend(
                    endpoint=self._settings["endpoint"],
                    timeout=self._settings["timeout_sec"],
                )
            launcher = QtPageLauncher(backend, parent=self)
        self._owns_events = event_bus is None
        self._events = event_bus or EventBus(self._logger)
        self._error_handler = ErrorHandler(self._logger, self._events)
        self._error_handler.register_ui_callback(self._relay_error)

        self.store = FacetStore(event_bus=self._events)
        self.sequencer = FetchSequencer(
            self.store,
            launcher,
            per_page=self._settings["per_page"],
            event_bus=self._events,
            error_handler=self._error_handler,
        )
        self.results_model = SearchResultsModel(self.sequencer, parent=self)
        self.scroll_trigger = ScrollTrigger(self.sequencer, parent=self)
        self.input_text = ObservableProperty("")
        self._debouncer = Debouncer(self._commit_text, self._settings["debounce_ms"], parent=self)
        self._started = False
        self._closed = False

        self.store.state_changed.connect(self.sequencer.reset)
        self.store.state_changed.connect(self._on_state_changed)
        self.sequencer.loading.changed.connect(self._on_loading_changed)
        self.input_text.changed.connect(self._on_input_text_changed)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    @property
    def settings(self) -> Mapping[str, Any]:
        return dict(self._settings)

    @property
    def event_bus(self) -> EventBus:
        return self._events

    @property
    def error_handler(self) -> ErrorHandler:
        return self._error_handler

    @property
    def closed(self) -> bool:
        return self._closed

    def start(self) -> None:
        """Load the first page for the initial facet state."""

        self._ensure_open()
        if self._started:
            return
        self._started = True
        self.sequencer.load_page(1)

    def attach_viewport(self, scroll_area: QAbstractScrollArea, sentinel: QWidget) -> None:
        """Mount the end-of-list sentinel observed by the scroll trigger."""

        self._ensure_open()
        self.scroll_trigger.attach(
            scroll_area, sentinel, threshold=self._settings["sentinel_threshold"]
        )

    def close(self) -> None:
        """Tear the session down; safe to call more than once."""

        if self._closed:
            return
        self._closed = True
        self._debouncer.cancel()
        self.scroll_trigger.detach()
        self.results_model.detach()
        self.sequencer.dispose()
        self.store.dispose()
        if self._owns_events:
            self._events.clear()
        if self._owned_backend is not None:
            self._owned_backend.close()
        self._logger.debug("Search session closed")

    # ------------------------------------------------------------------
    # Facet edit surface
    # ------------------------------------------------------------------
    def update_text(self, value: str) -> None:
        """Show *value* immediately and commit it once typing pauses."""

        self._ensure_open()
        self.input_text.value = value
        self._debouncer(value)

    def set_facet(self, field: str, value: Any) -> None:
        self._ensure_open()
        if field == "text":
            # A direct commit supersedes whatever is still being typed.
            self._debouncer.cancel()
        self.store.set_facet(field, value)
        if field == "text":
            self.input_text.value = self.store.state.text

    def remove_badge(self, label: str) -> None:
        self._ensure_open()
        if self.store.state.text and self.store.state.text == label:
            self._debouncer.cancel()
            self.input_text.value = ""
        self.store.remove_badge(label)

    def clear_all(self) -> None:
        self._ensure_open()
        self._debouncer.cancel()
        self.input_text.value = ""
        self.store.clear_all()

    def retry(self) -> bool:
        """Offer an explicit retry after a failed page load."""

        self._ensure_open()
        return self.sequencer.retry()

    # ------------------------------------------------------------------
    # Read side for the rendering collaborator
    # ------------------------------------------------------------------
    def badges(self) -> List[str]:
        return self.store.compute_badges()

    @property
    def results(self) -> List[Any]:
        return self.sequencer.items.value

    @property
    def loading(self) -> bool:
        return self.sequencer.loading.value

    @property
    def error(self) -> Optional[str]:
        return self.sequencer.error.value

    @property
    def has_more(self) -> bool:
        return self.sequencer.has_more.value

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _commit_text(self, value: str) -> None:
        if self._closed:
            return
        self.store.set_facet("text", value)

    def _ensure_open(self) -> None:
        if self._closed:
            raise SessionClosedError("Search session is closed")

    def _on_state_changed(self, _state, _generation: int) -> None:
        self.badgesChanged.emit(self.store.compute_badges())

    def _on_loading_changed(self, loading: bool, _old: bool) -> None:
        self.loadingChanged.emit(loading)

    def _on_input_text_changed(self, value: str, _old: str) -> None:
        self.inputTextChanged.emit(value)

    def _relay_error(self, message: str, _severity: ErrorSeverity) -> None:
        self.errorRaised.emit(message)
