"""Request the next result page when the end-of-list sentinel scrolls into view."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from PySide6.QtCore import QEvent, QObject, QPoint, QRect, QTimer
from PySide6.QtWidgets import QAbstractScrollArea, QWidget

from facetfeed.config import SENTINEL_VISIBILITY_THRESHOLD
from facetfeed.gui.viewmodels.fetch_sequencer import FetchSequencer

_logger = logging.getLogger(__name__)


class ScrollTrigger(QObject):
    """Viewport-intersection observer driving continuous-scroll pagination.

    The trigger owns no pagination state; it reads ``has_more``, the in-flight
    flag and ``current_page`` from the sequencer and asks it for the next page.
    It re-evaluates on scrolling, on viewport resizes and after every buffer
    change, because a short page can leave the sentinel visible.
    """

    def __init__(
        self,
        sequencer: FetchSequencer,
        visibility_check: Optional[Callable[[], bool]] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._sequencer = sequencer
        self._visibility_check = visibility_check
        self._scroll_area: Optional[QAbstractScrollArea] = None
        self._sentinel: Optional[QWidget] = None
        self._threshold = SENTINEL_VISIBILITY_THRESHOLD
        # Buffer changes are evaluated on the next event-loop turn so the view
        # has laid out the new rows before the sentinel is measured.
        self._deferred = QTimer(self)
        self._deferred.setSingleShot(True)
        self._deferred.setInterval(0)
        self._deferred.timeout.connect(self.evaluate)
        self._sequencer.buffer_changed.connect(self._on_buffer_changed)
        self._active = True

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def attach(
        self,
        scroll_area: QAbstractScrollArea,
        sentinel: QWidget,
        threshold: float = SENTINEL_VISIBILITY_THRESHOLD,
    ) -> None:
        """Observe *sentinel* inside the viewport of *scroll_area*."""

        if not 0 < threshold <= 1:
            raise ValueError(f"threshold must be in (0, 1], got {threshold}")
        self._disconnect_widgets()
        self._scroll_area = scroll_area
        self._sentinel = sentinel
        self._threshold = threshold
        bar = scroll_area.verticalScrollBar()
        bar.valueChanged.connect(self._on_scrolled)
        bar.rangeChanged.connect(self._on_range_changed)
        scroll_area.viewport().installEventFilter(self)
        self._sequencer.buffer_changed.connect(self._on_buffer_changed)
        self._active = True
        self.schedule_evaluate()

    def detach(self) -> None:
        """Stop observing; no further page requests are issued."""

        self._deferred.stop()
        self._disconnect_widgets()
        if self._active:
            self._sequencer.buffer_changed.disconnect(self._on_buffer_changed)
        self._active = False

    @property
    def attached(self) -> bool:
        return self._scroll_area is not None

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------
    def schedule_evaluate(self) -> None:
        if self._active:
            self._deferred.start()

    def evaluate(self) -> bool:
        """Request the next page when the sentinel is visible.

        Returns ``True`` when a request was issued.
        """

        if not self._active:
            return False
        sequencer = self._sequencer
        if not sequencer.has_more.value or sequencer.is_in_flight():
            return False
        if not self.is_sentinel_visible():
            return False
        next_page = sequencer.current_page.value + 1
        _logger.debug("Sentinel visible, requesting page %d", next_page)
        return sequencer.load_page(next_page)

    def is_sentinel_visible(self) -> bool:
        if self._visibility_check is not None:
            return bool(self._visibility_check())
        area, sentinel = self._scroll_area, self._sentinel
        if area is None or sentinel is None or not sentinel.isVisible():
            return False
        viewport = area.viewport()
        if not viewport.isAncestorOf(sentinel):
            return False
        origin = sentinel.mapTo(viewport, QPoint(0, 0))
        rect = QRect(origin, sentinel.size())
        visible = rect.intersected(viewport.rect())
        if visible.isEmpty():
            return False
        area_total = rect.width() * rect.height()
        if area_total <= 0:
            return True
        ratio = (visible.width() * visible.height()) / area_total
        return ratio >= self._threshold

    # ------------------------------------------------------------------
    # Qt plumbing
    # ------------------------------------------------------------------
    def eventFilter(self, watched: QObject, event: QEvent) -> bool:  # noqa: N802
        if event.type() in (QEvent.Type.Resize, QEvent.Type.Show):
            self.schedule_evaluate()
        return False

    def _on_scrolled(self, _value: int) -> None:
        self.evaluate()

    def _on_range_changed(self, _minimum: int, _maximum: int) -> None:
        self.schedule_evaluate()

    def _on_buffer_changed(self, _items) -> None:
        self.schedule_evaluate()

    def _disconnect_widgets(self) -> None:
        area = self._scroll_area
        if area is None:
            return
        try:
            bar = area.verticalScrollBar()
            bar.valueChanged.disconnect(self._on_scrolled)
            bar.rangeChanged.disconnect(self._on_range_changed)
            area.viewport().removeEventFilter(self)
        except (RuntimeError, TypeError) as exc:
            # The scroll area may already be destroyed at session teardown.
            _logger.debug("Scroll area already released: %s", exc)
        self._scroll_area = None
        self._sentinel = None
