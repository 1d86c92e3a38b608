"""Single-shot ``QTimer`` debouncing for rapid user input."""

from __future__ import annotations

from typing import Any, Callable, Optional, TypeVar

from PySide6.QtCore import QObject, QTimer

T = TypeVar("T")

_NO_VALUE = object()


class Debouncer(QObject):
    """Delay ``fn(value)`` until *delay_ms* pass without another call.

    Only the most recent value survives a burst of calls; each call restarts
    the timer.  The instance is callable so it can stand in for ``fn``.
    """

    def __init__(
        self,
        fn: Callable[[T], Any],
        delay_ms: int,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        if delay_ms < 0:
            raise ValueError(f"delay_ms must be >= 0, got {delay_ms}")
        self._fn = fn
        self._pending: Any = _NO_VALUE
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(delay_ms)
        self._timer.timeout.connect(self._fire)

    @property
    def delay_ms(self) -> int:
        return self._timer.interval()

    def __call__(self, value: T) -> None:
        self._pending = value
        # ``start`` on an active single-shot timer restarts the countdown.
        self._timer.start()

    def is_pending(self) -> bool:
        return self._pending is not _NO_VALUE

    def cancel(self) -> None:
        """Drop the scheduled call, if any."""
        self._timer.stop()
        self._pending = _NO_VALUE

    def flush(self) -> None:
        """Run the scheduled call now instead of waiting for the timer."""
        if self._timer.isActive():
            self._timer.stop()
        self._fire()

    def _fire(self) -> None:
        if self._pending is _NO_VALUE:
            return
        value, self._pending = self._pending, _NO_VALUE
        self._fn(value)


def debounce(
    fn: Callable[[T], Any],
    delay_ms: int,
    parent: Optional[QObject] = None,
) -> Debouncer:
    """Return a debounced wrapper around *fn*."""

    return Debouncer(fn, delay_ms, parent)
