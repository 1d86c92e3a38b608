"""BaseViewModel: pure Python, no Qt dependency.

Tracks the signals a view model emits so it can be torn down in one
``dispose()`` call when its search session ends.
"""

from __future__ import annotations

from facetfeed.gui.viewmodels.signal import Signal


class BaseViewModel:
    """ViewModel base class: pure Python, no Qt dependency."""

    def __init__(self) -> None:
        self._owned_signals: list[Signal] = []
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def own_signal(self) -> Signal:
        """Create a signal whose handlers are dropped on :meth:`dispose`."""
        signal = Signal()
        self._owned_signals.append(signal)
        return signal

    def dispose(self) -> None:
        """Disconnect every owned signal."""
        for signal in self._owned_signals:
            signal.disconnect_all()
        self._disposed = True
