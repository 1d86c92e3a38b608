from .signal import Signal, ObservableProperty
from .base import BaseViewModel
from .facet_store import FacetStore, compute_badges
from .fetch_sequencer import FetchOutcome, FetchSequencer, SequencerState
from .page_requests import ImmediatePageLauncher, PageLauncher, PageTicket

__all__ = [
    "BaseViewModel",
    "FacetStore",
    "FetchOutcome",
    "FetchSequencer",
    "ImmediatePageLauncher",
    "ObservableProperty",
    "PageLauncher",
    "PageTicket",
    "SequencerState",
    "Signal",
    "compute_badges",
]
