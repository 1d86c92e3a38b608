"""Events published by a search session."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from facetfeed.events.bus import Event


@dataclass(kw_only=True)
class FacetStateChangedEvent(Event):
    generation: int
    state: Any = None


@dataclass(kw_only=True)
class PageAcceptedEvent(Event):
    generation: int
    page: int
    item_count: int
    has_more: bool


@dataclass(kw_only=True)
class StaleResponseDiscardedEvent(Event):
    """A response arrived for a generation that is no longer current."""

    generation: int
    current_generation: int
    page: int
    failed: bool = False
