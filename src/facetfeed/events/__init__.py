from .bus import Event, EventBus, Subscription
from .search_events import (
    FacetStateChangedEvent,
    PageAcceptedEvent,
    StaleResponseDiscardedEvent,
)

__all__ = [
    "Event",
    "EventBus",
    "FacetStateChangedEvent",
    "PageAcceptedEvent",
    "StaleResponseDiscardedEvent",
    "Subscription",
]
