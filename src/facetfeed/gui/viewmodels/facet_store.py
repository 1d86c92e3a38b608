"""Committed facet state and its badge projection."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Iterable, List, Optional

from facetfeed.config import IDS_BADGE_LABEL
from facetfeed.domain.models.facets import (
    DEFAULT_SORT,
    FACET_FIELDS,
    FacetField,
    FacetKind,
    FacetState,
    FacetValue,
    facet_field,
)
from facetfeed.errors import FacetFieldError
from facetfeed.events.bus import EventBus
from facetfeed.events.search_events import FacetStateChangedEvent
from facetfeed.gui.viewmodels.base import BaseViewModel

_logger = logging.getLogger(__name__)


class FacetStore(BaseViewModel):
    """Sole writer of :class:`FacetState` and of the generation counter.

    Every mutation replaces the frozen state, bumps the generation and emits
    ``state_changed(state, generation)``.  Listeners (the fetch sequencer in
    particular) treat a new generation as "everything in flight is stale".
    """

    def __init__(
        self,
        initial: Optional[FacetState] = None,
        *,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        super().__init__()
        self._state = initial or FacetState()
        self._generation = 0
        self._events = event_bus
        self.state_changed = self.own_signal()

    @property
    def state(self) -> FacetState:
        return self._state

    @property
    def generation(self) -> int:
        return self._generation

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def set_facet(self, field: str, value: Any) -> None:
        """Replace the value of *field*."""

        descriptor = facet_field(field)
        if descriptor is None:
            raise FacetFieldError(f"Unknown facet field: {field!r}")
        normalised = _normalise(descriptor, value)
        self._commit(replace(self._state, **{descriptor.name: normalised}))

    def remove_badge(self, label: str) -> None:
        """Remove every facet entry whose label is *label*.

        The pass is generic over :data:`FACET_FIELDS` so new facets need no
        extra removal logic.  The ``IDs`` badge clears the explicit-ID override.
        """

        # The ``IDs`` label is reserved: free text that reads "IDs" keeps its
        # badge and is cleared through ``set_facet("text", "")`` or ``clear_all``.
        if label == IDS_BADGE_LABEL:
            self._commit(replace(self._state, explicit_ids=None))
            return

        changes: dict[str, Any] = {}
        for descriptor in FACET_FIELDS:
            current = self._state.value_of(descriptor)
            if descriptor.kind is FacetKind.TEXT:
                if current == label:
                    changes[descriptor.name] = ""
            elif descriptor.is_list:
                kept = tuple(entry for entry in current if entry.label != label)
                if len(kept) != len(current):
                    changes[descriptor.name] = kept
        if not changes:
            _logger.debug("No facet carries badge %r", label)
        self._commit(replace(self._state, **changes))

    def clear_all(self) -> None:
        """Reset every facet to its default."""

        self._commit(FacetState())

    # ------------------------------------------------------------------
    # Derived data
    # ------------------------------------------------------------------
    def compute_badges(self) -> List[str]:
        """Return one label per active facet value, in field order."""

        return compute_badges(self._state)

    def _commit(self, state: FacetState) -> None:
        self._state = state
        self._generation += 1
        _logger.debug("Facet state committed, generation=%d", self._generation)
        if self._events is not None:
            self._events.publish(
                FacetStateChangedEvent(generation=self._generation, state=state)
            )
        self.state_changed.emit(state, self._generation)


def compute_badges(state: FacetState) -> List[str]:
    """Project *state* onto the flat list of removable filter labels.

    Empty values and the default sort entry are skipped; an explicit-ID
    override is summarised as a single ``IDs`` badge.
    """

    badges: List[str] = []
    for descriptor in FACET_FIELDS:
        value = state.value_of(descriptor)
        if descriptor.kind is FacetKind.TEXT:
            if value:
                badges.append(value)
        elif descriptor.kind is FacetKind.IDS:
            if value:
                badges.append(IDS_BADGE_LABEL)
        else:
            for entry in value:
                if descriptor.kind is FacetKind.SORT and entry in DEFAULT_SORT:
                    continue
                if entry.label:
                    badges.append(entry.label)
    return badges


def _normalise(descriptor: FacetField, value: Any) -> Any:
    kind = descriptor.kind
    if kind is FacetKind.TEXT:
        if value is None:
            return ""
        if not isinstance(value, str):
            raise FacetFieldError(f"{descriptor.name} expects a string, got {value!r}")
        return value
    if kind is FacetKind.IDS:
        if value is None:
            return None
        try:
            ids = tuple(int(entry) for entry in value)
        except (TypeError, ValueError) as exc:
            raise FacetFieldError(f"{descriptor.name} expects integer ids, got {value!r}") from exc
        return ids or None
    entries = _as_values(descriptor, value)
    limit = descriptor.max_entries
    if limit is not None and len(entries) > limit:
        raise FacetFieldError(
            f"{descriptor.name} accepts at most {limit} value, got {len(entries)}"
        )
    if descriptor.coerce is not None:
        # Coercion runs again when the query is built; a bad key must fail here
        # rather than inside the reload triggered by the commit.
        for entry in entries:
            try:
                descriptor.coerce(entry.key)
            except (TypeError, ValueError) as exc:
                raise FacetFieldError(
                    f"{descriptor.name} cannot use key {entry.key!r}"
                ) from exc
    return entries


def _as_values(descriptor: FacetField, value: Optional[Iterable[Any]]) -> tuple[FacetValue, ...]:
    if value is None:
        return ()
    if isinstance(value, (FacetValue, str)):
        raise FacetFieldError(f"{descriptor.name} expects a list of facet values")
    entries = []
    for entry in value:
        if not isinstance(entry, FacetValue):
            raise FacetFieldError(
                f"{descriptor.name} expects FacetValue entries, got {entry!r}"
            )
        entries.append(entry)
    return tuple(entries)
