"""Facet values, facet field descriptors and the committed facet state."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple

from facetfeed.config import DEFAULT_SORT_KEY, DEFAULT_SORT_LABEL


@dataclass(frozen=True, eq=False)
class FacetValue:
    """One selectable option inside a facet.  Equality is by ``key`` only."""

    key: str
    label: str

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FacetValue):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)


DEFAULT_SORT: Tuple[FacetValue, ...] = (FacetValue(DEFAULT_SORT_KEY, DEFAULT_SORT_LABEL),)


class FacetKind(Enum):
    TEXT = "text"
    MULTI = "multi"
    SINGLE = "single"
    SORT = "sort"
    IDS = "ids"


def parse_tri_state(key: str) -> Optional[bool]:
    """Map a yes/no/any option key onto ``True``/``False``/``None``."""

    if key == "true":
        return True
    if key == "false":
        return False
    return None


@dataclass(frozen=True)
class FacetField:
    """Descriptor tying a :class:`FacetState` attribute to its remote parameter."""

    name: str
    kind: FacetKind
    param: str
    coerce: Optional[Callable[[str], object]] = None

    @property
    def is_list(self) -> bool:
        return self.kind in (FacetKind.MULTI, FacetKind.SINGLE, FacetKind.SORT)

    @property
    def max_entries(self) -> Optional[int]:
        if self.kind in (FacetKind.SINGLE, FacetKind.SORT):
            return 1
        return None


# Field order is also badge order.
FACET_FIELDS: Tuple[FacetField, ...] = (
    FacetField("text", FacetKind.TEXT, "search"),
    FacetField("on_list", FacetKind.SINGLE, "onList", coerce=parse_tri_state),
    FacetField("genres", FacetKind.MULTI, "genre"),
    FacetField("years", FacetKind.SINGLE, "seasonYear", coerce=int),
    FacetField("seasons", FacetKind.SINGLE, "season"),
    FacetField("formats", FacetKind.MULTI, "format"),
    FacetField("status", FacetKind.MULTI, "status"),
    FacetField("sort", FacetKind.SORT, "sort"),
    FacetField("explicit_ids", FacetKind.IDS, "ids"),
)

_FIELDS_BY_NAME = {descriptor.name: descriptor for descriptor in FACET_FIELDS}


def facet_field(name: str) -> Optional[FacetField]:
    """Return the descriptor called *name*, or ``None`` when unknown."""

    return _FIELDS_BY_NAME.get(name)


@dataclass(frozen=True)
class FacetState:
    """Committed facet values for one search session.

    Every field is always defined; clearing a facet stores ``""`` or ``()``.
    ``explicit_ids`` is the only optional field: when set it overrides all
    facet filtering on the remote side.
    """

    text: str = ""
    on_list: Tuple[FacetValue, ...] = ()
    genres: Tuple[FacetValue, ...] = ()
    years: Tuple[FacetValue, ...] = ()
    seasons: Tuple[FacetValue, ...] = ()
    formats: Tuple[FacetValue, ...] = ()
    status: Tuple[FacetValue, ...] = ()
    sort: Tuple[FacetValue, ...] = DEFAULT_SORT
    explicit_ids: Optional[Tuple[int, ...]] = None

    def value_of(self, descriptor: FacetField) -> object:
        return getattr(self, descriptor.name)

    def is_default(self) -> bool:
        return self == FacetState()
