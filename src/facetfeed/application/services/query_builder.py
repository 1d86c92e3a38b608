"""Translate committed facet state into a remote query."""

from __future__ import annotations

from typing import Dict, List, Optional

from facetfeed.config import DEFAULT_PER_PAGE, FALLBACK_SORT_KEY
from facetfeed.domain.models.facets import FACET_FIELDS, FacetField, FacetKind, FacetState
from facetfeed.domain.models.query import RemoteQuery

# FacetField.param (wire name) -> RemoteQuery attribute.
_QUERY_ATTRS: Dict[str, str] = {
    "search": "search",
    "onList": "on_list",
    "genre": "genre",
    "seasonYear": "season_year",
    "season": "season",
    "format": "format",
    "status": "status",
    "sort": "sort",
    "ids": "ids",
}


def build_query(state: FacetState, page: int, per_page: int = DEFAULT_PER_PAGE) -> RemoteQuery:
    """Return the :class:`RemoteQuery` for *page* of the search described by *state*.

    Empty facets are left absent.  Multi-select facets become lists of keys,
    single-select facets the (coerced) key of their only entry and the sort
    facet a one-element list.  ``explicit_ids`` is passed through untouched;
    the remote side gives it precedence over every other filter.

    The function is pure: identical inputs always produce equal queries.
    """

    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    if per_page < 1:
        raise ValueError(f"per_page must be >= 1, got {per_page}")

    query = RemoteQuery().paginate(page, per_page)
    for descriptor in FACET_FIELDS:
        attr = _QUERY_ATTRS[descriptor.param]
        setattr(query, attr, _serialise(descriptor, state.value_of(descriptor)))
    if not query.sort:
        query.sort = [FALLBACK_SORT_KEY]
    return query


def _serialise(descriptor: FacetField, value: object):
    kind = descriptor.kind
    if kind is FacetKind.TEXT:
        return value or None
    if kind is FacetKind.IDS:
        return list(value) if value else None
    if kind is FacetKind.MULTI:
        return [entry.key for entry in value]
    if kind is FacetKind.SORT:
        return [value[0].key] if value else []
    return _first_key(descriptor, value)


def _first_key(descriptor: FacetField, value) -> Optional[object]:
    if not value:
        return None
    key = value[0].key
    return descriptor.coerce(key) if descriptor.coerce else key


__all__: List[str] = ["build_query"]
