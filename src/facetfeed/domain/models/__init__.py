from .facets import (
    DEFAULT_SORT,
    FACET_FIELDS,
    FacetField,
    FacetKind,
    FacetState,
    FacetValue,
    facet_field,
)
from .query import RemoteQuery, ResultPage

__all__ = [
    "DEFAULT_SORT",
    "FACET_FIELDS",
    "FacetField",
    "FacetKind",
    "FacetState",
    "FacetValue",
    "RemoteQuery",
    "ResultPage",
    "facet_field",
]
