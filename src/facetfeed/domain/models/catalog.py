"""Selectable options offered for each facet."""

from __future__ import annotations

from datetime import date
from typing import Dict, Tuple

from facetfeed.domain.models.facets import DEFAULT_SORT, FacetValue


def _same(*keys: str) -> Tuple[FacetValue, ...]:
    return tuple(FacetValue(key, key) for key in keys)


GENRES: Tuple[FacetValue, ...] = _same(
    "Action",
    "Adventure",
    "Comedy",
    "Drama",
    "Ecchi",
    "Fantasy",
    "Horror",
    "Mahou Shoujo",
    "Mecha",
    "Music",
    "Mystery",
    "Psychological",
    "Romance",
    "Sci-Fi",
    "Slice of Life",
    "Sports",
    "Supernatural",
    "Thriller",
)

SEASONS: Tuple[FacetValue, ...] = (
    FacetValue("WINTER", "Winter"),
    FacetValue("SPRING", "Spring"),
    FacetValue("SUMMER", "Summer"),
    FacetValue("FALL", "Fall"),
)

FORMATS: Tuple[FacetValue, ...] = (
    FacetValue("TV", "TV Show"),
    FacetValue("MOVIE", "Movie"),
    FacetValue("TV_SHORT", "TV Short"),
    FacetValue("SPECIAL", "Special"),
    FacetValue("OVA", "OVA"),
    FacetValue("ONA", "ONA"),
    FacetValue("MUSIC", "Music Video"),
)

STATUSES: Tuple[FacetValue, ...] = (
    FacetValue("RELEASING", "Airing"),
    FacetValue("FINISHED", "Finished"),
    FacetValue("NOT_YET_RELEASED", "Not Yet Aired"),
    FacetValue("HIATUS", "Hiatus"),
    FacetValue("CANCELLED", "Cancelled"),
)

SORT_ORDERS: Tuple[FacetValue, ...] = DEFAULT_SORT + (
    FacetValue("POPULARITY_DESC", "Popularity"),
    FacetValue("SCORE_DESC", "Score"),
    FacetValue("TITLE_ROMAJI", "Title"),
    FacetValue("START_DATE_DESC", "Release Date"),
    FacetValue("FAVOURITES_DESC", "Favourites"),
    FacetValue("UPDATED_AT_DESC", "Recently Updated"),
)

ON_LIST: Tuple[FacetValue, ...] = (
    FacetValue("true", "On My List"),
    FacetValue("false", "Not On My List"),
)

FIRST_YEAR = 1940


def years(today: date | None = None) -> Tuple[FacetValue, ...]:
    """Return season years from next year back to :data:`FIRST_YEAR`."""

    last = (today or date.today()).year + 1
    return _same(*(str(year) for year in range(last, FIRST_YEAR - 1, -1)))


def options_by_field(today: date | None = None) -> Dict[str, Tuple[FacetValue, ...]]:
    """Map each list-valued facet field to the options a picker should offer."""

    return {
        "on_list": ON_LIST,
        "genres": GENRES,
        "years": years(today),
        "seasons": SEASONS,
        "formats": FORMATS,
        "status": STATUSES,
        "sort": SORT_ORDERS,
    }
