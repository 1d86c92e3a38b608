"""Default configuration values for facetfeed."""

from __future__ import annotations

from typing import Final

# Quiet period before a free-text edit is committed to the facet state.  The
# visible input still updates on every keystroke.
SEARCH_DEBOUNCE_MS: Final[int] = 200

DEFAULT_PER_PAGE: Final[int] = 20

# Fraction of the sentinel that must intersect the viewport before the next
# page is requested.
SENTINEL_VISIBILITY_THRESHOLD: Final[float] = 0.1

ANILIST_ENDPOINT: Final[str] = "https://graphql.anilist.co"
REQUEST_TIMEOUT_SEC: Final[float] = 15.0

# Badge shown when an explicit ID override replaces facet filtering.
IDS_BADGE_LABEL: Final[str] = "IDs"

# Sort key sent when the user removed the sort facet entirely.
FALLBACK_SORT_KEY: Final[str] = "SEARCH_MATCH"

DEFAULT_SORT_KEY: Final[str] = "TRENDING_DESC"
DEFAULT_SORT_LABEL: Final[str] = "Trending"
