from .client import AniListSearchBackend
from .queries import SEARCH_QUERY

__all__ = ["AniListSearchBackend", "SEARCH_QUERY"]
