from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from facetfeed.config import DEFAULT_PER_PAGE, FALLBACK_SORT_KEY


@dataclass
class RemoteQuery:
    """Parameter object for one remote page request.

    ``None`` and empty lists mean "absent": :meth:`to_variables` never sends
    them, so the remote side is not over-constrained.
    """

    page: int = 1
    per_page: int = DEFAULT_PER_PAGE
    search: Optional[str] = None
    on_list: Optional[bool] = None
    genre: List[str] = field(default_factory=list)
    season_year: Optional[int] = None
    season: Optional[str] = None
    format: List[str] = field(default_factory=list)
    status: List[str] = field(default_factory=list)
    sort: List[str] = field(default_factory=lambda: [FALLBACK_SORT_KEY])
    ids: Optional[List[int]] = None

    def paginate(self, page: int, per_page: int):
        self.page = page
        self.per_page = per_page
        return self

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.per_page

    def to_variables(self) -> Dict[str, Any]:
        """Return the camelCase wire mapping with absent parameters dropped."""

        candidates: Dict[str, Any] = {
            "page": self.page,
            "perPage": self.per_page,
            "search": self.search,
            "onList": self.on_list,
            "genre": self.genre,
            "seasonYear": self.season_year,
            "season": self.season,
            "format": self.format,
            "status": self.status,
            "sort": self.sort,
            "ids": self.ids,
        }
        variables: Dict[str, Any] = {}
        for name, value in candidates.items():
            if value is None:
                continue
            if isinstance(value, (list, str)) and not value:
                continue
            variables[name] = list(value) if isinstance(value, list) else value
        return variables


@dataclass
class ResultPage:
    """Items returned by one remote call plus the server's has-more flag."""

    items: List[Any] = field(default_factory=list)
    has_more: bool = False
