"""Protocols for collaborators the search controller depends on."""

from __future__ import annotations

from typing import Protocol

from facetfeed.domain.models.query import RemoteQuery, ResultPage


class SearchBackend(Protocol):
    """Query side of the remote paged search API.

    Implementations raise :class:`facetfeed.errors.RemoteSearchError` for both
    transport failures and error payloads reported by the remote service.
    """

    def search(self, query: RemoteQuery) -> ResultPage: ...
