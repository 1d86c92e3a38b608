"""Remote search collaborator backed by the AniList GraphQL API."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx
from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

from ...config import ANILIST_ENDPOINT, REQUEST_TIMEOUT_SEC
from ...domain.models.query import RemoteQuery, ResultPage
from ...errors import RemoteSearchError
from .queries import SEARCH_QUERY

_logger = logging.getLogger(__name__)

# Shape of ``data.Page`` once unwrapped.  Media entries stay opaque apart from
# being objects; the controller never interprets them.
PAGE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["media", "pageInfo"],
    "properties": {
        "media": {"type": "array", "items": {"type": "object"}},
        "pageInfo": {
            "type": "object",
            "required": ["hasNextPage"],
            "properties": {"hasNextPage": {"type": ["boolean", "null"]}},
        },
    },
}

_page_validator = Draft202012Validator(PAGE_SCHEMA)


class AniListSearchBackend:
    """Issue ``Search`` queries against AniList and unwrap the page payload.

    The backend is synchronous; callers run it off the GUI thread (see
    :class:`facetfeed.gui.viewmodels.search_workers.QtPageLauncher`).  An
    ``httpx.Client`` may be injected, otherwise one is created and owned.
    """

    def __init__(
        self,
        client: Optional[httpx.Client] = None,
        *,
        endpoint: str = ANILIST_ENDPOINT,
        timeout: float = REQUEST_TIMEOUT_SEC,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout)
        self._endpoint = endpoint

    def search(self, query: RemoteQuery) -> ResultPage:
        variables = query.to_variables()
        _logger.debug("AniList search page=%s variables=%s", query.page, variables)
        try:
            response = self._client.post(
                self._endpoint,
                json={"query": SEARCH_QUERY, "variables": variables},
                headers={"Accept": "application/json"},
            )
        except httpx.HTTPError as exc:
            raise RemoteSearchError(f"Search request failed: {exc}") from exc

        payload = self._decode(response)
        message = _error_message(payload)
        if message is not None:
            raise RemoteSearchError(message, status_code=response.status_code)
        if response.is_error:
            raise RemoteSearchError(
                f"Search request failed with HTTP {response.status_code}",
                status_code=response.status_code,
            )

        page = ((payload.get("data") or {}).get("Page")) if isinstance(payload, dict) else None
        try:
            _page_validator.validate(page)
        except ValidationError as exc:
            raise RemoteSearchError(f"Malformed search response: {exc.message}") from exc

        return ResultPage(
            items=list(page["media"]),
            has_more=bool(page["pageInfo"]["hasNextPage"]),
        )

    def close(self) -> None:
        """Close the HTTP client when this backend created it."""

        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "AniListSearchBackend":
        return self

    def __exit__(self, *_exc) -> None:
        self.close()

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise RemoteSearchError(
                f"Search response is not JSON (HTTP {response.status_code})",
                status_code=response.status_code,
            ) from exc


def _error_message(payload: Any) -> Optional[str]:
    """Return the first error message carried by *payload*, if any.

    Accepts both the GraphQL ``errors`` list and a plain ``error`` object.
    """

    if not isinstance(payload, dict):
        return None
    errors = payload.get("errors")
    if errors:
        first = errors[0] if isinstance(errors, list) else errors
        if isinstance(first, dict):
            return str(first.get("message") or "Failed to fetch results")
        return str(first)
    error = payload.get("error")
    if error:
        if isinstance(error, dict):
            return str(error.get("message") or "Failed to fetch results")
        return str(error)
    return None
