"""Schema helpers for per-session search settings."""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Mapping

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError

from ..config import (
    ANILIST_ENDPOINT,
    DEFAULT_PER_PAGE,
    REQUEST_TIMEOUT_SEC,
    SEARCH_DEBOUNCE_MS,
    SENTINEL_VISIBILITY_THRESHOLD,
)
from ..errors import SettingsValidationError

SETTINGS_SCHEMA: dict[str, Any] = {
    "$id": "facetfeed/search-settings.schema.json",
    "type": "object",
    "properties": {
        "debounce_ms": {"type": "integer", "minimum": 0},
        # AniList caps perPage at 50.
        "per_page": {"type": "integer", "minimum": 1, "maximum": 50},
        "sentinel_threshold": {
            "type": "number",
            "exclusiveMinimum": 0,
            "maximum": 1,
        },
        "endpoint": {"type": "string", "minLength": 1},
        "timeout_sec": {"type": "number", "exclusiveMinimum": 0},
    },
    "additionalProperties": False,
}

DEFAULT_SETTINGS: dict[str, Any] = {
    "debounce_ms": SEARCH_DEBOUNCE_MS,
    "per_page": DEFAULT_PER_PAGE,
    "sentinel_threshold": SENTINEL_VISIBILITY_THRESHOLD,
    "endpoint": ANILIST_ENDPOINT,
    "timeout_sec": REQUEST_TIMEOUT_SEC,
}

_validator = Draft202012Validator(SETTINGS_SCHEMA)


def merge_with_defaults(data: Mapping[str, Any] | None) -> dict[str, Any]:
    """Merge *data* over :data:`DEFAULT_SETTINGS` and validate the result."""

    merged = deepcopy(DEFAULT_SETTINGS)
    if data:
        merged.update(data)
    validate_settings(merged)
    return merged


def validate_settings(data: Mapping[str, Any]) -> None:
    """Validate *data* against the settings schema."""

    try:
        _validator.validate(dict(data))
    except ValidationError as exc:
        location = ".".join(str(part) for part in exc.absolute_path) or "<root>"
        raise SettingsValidationError(f"{location}: {exc.message}") from exc


__all__ = ["DEFAULT_SETTINGS", "SETTINGS_SCHEMA", "merge_with_defaults", "validate_settings"]
