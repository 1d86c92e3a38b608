"""Custom exception hierarchy for facetfeed."""

from __future__ import annotations


class FacetFeedError(Exception):
    """Base class for all custom errors raised by facetfeed."""


# --- 3-layer hierarchy ---

class DomainError(FacetFeedError):
    """Base class for domain-level errors."""


class InfrastructureError(FacetFeedError):
    """Base class for infrastructure-level errors."""


class ApplicationError(FacetFeedError):
    """Base class for application-level errors."""


# --- Domain errors ---

class FacetFieldError(DomainError, ValueError):
    """Raised when a facet edit names an unknown field or an invalid value."""


# --- Infrastructure errors ---

class RemoteSearchError(InfrastructureError):
    """Raised when the remote search collaborator fails or reports an error."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


# --- Application errors ---

class SessionClosedError(ApplicationError):
    """Raised when a closed search session receives a facet edit."""


class SettingsValidationError(ApplicationError):
    """Raised when search settings fail schema validation."""


__all__ = [
    "ApplicationError",
    "DomainError",
    "FacetFeedError",
    "FacetFieldError",
    "InfrastructureError",
    "RemoteSearchError",
    "SessionClosedError",
    "SettingsValidationError",
]
