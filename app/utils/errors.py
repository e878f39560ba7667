from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorKind(str, Enum):
    MISSING_FIELD = "missing_field"
    INVALID_ENUM_VALUE = "invalid_enum_value"
    CATALOG_UNAUTHORIZED = "catalog_unauthorized"
    CATALOG_RATE_LIMITED = "catalog_rate_limited"
    CATALOG_UNAVAILABLE = "catalog_unavailable"
    CATALOG_UPSTREAM_ERROR = "catalog_upstream_error"
    NO_RESULTS = "no_results"
    NO_MATCH_AFTER_FILTER = "no_match_after_filter"


STATUS_BY_KIND: Dict[ErrorKind, int] = {
    ErrorKind.MISSING_FIELD: 400,
    ErrorKind.INVALID_ENUM_VALUE: 400,
    # a missing or rejected credential is our misconfiguration, not the catalog being down
    ErrorKind.CATALOG_UNAUTHORIZED: 500,
    ErrorKind.CATALOG_RATE_LIMITED: 503,
    ErrorKind.CATALOG_UNAVAILABLE: 503,
    ErrorKind.CATALOG_UPSTREAM_ERROR: 503,
    ErrorKind.NO_RESULTS: 404,
    ErrorKind.NO_MATCH_AFTER_FILTER: 404,
}


class RecommendationError(Exception):
    """Base for every failure the recommendation pipeline reports to the caller."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]

    def to_dict(self, include_detail: bool = True) -> Dict[str, Any]:
        return {"success": False, "error": self.message, "kind": self.kind.value}


# ---------------- client input ----------------

class MissingFieldError(RecommendationError):
    kind = ErrorKind.MISSING_FIELD

    def __init__(self, fields: List[str]) -> None:
        super().__init__(f"Required fields are missing: {', '.join(fields)}")
        self.fields = list(fields)

    def to_dict(self, include_detail: bool = True) -> Dict[str, Any]:
        body = super().to_dict(include_detail)
        body["fields"] = self.fields
        return body


class InvalidEnumValueError(RecommendationError):
    kind = ErrorKind.INVALID_ENUM_VALUE

    def __init__(self, field: str, value: Any, accepted: List[str]) -> None:
        super().__init__(
            f"Invalid value for {field}: {value}. Accepted values: {', '.join(accepted)}"
        )
        self.field = field
        self.value = value
        self.accepted = list(accepted)

    def to_dict(self, include_detail: bool = True) -> Dict[str, Any]:
        body = super().to_dict(include_detail)
        body.update({"field": self.field, "value": self.value, "accepted": self.accepted})
        return body


# ---------------- catalog failures ----------------

class CatalogError(RecommendationError):
    kind = ErrorKind.CATALOG_UPSTREAM_ERROR
    public_message = "Movie catalog is temporarily unavailable"

    def __init__(self, detail: str, upstream_status: Optional[int] = None) -> None:
        super().__init__(self.public_message)
        self.detail = detail
        self.upstream_status = upstream_status

    def to_dict(self, include_detail: bool = True) -> Dict[str, Any]:
        body = super().to_dict(include_detail)
        if include_detail:
            body["detail"] = self.detail
            body["upstream_status"] = self.upstream_status
        return body


class CatalogUnauthorizedError(CatalogError):
    kind = ErrorKind.CATALOG_UNAUTHORIZED
    public_message = "Movie catalog is not configured correctly"


class CatalogRateLimitedError(CatalogError):
    kind = ErrorKind.CATALOG_RATE_LIMITED
    public_message = "Movie catalog request limit reached, try again later"


class CatalogUnavailableError(CatalogError):
    kind = ErrorKind.CATALOG_UNAVAILABLE


class CatalogUpstreamError(CatalogError):
    kind = ErrorKind.CATALOG_UPSTREAM_ERROR


# ---------------- empty outcomes ----------------

class EmptyOutcomeError(RecommendationError):
    suggestions: List[str] = []

    def to_dict(self, include_detail: bool = True) -> Dict[str, Any]:
        body = super().to_dict(include_detail)
        body["suggestions"] = list(self.suggestions)
        return body


class NoResultsError(EmptyOutcomeError):
    kind = ErrorKind.NO_RESULTS
    suggestions = [
        "Try a different viewing scenario",
        "Remove the 'show only' filter",
        "Repeat the request a bit later",
    ]

    def __init__(self, message: str = "The catalog returned no movies for this scenario") -> None:
        super().__init__(message)


class NoMatchAfterFilterError(EmptyOutcomeError):
    kind = ErrorKind.NO_MATCH_AFTER_FILTER
    suggestions = [
        "Remove or change the 'show only' filter",
        "Repeat the request to get another selection",
    ]

    def __init__(self, show_only: Optional[str] = None) -> None:
        super().__init__(f"No movies left after applying the '{show_only}' filter")
        self.show_only = show_only
