import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import requests

from utils.config import settings
from utils.errors import (
    CatalogRateLimitedError,
    CatalogUnauthorizedError,
    CatalogUnavailableError,
    CatalogUpstreamError,
    NoResultsError,
)

logger = logging.getLogger(__name__)

SELECT_FIELDS = [
    "id", "name", "alternativeName", "enName", "year", "rating",
    "poster", "genres", "description", "votes",
]

# (field, direction); direction follows the catalog: -1 desc, 1 asc
SORT_RATING_DESC = ("rating.kp", -1)
SORT_VOTES_DESC = ("votes.kp", -1)
SORT_YEAR_DESC = ("year", -1)
SORT_YEAR_ASC = ("year", 1)


@dataclass
class CatalogQuery:
    genres: List[str]
    rating: Tuple[float, float]
    page: int
    sort: Tuple[str, int]
    limit: int = 20
    votes: Optional[Tuple[int, int]] = None
    years: Optional[Tuple[int, int]] = None
    select_fields: List[str] = field(default_factory=lambda: list(SELECT_FIELDS))

    def to_params(self) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "genres.name": list(self.genres),
            "rating.kp": _band(self.rating),
            "page": self.page,
            "limit": self.limit,
            "sortField": self.sort[0],
            "sortType": str(self.sort[1]),
            "selectFields": list(self.select_fields),
        }
        if self.votes:
            params["votes.kp"] = _band(self.votes)
        if self.years:
            params["year"] = _band(self.years)
        return params

    def describe_sort(self) -> Dict[str, str]:
        return {"field": self.sort[0], "direction": "desc" if self.sort[1] < 0 else "asc"}


def _band(bounds: Tuple[Any, Any]) -> str:
    low, high = bounds
    return f"{low:g}-{high:g}"


class KinopoiskClient:
    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.api_key = api_key if api_key is not None else settings.KINOPOISK_API_KEY
        self.base_url = (base_url or settings.KINOPOISK_BASE_URL).rstrip("/")
        self.timeout = timeout or settings.CATALOG_TIMEOUT

    def _request(self, method: str, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        if not self.api_key:
            raise CatalogUnauthorizedError("KINOPOISK_API_KEY is not configured")

        url = f"{self.base_url}{path}"
        headers = {"X-API-KEY": self.api_key, "Accept": "application/json"}

        try:
            resp = requests.request(method, url, params=params, headers=headers, timeout=self.timeout)
            resp.raise_for_status()
            return resp.json()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            detail = f"catalog responded with HTTP {status}"
            if status in (401, 403):
                raise CatalogUnauthorizedError(detail, upstream_status=status) from e
            if status == 429:
                raise CatalogRateLimitedError(detail, upstream_status=status) from e
            raise CatalogUpstreamError(detail, upstream_status=status) from e
        except (requests.Timeout, requests.ConnectionError) as e:
            raise CatalogUnavailableError(f"catalog unreachable: {e}") from e
        except requests.RequestException as e:
            raise CatalogUpstreamError(f"catalog request failed: {e}") from e
        except ValueError as e:
            raise CatalogUpstreamError("catalog returned a non-JSON body") from e

    def find_movies(self, query: CatalogQuery) -> List[Dict[str, Any]]:
        """Run one catalog query. Never retries; an empty page is NoResultsError."""
        logger.info(
            "catalog.query genres=%s page=%s sort=%s",
            ",".join(query.genres), query.page, query.describe_sort(),
        )
        data = self._request("GET", "/movie", params=query.to_params())
        if not isinstance(data, dict):
            raise CatalogUpstreamError(f"catalog returned an unexpected body: {type(data).__name__}")
        docs = data.get("docs") or []
        if not isinstance(docs, list):
            raise CatalogUpstreamError(f"catalog returned docs as {type(docs).__name__}")
        docs = [d for d in docs if isinstance(d, dict)]
        logger.info("catalog.received count=%d", len(docs))
        if not docs:
            raise NoResultsError()
        return docs

    @staticmethod
    def poster_url(poster: Optional[Dict[str, Any]]) -> Optional[str]:
        if not isinstance(poster, dict):
            return None
        return poster.get("url") or poster.get("previewUrl")
