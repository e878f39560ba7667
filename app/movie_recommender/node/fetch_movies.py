import logging
import random
from typing import Any, Callable, Dict, List

from movie_recommender.fallback import FALLBACK_MOVIES
from movie_recommender.query import build_catalog_query
from movie_recommender.state import RecState
from utils.errors import CatalogError, NoResultsError
from utils.kinopoisk_client import CatalogQuery

logger = logging.getLogger(__name__)

SOURCE_CATALOG = "kinopoisk_api"
SOURCE_FALLBACK = "fallback_data"

FindMovies = Callable[[CatalogQuery], List[Dict[str, Any]]]


def make_fetch_movies(find_movies: FindMovies, rng: random.Random, fallback_enabled: bool, limit: int = 20):
    def fetch_movies(state: RecState):
        query = build_catalog_query(
            state["catalog_genres"], state["scenario"].get("showOnly"), rng, limit=limit,
        )
        meta = {"catalog_genres": query.genres, "page": query.page, "sort": query.describe_sort()}
        try:
            candidates = find_movies(query)
        except (CatalogError, NoResultsError) as e:
            if not fallback_enabled:
                raise
            logger.warning("catalog failed (%s), answering from fallback data", e.kind.value)
            return {"candidates": list(FALLBACK_MOVIES), "source": SOURCE_FALLBACK, **meta}
        return {"candidates": candidates, "source": SOURCE_CATALOG, **meta}

    return fetch_movies
