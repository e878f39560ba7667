import random
from datetime import date
from typing import List, Optional

from movie_recommender.scenario import (
    ARTHOUSE_GENRES,
    SHOW_ONLY_ARTHOUSE,
    SHOW_ONLY_CULT,
    SHOW_ONLY_OBSCURE,
    to_catalog_genres,
)
from utils.kinopoisk_client import (
    CatalogQuery,
    SORT_RATING_DESC,
    SORT_VOTES_DESC,
    SORT_YEAR_ASC,
    SORT_YEAR_DESC,
)

RANDOM_SORTS = [SORT_RATING_DESC, SORT_VOTES_DESC, SORT_YEAR_DESC, SORT_YEAR_ASC]
MAX_RANDOM_PAGE = 5
RECENT_YEARS_SPAN = 15


def build_catalog_query(
    catalog_genres: List[str],
    show_only: Optional[str],
    rng: random.Random,
    limit: int = 20,
    today: Optional[date] = None,
) -> CatalogQuery:
    """Shape one catalog query for a scenario.

    The page, and the sort order when no "show only" filter is set, are drawn
    from ``rng`` so repeated identical requests see different slices of the
    catalog. Pass a seeded ``random.Random`` to pin them.
    """
    page = rng.randint(1, MAX_RANDOM_PAGE)

    if show_only == SHOW_ONLY_CULT:
        return CatalogQuery(
            genres=catalog_genres, rating=(7.5, 10), page=page, sort=SORT_VOTES_DESC, limit=limit,
        )
    if show_only == SHOW_ONLY_OBSCURE:
        return CatalogQuery(
            genres=catalog_genres, rating=(6, 8), votes=(100, 10000),
            page=page, sort=SORT_RATING_DESC, limit=limit,
        )
    if show_only == SHOW_ONLY_ARTHOUSE:
        return CatalogQuery(
            genres=to_catalog_genres(ARTHOUSE_GENRES), rating=(6, 10),
            page=page, sort=SORT_YEAR_DESC, limit=limit,
        )

    year = (today or date.today()).year
    return CatalogQuery(
        genres=catalog_genres,
        rating=(6.5, 10),
        years=(year - RECENT_YEARS_SPAN, year),
        page=page,
        sort=rng.choice(RANDOM_SORTS),
        limit=limit,
    )
