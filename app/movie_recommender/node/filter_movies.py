from typing import Any, Dict, List, Optional

from movie_recommender.scenario import SHOW_ONLY_ARTHOUSE, SHOW_ONLY_CULT, SHOW_ONLY_OBSCURE
from utils.errors import NoMatchAfterFilterError

CULT_MIN_RATING = 7.5
OBSCURE_MAX_VOTES = 10000
ARTHOUSE_MARKERS = ("артхаус", "документальный")
ARTHOUSE_MAX_VOTES = 5000
ARTHOUSE_MIN_RATING = 7.0


def _kp(value: Any) -> Optional[float]:
    # catalog sends {"kp": ..., "imdb": ...}; anything else counts as unknown
    kp = value.get("kp") if isinstance(value, dict) else None
    return kp if isinstance(kp, (int, float)) and not isinstance(kp, bool) else None


def primary_rating(movie: Dict[str, Any]) -> Optional[float]:
    return _kp(movie.get("rating"))


def vote_count(movie: Dict[str, Any]) -> Optional[int]:
    return _kp(movie.get("votes"))


def genre_names(movie: Dict[str, Any]) -> List[str]:
    genres = movie.get("genres")
    if not isinstance(genres, list):
        return []
    names = (g.get("name") for g in genres if isinstance(g, dict))
    return [n for n in names if isinstance(n, str) and n]


def is_cult(movie: Dict[str, Any]) -> bool:
    rating = primary_rating(movie)
    return rating is not None and rating > CULT_MIN_RATING


def is_obscure(movie: Dict[str, Any]) -> bool:
    votes = vote_count(movie)
    return votes is None or votes < OBSCURE_MAX_VOTES


def is_arthouse(movie: Dict[str, Any]) -> bool:
    names = [n.lower() for n in genre_names(movie)]
    if any(marker in name for name in names for marker in ARTHOUSE_MARKERS):
        return True
    votes = vote_count(movie)
    rating = primary_rating(movie)
    return (
        votes is not None and votes < ARTHOUSE_MAX_VOTES
        and rating is not None and rating > ARTHOUSE_MIN_RATING
    )


PREDICATES = {
    SHOW_ONLY_CULT: is_cult,
    SHOW_ONLY_OBSCURE: is_obscure,
    SHOW_ONLY_ARTHOUSE: is_arthouse,
}


def filter_movies(movies: List[Dict[str, Any]], show_only: Optional[str]) -> List[Dict[str, Any]]:
    """Apply the "show only" predicate; without one the list passes through."""
    predicate = PREDICATES.get(show_only) if show_only else None
    if predicate is None:
        return list(movies)
    kept = [m for m in movies if predicate(m)]
    if not kept:
        raise NoMatchAfterFilterError(show_only)
    return kept
