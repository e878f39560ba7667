from typing import Any, Dict, List

from movie_recommender.node.filter_movies import genre_names, primary_rating
from utils.kinopoisk_client import KinopoiskClient

MAX_RECOMMENDATIONS = 10
DESCRIPTION_LIMIT = 200
ELLIPSIS = "..."
UNTITLED = "Без названия"
NO_DESCRIPTION = "Описание отсутствует"
PLACEHOLDER_POSTER = "https://via.placeholder.com/300x450?text=No+Poster"


def truncate_description(text: str | None, limit: int = DESCRIPTION_LIMIT) -> str:
    if not text:
        return NO_DESCRIPTION
    if len(text) <= limit:
        return text
    return text[:limit] + ELLIPSIS


def present_movie(movie: Dict[str, Any]) -> Dict[str, Any]:
    rating = primary_rating(movie)
    return {
        "id": movie.get("id"),
        "title": movie.get("name") or movie.get("alternativeName") or movie.get("enName") or UNTITLED,
        "originalTitle": movie.get("alternativeName") or movie.get("enName") or "",
        "year": movie.get("year"),
        "rating": round(rating, 1) if rating is not None else None,
        "genres": genre_names(movie),
        "poster": KinopoiskClient.poster_url(movie.get("poster")) or PLACEHOLDER_POSTER,
        "description": truncate_description(movie.get("description")),
    }


def present_movies(movies: List[Dict[str, Any]], limit: int = MAX_RECOMMENDATIONS) -> List[Dict[str, Any]]:
    return [present_movie(m) for m in movies[:limit]]
