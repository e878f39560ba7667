import logging
import random
from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, Query

from crud.history_crud import ANONYMOUS, HistoryStore, get_history_store
from movie_recommender.graph import recommend
from movie_recommender.history import HistoryRecorder
from movie_recommender.scenario import GENRE_MAP, VALID_OPTIONS, validate_scenario
from schemas.recommendation_schema import (
    HistoryEntryOut,
    ScenarioRequest,
    WatchedCreate,
    WatchedOut,
)
from utils.auth.jwt_bearer import JWTBearer, optional_user
from utils.config import settings
from utils.kinopoisk_client import KinopoiskClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/recommendations", tags=["recommendations"])


def get_catalog_client() -> KinopoiskClient:
    return KinopoiskClient()


def get_random_source() -> random.Random:
    return random.Random()


def _caller_id(payload: dict | None) -> str:
    if payload and payload.get("user_id") is not None:
        return str(payload["user_id"])
    return ANONYMOUS


@router.get("/")
def index():
    return {
        "message": "Movie recommendation API",
        "documentation": "/docs",
        "endpoints": [
            {"method": "POST", "path": "/api/recommendations/recommend", "description": "Get movie recommendations for a viewing scenario"},
            {"method": "GET", "path": "/api/recommendations/options", "description": "Accepted values for every scenario field"},
            {"method": "GET", "path": "/api/recommendations/history", "description": "Your past recommendation requests"},
            {"method": "GET", "path": "/api/recommendations/stats", "description": "Service usage statistics"},
            {"method": "POST", "path": "/api/recommendations/watched", "description": "Mark a movie as watched"},
            {"method": "GET", "path": "/api/recommendations/watched", "description": "Movies you marked as watched"},
        ],
    }


@router.get("/options")
def get_options():
    return {"success": True, "options": VALID_OPTIONS, "genreMap": GENRE_MAP}


@router.post("/recommend")
def get_recommendations(
    body: ScenarioRequest,
    background_tasks: BackgroundTasks,
    payload: dict | None = Depends(optional_user),
    catalog: KinopoiskClient = Depends(get_catalog_client),
    rng: random.Random = Depends(get_random_source),
    store: HistoryStore = Depends(get_history_store),
):
    """
    Recommend up to 10 movies for a viewing scenario.

    Failures come back as ``{"success": false, "error", "kind", ...}`` through
    the RecommendationError handler registered in main.
    """
    scenario = validate_scenario(body.as_raw())
    result = recommend(
        scenario,
        catalog.find_movies,
        rng=rng,
        fallback_enabled=settings.CATALOG_FALLBACK_ENABLED,
        limit=settings.CATALOG_PAGE_LIMIT,
    )
    logger.info(
        "recommend.done with_whom=%s total=%d returned=%d source=%s",
        scenario.with_whom, result["total"], len(result["recommendations"]), result["metadata"]["source"],
    )

    # runs after the response is sent; its outcome never reaches the client
    recorder = HistoryRecorder(store)
    background_tasks.add_task(
        recorder.record, scenario, len(result["recommendations"]), _caller_id(payload)
    )
    return result


@router.get("/history")
def get_history(
    limit: int = Query(10, ge=1, le=100),
    payload: dict | None = Depends(optional_user),
    store: HistoryStore = Depends(get_history_store),
):
    rows = store.get_history(_caller_id(payload), limit=limit)
    data = [HistoryEntryOut.model_validate(r).model_dump(by_alias=True) for r in rows]
    return {"success": True, "data": data, "total": len(data)}


@router.get("/stats")
def get_stats(
    days: int = Query(30, ge=1, le=365),
    store: HistoryStore = Depends(get_history_store),
):
    return {
        "success": True,
        "stats": store.get_stats(period_days=days),
        "system": {
            "environment": settings.ENVIRONMENT,
            "catalog_fallback_enabled": settings.CATALOG_FALLBACK_ENABLED,
        },
    }


@router.post("/watched", response_model=WatchedOut, status_code=201)
def mark_watched(
    body: WatchedCreate,
    payload: dict = Depends(JWTBearer()),
    store: HistoryStore = Depends(get_history_store),
):
    return store.mark_watched(payload["user_id"], body.movie_id, title=body.title, rating=body.rating)


@router.get("/watched", response_model=List[WatchedOut])
def list_watched(
    limit: int = Query(50, ge=1, le=200),
    payload: dict = Depends(JWTBearer()),
    store: HistoryStore = Depends(get_history_store),
):
    return store.list_watched(payload["user_id"], limit=limit)
