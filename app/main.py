import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from crud.token_crud import purge_expired
from database import SessionLocal, init_db
from movie_recommender.scenario import VALID_OPTIONS
from routers.recommendation_router import router as recommendation_router
from routers.user_routers import router as user_router
from utils.config import settings
from utils.errors import ErrorKind, RecommendationError
from utils.middleware.logger import LoggingMiddleware, get_request_id, setup_logging

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Movie Recommendation API",
    description="Movie recommendations for a viewing scenario: who you watch with, when and why.",
    version="2.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(LoggingMiddleware)


@app.exception_handler(RecommendationError)
async def recommendation_error_handler(request: Request, exc: RecommendationError):
    if exc.status_code >= 500:
        logger.error("recommendation failed kind=%s detail=%s", exc.kind.value, getattr(exc, "detail", exc.message))
    else:
        logger.info("recommendation rejected kind=%s: %s", exc.kind.value, exc.message)

    body = exc.to_dict(include_detail=not settings.is_production)
    if exc.kind in (ErrorKind.MISSING_FIELD, ErrorKind.INVALID_ENUM_VALUE):
        body["options"] = VALID_OPTIONS
    body["request_id"] = get_request_id()
    return JSONResponse(status_code=exc.status_code, content=body)


@app.on_event("startup")
def startup_event():
    init_db()
    db = SessionLocal()
    try:
        count = purge_expired(db)
    finally:
        db.close()
    logger.info("startup: database ready, purged %d expired revoked tokens", count)


@app.get("/health")
def health_check():
    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
        database = "ok"
    except Exception as e:
        logger.warning("health: database check failed: %s", e)
        database = "unavailable"
    finally:
        db.close()
    return {
        "status": "ok" if database == "ok" else "degraded",
        "database": database,
        "environment": settings.ENVIRONMENT,
    }


app.include_router(user_router)
app.include_router(recommendation_router)
