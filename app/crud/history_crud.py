from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy import distinct, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from database import SessionLocal
from model.history import RecommendationHistory, WatchedMovie

ANONYMOUS = "anonymous"


@dataclass
class HistoryEntry:
    with_whom: str
    when_time: str
    purpose: str
    movies_count: int
    show_only: Optional[str] = None
    user_id: str = ANONYMOUS
    created_at: datetime = field(default_factory=datetime.utcnow)


class HistoryStore:
    """Recommendation history and watched list on top of a session factory.

    The factory (a ``sessionmaker``) is handed in by whoever owns the database
    lifecycle; every call opens and closes its own session.
    """

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    # ---------------- HISTORY ----------------
    def save_entry(self, entry: HistoryEntry) -> int:
        with self.session_factory() as db:
            row = RecommendationHistory(
                user_id=entry.user_id or ANONYMOUS,
                with_whom=entry.with_whom,
                when_time=entry.when_time,
                purpose=entry.purpose,
                show_only=entry.show_only,
                movies_count=entry.movies_count,
                created_at=entry.created_at,
            )
            db.add(row)
            db.commit()
            db.refresh(row)
            return row.id

    def get_history(self, user_id: str = ANONYMOUS, limit: int = 10) -> List[RecommendationHistory]:
        with self.session_factory() as db:
            return (
                db.query(RecommendationHistory)
                .filter(RecommendationHistory.user_id == user_id)
                .order_by(RecommendationHistory.created_at.desc(), RecommendationHistory.id.desc())
                .limit(limit)
                .all()
            )

    def get_stats(self, period_days: int = 30) -> Dict[str, Any]:
        since = datetime.utcnow() - timedelta(days=period_days)
        with self.session_factory() as db:
            total_requests, unique_users, total_movies, avg_movies = db.query(
                func.count(RecommendationHistory.id),
                func.count(distinct(RecommendationHistory.user_id)),
                func.sum(RecommendationHistory.movies_count),
                func.avg(RecommendationHistory.movies_count),
            ).one()

            recent_requests, recent_users = (
                db.query(
                    func.count(RecommendationHistory.id),
                    func.count(distinct(RecommendationHistory.user_id)),
                )
                .filter(RecommendationHistory.created_at >= since)
                .one()
            )

            popular = (
                db.query(RecommendationHistory.with_whom, func.count(RecommendationHistory.id).label("cnt"))
                .group_by(RecommendationHistory.with_whom)
                .order_by(func.count(RecommendationHistory.id).desc())
                .first()
            )

        return {
            "total_requests": int(total_requests or 0),
            "unique_users": int(unique_users or 0),
            "total_movies_recommended": int(total_movies or 0),
            "avg_movies_per_request": round(float(avg_movies or 0), 1),
            "recent_requests": int(recent_requests or 0),
            "recent_users": int(recent_users or 0),
            "period_days": period_days,
            "most_popular_scenario": popular[0] if popular else None,
            "last_updated": datetime.utcnow().isoformat(),
        }

    def count_for_user(self, user_id: str) -> int:
        with self.session_factory() as db:
            return (
                db.query(func.count(RecommendationHistory.id))
                .filter(RecommendationHistory.user_id == user_id)
                .scalar()
            ) or 0

    # ---------------- WATCHED ----------------
    def mark_watched(self, user_id: int, movie_id: int, title: Optional[str] = None,
                     rating: Optional[float] = None) -> WatchedMovie:
        """Record that a user watched a movie; marking twice returns the first record."""
        with self.session_factory() as db:
            existing = self._find_watched(db, user_id, movie_id)
            if existing:
                return existing
            row = WatchedMovie(user_id=user_id, movie_id=movie_id, title=title, rating=rating)
            db.add(row)
            try:
                db.commit()
            except IntegrityError:
                # a concurrent request inserted the same pair first
                db.rollback()
                return self._find_watched(db, user_id, movie_id)
            db.refresh(row)
            return row

    def list_watched(self, user_id: int, limit: int = 50) -> List[WatchedMovie]:
        with self.session_factory() as db:
            return (
                db.query(WatchedMovie)
                .filter(WatchedMovie.user_id == user_id)
                .order_by(WatchedMovie.watched_at.desc(), WatchedMovie.id.desc())
                .limit(limit)
                .all()
            )

    def count_watched(self, user_id: int) -> int:
        with self.session_factory() as db:
            return (
                db.query(func.count(WatchedMovie.id)).filter(WatchedMovie.user_id == user_id).scalar()
            ) or 0

    @staticmethod
    def _find_watched(db: Session, user_id: int, movie_id: int) -> Optional[WatchedMovie]:
        return (
            db.query(WatchedMovie)
            .filter(WatchedMovie.user_id == user_id, WatchedMovie.movie_id == movie_id)
            .first()
        )


def get_history_store() -> HistoryStore:
    return HistoryStore(SessionLocal)
