from sqlalchemy import Column, Integer, String, Float, DateTime, UniqueConstraint
from database import Base
from datetime import datetime

class RecommendationHistory(Base):
    __tablename__ = "recommendation_history"
    id = Column(Integer, primary_key=True, index=True)
    # user id as text so anonymous requests share the "anonymous" key
    user_id = Column(String(64), nullable=False, index=True, default="anonymous")
    with_whom = Column(String(100), nullable=False)
    when_time = Column(String(100), nullable=False)
    purpose = Column(String(100), nullable=False)
    show_only = Column(String(50), nullable=True)
    movies_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)


class WatchedMovie(Base):
    __tablename__ = "watched_movies"
    __table_args__ = (UniqueConstraint("user_id", "movie_id", name="uq_watched_user_movie"),)
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, nullable=False, index=True)
    movie_id = Column(Integer, nullable=False)
    title = Column(String(255), nullable=True)
    rating = Column(Float, nullable=True)
    watched_at = Column(DateTime, default=datetime.utcnow, nullable=False)
