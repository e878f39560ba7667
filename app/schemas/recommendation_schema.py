from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from . import ORMModel


class ScenarioRequest(ORMModel):
    """Questionnaire answer. Accepts camelCase or snake_case keys.

    Values are left untyped: any JSON value goes to the scenario validator,
    whose error body lists the accepted values.
    """
    with_whom: Optional[Any] = Field(None, alias="withWhom", description="Who you are watching with")
    when_time: Optional[Any] = Field(None, alias="whenTime", description="When you are watching")
    purpose: Optional[Any] = Field(None, description="Why you are watching")
    show_only: Optional[Any] = Field(None, alias="showOnly", description="Optional: cult, obscure or arthouse")

    def as_raw(self) -> dict:
        return {
            "withWhom": self.with_whom,
            "whenTime": self.when_time,
            "purpose": self.purpose,
            "showOnly": self.show_only,
        }


class HistoryEntryOut(ORMModel):
    id: int
    with_whom: str = Field(..., serialization_alias="withWhom")
    when_time: str = Field(..., serialization_alias="whenTime")
    purpose: str
    show_only: Optional[str] = Field(None, serialization_alias="showOnly")
    movies_count: int = Field(..., serialization_alias="moviesCount")
    created_at: datetime = Field(..., serialization_alias="createdAt")


class WatchedCreate(ORMModel):
    movie_id: int = Field(..., alias="movieId", ge=1)
    title: Optional[str] = Field(None, max_length=255)
    rating: Optional[float] = Field(None, ge=0, le=10)


class WatchedOut(ORMModel):
    id: int
    movie_id: int = Field(..., serialization_alias="movieId")
    title: Optional[str] = None
    rating: Optional[float] = None
    watched_at: datetime = Field(..., serialization_alias="watchedAt")
