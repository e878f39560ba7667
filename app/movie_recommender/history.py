import logging
from typing import Optional

from crud.history_crud import ANONYMOUS, HistoryEntry, HistoryStore
from movie_recommender.scenario import Scenario

logger = logging.getLogger(__name__)


class HistoryRecorder:
    """Best-effort writer for recommendation history.

    ``record`` is meant to be scheduled after the response (FastAPI
    BackgroundTasks); it never raises, failures only reach the log.
    """

    def __init__(self, store: HistoryStore):
        self.store = store

    def record(self, scenario: Scenario, movies_count: int, user_id: Optional[str] = None) -> Optional[int]:
        entry = HistoryEntry(
            user_id=user_id or ANONYMOUS,
            with_whom=scenario.with_whom,
            when_time=scenario.when_time,
            purpose=scenario.purpose,
            show_only=scenario.show_only,
            movies_count=movies_count,
        )
        try:
            entry_id = self.store.save_entry(entry)
        except Exception:
            logger.exception("history.save_failed user_id=%s", entry.user_id)
            return None
        logger.info("history.saved id=%s user_id=%s count=%d", entry_id, entry.user_id, movies_count)
        return entry_id
