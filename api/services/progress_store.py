"""
Durable per-user progress: last lesson viewed and last flashcard viewed.

One row per user id. `upsert` writes only the fields it is given, so a lesson
update never clears the flashcard field and vice versa. On SQLite and
PostgreSQL the write is a single INSERT .. ON CONFLICT DO UPDATE statement,
which keeps concurrent writers for the same user from losing either field.
"""

from typing import Optional

from pydantic import BaseModel
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from api.models.models import UserProgress
from api.utils.common import utcnow
from api.utils.logger import configure_logging

logger = configure_logging()

_UPSERT_DIALECTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


class ProgressRecord(BaseModel):
    user_id: str
    last_lesson_id: Optional[str] = None
    last_flashcard_id: Optional[str] = None


class ProgressStore:
    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: str) -> ProgressRecord:
        """Current progress; both fields None when the user has no record."""
        # Always re-read: upserts from other sessions bypass this identity map
        row = self.db.get(UserProgress, user_id, populate_existing=True)
        if row is None:
            return ProgressRecord(user_id=user_id)
        return ProgressRecord(
            user_id=user_id,
            last_lesson_id=row.last_lesson_id,
            last_flashcard_id=row.last_flashcard_id,
        )

    def upsert(
        self,
        user_id: str,
        lesson_id: Optional[str] = None,
        flashcard_id: Optional[str] = None,
    ) -> ProgressRecord:
        """Insert-or-update the given fields only. Commits."""
        values: dict = {}
        if lesson_id is not None:
            values["last_lesson_id"] = lesson_id
        if flashcard_id is not None:
            values["last_flashcard_id"] = flashcard_id
        if not values:
            raise ValueError("upsert needs lesson_id or flashcard_id")
        values["updated_at"] = utcnow()

        dialect = self.db.get_bind().dialect.name
        insert = _UPSERT_DIALECTS.get(dialect)
        try:
            if insert is not None:
                stmt = insert(UserProgress).values(user_id=user_id, **values)
                stmt = stmt.on_conflict_do_update(index_elements=[UserProgress.user_id], set_=values)
                self.db.execute(stmt)
            else:
                self._merge(user_id, values)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.debug("progress upsert user_id=%s fields=%s", user_id, sorted(values))
        return self.get(user_id)

    def _merge(self, user_id: str, values: dict) -> None:
        row = self.db.get(UserProgress, user_id, with_for_update=True)
        if row is None:
            row = UserProgress(user_id=user_id)
        for key, value in values.items():
            setattr(row, key, value)
        self.db.add(row)
