"""ProgressStore against an in-memory SQLite database."""
import pytest

from api.models.models import UserProgress
from api.services.progress_store import ProgressRecord, ProgressStore


@pytest.mark.integration
class TestProgressStore:
    def test_get_unknown_user_is_empty(self, db_session):
        assert ProgressStore(db_session).get("nobody") == ProgressRecord(user_id="nobody")

    def test_upsert_creates_record(self, db_session):
        record = ProgressStore(db_session).upsert("u1", lesson_id="2")
        assert record.last_lesson_id == "2"
        assert record.last_flashcard_id is None
        assert db_session.query(UserProgress).count() == 1

    def test_lesson_then_flashcard_keeps_both(self, db_session):
        store = ProgressStore(db_session)
        store.upsert("u1", lesson_id="2")
        record = store.upsert("u1", flashcard_id="3-0007")
        assert record.last_lesson_id == "2"
        assert record.last_flashcard_id == "3-0007"

    def test_flashcard_then_lesson_keeps_both(self, db_session):
        store = ProgressStore(db_session)
        store.upsert("u1", flashcard_id="3-0007")
        store.upsert("u1", lesson_id="4")
        record = store.get("u1")
        assert record.last_flashcard_id == "3-0007"
        assert record.last_lesson_id == "4"

    def test_repeated_upserts_keep_one_row(self, db_session):
        store = ProgressStore(db_session)
        for lesson_id in ("1", "2", "3"):
            store.upsert("u1", lesson_id=lesson_id)
        assert db_session.query(UserProgress).filter(UserProgress.user_id == "u1").count() == 1
        assert store.get("u1").last_lesson_id == "3"

    def test_users_are_independent(self, db_session):
        store = ProgressStore(db_session)
        store.upsert("u1", lesson_id="1")
        store.upsert("u2", lesson_id="9")
        assert store.get("u1").last_lesson_id == "1"
        assert store.get("u2").last_lesson_id == "9"

    def test_upsert_needs_a_field(self, db_session):
        with pytest.raises(ValueError):
            ProgressStore(db_session).upsert("u1")

    def test_updated_at_moves_forward(self, db_session):
        store = ProgressStore(db_session)
        store.upsert("u1", lesson_id="1")
        first = db_session.get(UserProgress, "u1").updated_at
        store.upsert("u1", lesson_id="2")
        db_session.expire_all()
        assert db_session.get(UserProgress, "u1").updated_at >= first

    def test_separate_sessions_see_each_others_fields(self, session_factory):
        a, b = session_factory(), session_factory()
        try:
            ProgressStore(a).upsert("u1", lesson_id="5")
            ProgressStore(b).upsert("u1", flashcard_id="1-0002")
            record = ProgressStore(a).get("u1")
            assert record.last_lesson_id == "5"
            assert record.last_flashcard_id == "1-0002"
        finally:
            a.close()
            b.close()
