"""Content seeding and the user_progress migration."""
import json
import sqlite3

import pytest

from api.bootstrap import DATA_DIR, SEED_KEY, seed_content
from api.models.models import AppMigration, DailyWord, Flashcard, FlashcardDeck, Lesson
from migrations.add_user_progress_table import run_migration


def _count(name: str) -> int:
    with open(DATA_DIR / name, encoding="utf-8") as fh:
        return len(json.load(fh))


@pytest.mark.integration
class TestSeedContent:
    def test_seeds_bundled_content(self, db_session):
        assert seed_content(db_session) is True

        assert db_session.query(Lesson).count() == _count("lessons.json")
        assert db_session.query(FlashcardDeck).count() == _count("flashcards.json")
        assert db_session.query(DailyWord).count() == _count("daily_words.json")
        marker = db_session.get(AppMigration, SEED_KEY)
        assert marker is not None
        assert marker.value.endswith("Z")

    def test_second_run_is_a_no_op(self, db_session):
        seed_content(db_session)
        cards = db_session.query(Flashcard).count()
        assert seed_content(db_session) is False
        assert db_session.query(Flashcard).count() == cards

    def test_deck_cards_are_ordered(self, seeded_db):
        deck = seeded_db.get(FlashcardDeck, "3")
        assert [c.id for c in deck.cards] == ["0007", "0008", "0009"]

    def test_existing_rows_are_not_overwritten(self, db_session):
        db_session.add(Lesson(id="1", title="Custom", category="basics", level="beginner",
                              description="d", content="c"))
        db_session.commit()
        seed_content(db_session)
        assert db_session.get(Lesson, "1").title == "Custom"


@pytest.mark.integration
class TestUserProgressMigration:
    def test_creates_table_once(self, tmp_path):
        db_path = str(tmp_path / "old.db")
        sqlite3.connect(db_path).close()

        assert run_migration(db_path) is True
        assert run_migration(db_path) is False

        conn = sqlite3.connect(db_path)
        try:
            columns = {row[1] for row in conn.execute("PRAGMA table_info(user_progress)")}
        finally:
            conn.close()
        assert columns == {"user_id", "last_lesson_id", "last_flashcard_id", "updated_at"}
