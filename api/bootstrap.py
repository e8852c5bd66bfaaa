"""
Seed the content tables (lessons, flashcard decks, daily words) from the
bundled JSON files. Runs once per database, guarded by a key in
app_migrations; existing rows are never overwritten.
"""

import json
from pathlib import Path

from sqlalchemy.orm import Session

from api.models.models import AppMigration, DailyWord, Flashcard, FlashcardDeck, Lesson
from api.utils.common import iso_format, utcnow
from api.utils.logger import configure_logging, log_request

logger = configure_logging()

DATA_DIR = Path(__file__).parent / "data"
SEED_KEY = "seeded_v1"


def _load(name: str, data_dir: Path) -> list[dict]:
    with open(data_dir / name, encoding="utf-8") as fh:
        return json.load(fh)


def _add_missing(db: Session, model, key: str, row: dict) -> None:
    if db.get(model, key) is None:
        db.add(model(**row))


def seed_content(db: Session, data_dir: Path = DATA_DIR) -> bool:
    """Insert demo content once. Returns True when this call did the seeding."""
    if db.get(AppMigration, SEED_KEY) is not None:
        return False

    with log_request(logger, "seed content"):
        for lesson in _load("lessons.json", data_dir):
            _add_missing(db, Lesson, lesson["id"], dict(
                id=lesson["id"],
                title=lesson["title"],
                category=lesson["category"],
                level=lesson["level"],
                description=lesson["description"],
                content=lesson["content"],
                image_url=lesson.get("imageUrl"),
            ))

        for deck in _load("flashcards.json", data_dir):
            _add_missing(db, FlashcardDeck, deck["id"], dict(
                id=deck["id"], title=deck["title"], category=deck["category"],
            ))
            for card in deck.get("cards", []):
                _add_missing(db, Flashcard, card["id"], dict(
                    id=card["id"],
                    deck_id=deck["id"],
                    german=card["german"],
                    english=card["english"],
                    example=card.get("example"),
                    image_url=card.get("imageUrl"),
                    mastered=bool(card.get("mastered", False)),
                ))

        for word in _load("daily_words.json", data_dir):
            _add_missing(db, DailyWord, word["date"], dict(
                date=word["date"],
                german=word["german"],
                english=word["english"],
                example=word["example"],
            ))

        db.merge(AppMigration(key=SEED_KEY, value=iso_format(utcnow())))
        db.commit()
    return True
