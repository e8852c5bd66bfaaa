"""
Read-only content endpoints: lessons, flashcard decks, daily words.
"""

import random

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from sqlalchemy.orm import Session

from api.config import get_db
from api.models.models import DailyWord, Flashcard, FlashcardDeck, Lesson
from api.schemas.content_schemas import (
    DailyWordResponse,
    FlashcardDeckResponse,
    FlashcardResponse,
    LessonResponse,
)
from api.utils.caching import (
    DAILY_WORDS_MAX_AGE,
    FLASHCARDS_MAX_AGE,
    LESSONS_MAX_AGE,
    cached_json,
    uncached_json,
)
from api.utils.common import lesson_sort_key

content_routes = APIRouter()


def _lesson(lesson: Lesson) -> LessonResponse:
    return LessonResponse(
        id=lesson.id,
        title=lesson.title,
        category=lesson.category,
        level=lesson.level,
        description=lesson.description,
        content=lesson.content,
        image_url=lesson.image_url,
    )


def _card(card: Flashcard) -> FlashcardResponse:
    return FlashcardResponse(
        id=card.id,
        deck_id=card.deck_id,
        german=card.german,
        english=card.english,
        example=card.example,
        image_url=card.image_url,
        mastered=bool(card.mastered),
    )


def _deck(deck: FlashcardDeck) -> FlashcardDeckResponse:
    return FlashcardDeckResponse(
        id=deck.id,
        title=deck.title,
        category=deck.category,
        cards=[_card(c) for c in deck.cards],
    )


def _word(word: DailyWord) -> DailyWordResponse:
    return DailyWordResponse(date=word.date, german=word.german, english=word.english, example=word.example)


@content_routes.get("/lessons", response_model=list[LessonResponse])
def list_lessons(request: Request, db: Session = Depends(get_db)) -> Response:
    """All lessons, ordered by numeric id."""
    lessons = sorted(db.query(Lesson).all(), key=lambda l: lesson_sort_key(l.id))
    return cached_json(request, [_lesson(l) for l in lessons], max_age=LESSONS_MAX_AGE)


@content_routes.get("/lessons/{lesson_id}", response_model=LessonResponse)
def get_lesson(lesson_id: str, request: Request, db: Session = Depends(get_db)) -> Response:
    lesson = db.get(Lesson, lesson_id)
    if lesson is None:
        raise HTTPException(status_code=404, detail="Not Found")
    return cached_json(request, _lesson(lesson), max_age=LESSONS_MAX_AGE)


@content_routes.get("/flashcards", response_model=list[FlashcardDeckResponse])
def list_decks(request: Request, db: Session = Depends(get_db)) -> Response:
    """All decks ordered by id, each with its cards ordered by card id."""
    decks = db.query(FlashcardDeck).order_by(FlashcardDeck.id.asc()).all()
    return cached_json(request, [_deck(d) for d in decks], max_age=FLASHCARDS_MAX_AGE)


@content_routes.get("/flashcards/{deck_id}", response_model=FlashcardDeckResponse)
def get_deck(deck_id: str, request: Request, db: Session = Depends(get_db)) -> Response:
    deck = db.get(FlashcardDeck, deck_id)
    if deck is None:
        raise HTTPException(status_code=404, detail="Not Found")
    return cached_json(request, _deck(deck), max_age=FLASHCARDS_MAX_AGE)


@content_routes.get("/daily-words", response_model=list[DailyWordResponse])
def list_daily_words(request: Request, db: Session = Depends(get_db)) -> Response:
    words = db.query(DailyWord).order_by(DailyWord.date.asc()).all()
    return cached_json(request, [_word(w) for w in words], max_age=DAILY_WORDS_MAX_AGE)


@content_routes.get("/daily-word", response_model=DailyWordResponse)
def random_daily_word(db: Session = Depends(get_db)) -> Response:
    """One random daily word; never cached since every call may differ."""
    words = db.query(DailyWord).all()
    if not words:
        raise HTTPException(status_code=404, detail="Not Found")
    return uncached_json(_word(random.choice(words)))
