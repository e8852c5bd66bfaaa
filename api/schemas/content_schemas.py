"""
Read-only content schemas: lessons, flashcard decks, daily words.
"""

from typing import Optional

from api.schemas.user_schemas import CamelModel


class LessonResponse(CamelModel):
    id: str
    title: str
    category: str
    level: str
    description: str
    content: str
    image_url: Optional[str] = None


class FlashcardResponse(CamelModel):
    id: str
    deck_id: str
    german: str
    english: str
    example: Optional[str] = None
    image_url: Optional[str] = None
    mastered: bool = False


class FlashcardDeckResponse(CamelModel):
    id: str
    title: str
    category: str
    cards: list[FlashcardResponse] = []


class DailyWordResponse(CamelModel):
    date: str
    german: str
    english: str
    example: str
