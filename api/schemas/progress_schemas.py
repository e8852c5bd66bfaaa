"""
User learning progress schemas (last lesson / last flashcard viewed).
"""

from typing import Optional

from api.schemas.user_schemas import CamelModel


class ProgressResponse(CamelModel):
    """GET /progress/{userId}. Nulls mean nothing viewed yet."""
    user_id: str
    last_lesson_id: Optional[str] = None
    last_flashcard_id: Optional[str] = None


class UpdateLastLearningRequest(CamelModel):
    """All fields optional at the schema level; the route answers 400 itself."""
    user_id: Optional[str] = None
    lesson_id: Optional[str] = None
    flashcard_id: Optional[str] = None  # "<deckId>-<cardId>"


class UpdateLastLearningResponse(CamelModel):
    success: bool
    last_lesson_id: Optional[str] = None
    last_flashcard_id: Optional[str] = None
