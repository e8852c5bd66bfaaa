"""
Learning progress endpoints: read and update a user's last lesson / flashcard.
"""

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from api.config import get_db, settings
from api.schemas.progress_schemas import (
    ProgressResponse,
    UpdateLastLearningRequest,
    UpdateLastLearningResponse,
)
from api.services.progress_store import ProgressStore
from api.utils.logger import configure_logging

progress_routes = APIRouter()
logger = configure_logging()


@progress_routes.post("/progress/update-last-learning", response_model=UpdateLastLearningResponse)
def update_last_learning(
    body: UpdateLastLearningRequest,
    db: Session = Depends(get_db),
) -> UpdateLastLearningResponse:
    """
    Record the last lesson and/or flashcard a user viewed.
    Only the fields present in the body are written; the other is left as is.
    """
    if not body.user_id:
        raise HTTPException(status_code=400, detail="userId is required")
    if not body.lesson_id and not body.flashcard_id:
        raise HTTPException(status_code=400, detail="lessonId or flashcardId is required")

    try:
        record = ProgressStore(db).upsert(
            body.user_id,
            lesson_id=body.lesson_id or None,
            flashcard_id=body.flashcard_id or None,
        )
    except SQLAlchemyError:
        logger.exception("progress update failed user_id=%s", body.user_id)
        raise HTTPException(status_code=500, detail="Failed to update progress")

    return UpdateLastLearningResponse(
        success=True,
        last_lesson_id=record.last_lesson_id,
        last_flashcard_id=record.last_flashcard_id,
    )


@progress_routes.get("/progress/{user_id}", response_model=ProgressResponse)
def get_progress(user_id: str, response: Response, db: Session = Depends(get_db)) -> ProgressResponse:
    record = ProgressStore(db).get(user_id)
    response.headers["Cache-Control"] = f"private, max-age={settings.progress_cache_seconds}"
    return ProgressResponse(
        user_id=record.user_id,
        last_lesson_id=record.last_lesson_id,
        last_flashcard_id=record.last_flashcard_id,
    )
