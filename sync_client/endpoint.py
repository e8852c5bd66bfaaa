"""
HTTP side of progress sync: GET /progress/{userId} and
POST /progress/update-last-learning.

Transport errors and non-2xx answers are turned into LoadFailed /
MutationFailed so the engine only has to handle its own error types.
"""

import logging
from typing import Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from sync_client.config import SyncClientConfig
from sync_client.errors import LoadFailed, MutationFailed
from sync_client.models import ProgressSnapshot

logger = logging.getLogger(__name__)


class ProgressEndpoint:
    def __init__(self, config: SyncClientConfig, client: Optional[httpx.AsyncClient] = None):
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(base_url=config.api_base, timeout=config.timeout_seconds)

    async def fetch(self, user_id: str) -> ProgressSnapshot:
        try:
            response = await self._client.get(f"/progress/{quote(user_id, safe='')}")
        except httpx.HTTPError as exc:
            raise LoadFailed(f"progress fetch failed: {exc}") from exc
        if response.status_code != 200:
            raise LoadFailed(f"progress fetch returned {response.status_code}", status_code=response.status_code)
        try:
            snapshot = ProgressSnapshot.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise LoadFailed(f"progress fetch returned an unreadable body: {exc}") from exc
        # The path is authoritative for whose progress this is
        return snapshot.model_copy(update={"user_id": user_id})

    async def update(
        self,
        user_id: str,
        *,
        lesson_id: Optional[str] = None,
        flashcard_id: Optional[str] = None,
    ) -> ProgressSnapshot:
        payload = {"userId": user_id}
        if lesson_id is not None:
            payload["lessonId"] = lesson_id
        if flashcard_id is not None:
            payload["flashcardId"] = flashcard_id
        try:
            response = await self._client.post("/progress/update-last-learning", json=payload)
        except httpx.HTTPError as exc:
            raise MutationFailed(f"progress update failed: {exc}") from exc
        if not response.is_success:
            raise MutationFailed(f"progress update returned {response.status_code}", status_code=response.status_code)
        try:
            body = response.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            body = {}
        return ProgressSnapshot(
            user_id=user_id,
            last_lesson_id=body.get("lastLessonId"),
            last_flashcard_id=body.get("lastFlashcardId"),
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
