from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ProgressSnapshot(BaseModel):
    """A user's progress as seen by the client. Nulls mean nothing viewed yet."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore", frozen=True)

    user_id: Optional[str] = None
    last_lesson_id: Optional[str] = None
    last_flashcard_id: Optional[str] = None
