"""
API data models. Single import surface for DB entities.

DB entities (api.models.models):
- Accounts: User, EmailVerificationCode, PasswordResetCode
- Content: Lesson, FlashcardDeck, Flashcard, DailyWord
- Progress: UserProgress
- Bookkeeping: AppMigration
"""

from api.models.models import (
    User,
    EmailVerificationCode,
    PasswordResetCode,
    Lesson,
    FlashcardDeck,
    Flashcard,
    DailyWord,
    UserProgress,
    AppMigration,
)

__all__ = [
    "User",
    "EmailVerificationCode",
    "PasswordResetCode",
    "Lesson",
    "FlashcardDeck",
    "Flashcard",
    "DailyWord",
    "UserProgress",
    "AppMigration",
]
