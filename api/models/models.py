from api.config import Base
from api.utils.common import utcnow
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Text, Boolean
from sqlalchemy.orm import relationship


class User(Base):
    __tablename__ = "users"
    id = Column(String, primary_key=True, index=True)  # uuid
    username = Column(String, unique=True, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    email_verified = Column(Boolean, default=False, nullable=False)
    verified_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    verification_codes = relationship(
        "EmailVerificationCode", backref="user", cascade="all, delete-orphan"
    )
    reset_codes = relationship("PasswordResetCode", backref="user", cascade="all, delete-orphan")


class EmailVerificationCode(Base):
    __tablename__ = "email_verification_tokens"
    id = Column(String, primary_key=True, index=True)  # uuid
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    token = Column(String, unique=True, nullable=False)
    code = Column(String, nullable=False)  # 6 digits
    expires_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)


class PasswordResetCode(Base):
    __tablename__ = "password_reset_tokens"
    id = Column(String, primary_key=True, index=True)  # uuid
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    token = Column(String, unique=True, nullable=False)
    code = Column(String, nullable=False)  # 6 digits
    expires_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)


class Lesson(Base):
    __tablename__ = "lessons"
    id = Column(String, primary_key=True, index=True)
    title = Column(String, nullable=False)
    category = Column(String, nullable=False)
    level = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    content = Column(Text, nullable=False)  # markdown
    image_url = Column(String, nullable=True)


class FlashcardDeck(Base):
    __tablename__ = "flashcard_decks"
    id = Column(String, primary_key=True, index=True)
    title = Column(String, nullable=False)
    category = Column(String, nullable=False)

    cards = relationship(
        "Flashcard",
        backref="deck",
        cascade="all, delete-orphan",
        order_by="Flashcard.id",
    )


class Flashcard(Base):
    __tablename__ = "flashcards"
    id = Column(String, primary_key=True, index=True)
    deck_id = Column(String, ForeignKey("flashcard_decks.id"), index=True, nullable=False)
    german = Column(String, nullable=False)
    english = Column(String, nullable=False)
    example = Column(Text, nullable=True)
    image_url = Column(String, nullable=True)
    mastered = Column(Boolean, default=False, nullable=False)


class DailyWord(Base):
    __tablename__ = "daily_words"
    date = Column(String, primary_key=True)  # YYYY-MM-DD
    german = Column(String, nullable=False)
    english = Column(String, nullable=False)
    example = Column(Text, nullable=False)


class UserProgress(Base):
    __tablename__ = "user_progress"
    # Opaque identity key; no FK so progress survives identity-provider changes.
    user_id = Column(String, primary_key=True, index=True)
    last_lesson_id = Column(String, nullable=True)
    last_flashcard_id = Column(String, nullable=True)  # "<deckId>-<cardId>"
    updated_at = Column(DateTime, default=utcnow, nullable=False)


class AppMigration(Base):
    __tablename__ = "app_migrations"
    key = Column(String, primary_key=True)
    value = Column(String, nullable=True)
