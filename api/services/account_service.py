"""
Account flows: registration, email verification and password recovery.

Codes are 6-digit, single-use and expire; issuing a new code replaces the
user's previous ones.
"""

from datetime import timedelta
from uuid import uuid4

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from api.config import settings
from api.models.models import User, EmailVerificationCode, PasswordResetCode
from api.schemas.auth_schemas import MIN_PASSWORD_LENGTH
from api.utils.auth import create_user, get_user_by_email, get_user_by_id, get_user_by_username
from api.utils.common import generate_code, utcnow
from api.utils.jwt import get_password_hash
from api.utils.logger import configure_logging

logger = configure_logging()


def check_password_rules(password: str) -> None:
    if len(password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
        )


def register_user(username: str, email: str, password: str, db: Session) -> tuple[User, str]:
    """Create an unverified user and its first verification code. Returns (user, code)."""
    check_password_rules(password)
    if get_user_by_email(email, db):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")
    if get_user_by_username(username, db):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Username already taken")

    user = create_user(username, email, password, db)
    code = _issue_code(EmailVerificationCode, user.id, settings.verification_code_ttl_minutes, db)
    db.commit()
    db.refresh(user)
    logger.info("user registered user_id=%s", user.id)
    return user, code


def verify_email(user_id: str, code: str, db: Session) -> User:
    user = get_user_by_id(user_id, db)
    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    if user.email_verified:
        return user

    _consume_code(EmailVerificationCode, user.id, code, db)
    user.email_verified = True
    user.verified_at = utcnow()
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("email verified user_id=%s", user.id)
    return user


def request_password_reset(email: str, db: Session) -> tuple[User, str] | None:
    """Issue a reset code. Returns None for unknown emails; the caller must not reveal that."""
    user = get_user_by_email(email, db)
    if user is None:
        logger.info("password reset requested for unknown email")
        return None
    code = _issue_code(PasswordResetCode, user.id, settings.reset_code_ttl_minutes, db)
    db.commit()
    return user, code


def reset_password(email: str, code: str, new_password: str, db: Session) -> User:
    check_password_rules(new_password)
    user = get_user_by_email(email, db)
    if user is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid or expired code")

    _consume_code(PasswordResetCode, user.id, code, db)
    user.hashed_password = get_password_hash(new_password)
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("password reset user_id=%s", user.id)
    return user


def _issue_code(model, user_id: str, ttl_minutes: int, db: Session) -> str:
    db.query(model).filter(model.user_id == user_id).delete(synchronize_session=False)
    code = generate_code()
    db.add(
        model(
            id=str(uuid4()),
            user_id=user_id,
            token=uuid4().hex,
            code=code,
            expires_at=utcnow() + timedelta(minutes=ttl_minutes),
        )
    )
    return code


def _consume_code(model, user_id: str, code: str, db: Session) -> None:
    row = (
        db.query(model)
        .filter(model.user_id == user_id, model.code == code.strip())
        .first()
    )
    if row is None or row.expires_at < utcnow():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid or expired code")
    db.query(model).filter(model.user_id == user_id).delete(synchronize_session=False)
