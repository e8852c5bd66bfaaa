from typing import Optional
from uuid import uuid4

from fastapi import HTTPException, Cookie, Response, status, Depends
from sqlalchemy.orm import Session

from api.config import get_db, settings
from api.models.models import User
from api.utils.jwt import verify_token, get_password_hash, create_access_token, verify_password

AUTH_COOKIE = "access_token"


def get_current_user(access_token: Optional[str] = Cookie(None), db: Session = Depends(get_db)) -> User:
    if not access_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing token",
        )

    payload = verify_token(access_token)
    user = get_user_by_id(payload.sub, db)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found"
        )
    return user


def set_auth_cookie(response: Response, user: User) -> None:
    token = create_access_token(user.id)
    response.set_cookie(
        key=AUTH_COOKIE,
        value=token,
        httponly=True,
        secure=False,
        samesite="lax",
        max_age=settings.access_token_expire_minutes * 60,
    )


def clear_auth_cookie(response: Response) -> None:
    response.delete_cookie(
        key=AUTH_COOKIE,
        httponly=True,
        secure=False,
        samesite="lax"
    )


def normalize_email(email: str) -> str:
    return email.strip().lower()


def get_user_by_email(email: str, db: Session) -> User | None:
    return db.query(User).filter(User.email == normalize_email(email)).first()


def get_user_by_username(username: str, db: Session) -> User | None:
    return db.query(User).filter(User.username == username.strip()).first()


def get_user_by_id(user_id: str, db: Session) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def create_user(username: str, email: str, password: str, db: Session) -> User:
    """Create an unverified user. Caller commits."""
    user = User(
        id=str(uuid4()),
        username=username.strip(),
        email=normalize_email(email),
        hashed_password=get_password_hash(password),
        email_verified=False,
    )
    db.add(user)
    db.flush()
    return user


def authenticate_user(email: str, password: str, db: Session) -> User | None:
    user = get_user_by_email(email, db)
    if not user or not verify_password(password, user.hashed_password):
        return None
    return user
