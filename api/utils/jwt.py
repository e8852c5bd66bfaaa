from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from fastapi import HTTPException, status
from jose import JWTError
from jose.jwt import encode, decode

from api.config import settings
from api.schemas.auth_schemas import AuthTokenPayload
from api.utils.logger import configure_logging

ALGORITHM = "HS256"

logger = configure_logging()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its bcrypt hash."""
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        logger.warning("password check against malformed hash")
        return False


def get_password_hash(password: str) -> str:
    """Hash a password for storing."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def create_access_token(user_id: str, expires_minutes: Optional[int] = None) -> str:
    """Create a signed JWT whose subject is the user id."""
    minutes = expires_minutes if expires_minutes is not None else settings.access_token_expire_minutes
    payload = AuthTokenPayload(sub=user_id, exp=datetime.now(timezone.utc) + timedelta(minutes=minutes))
    return encode(payload.model_dump(), settings.secret_key, algorithm=ALGORITHM)


def verify_token(token: Optional[str]) -> AuthTokenPayload:
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing token")
    try:
        payload = decode(token, settings.secret_key, algorithms=[ALGORITHM])
        return AuthTokenPayload(**payload)
    except JWTError as e:
        logger.info("rejected token: %s", e)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
