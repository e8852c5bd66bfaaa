from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from dotenv import load_dotenv
load_dotenv()


class Settings(BaseSettings):
    """Runtime settings, read from the environment (and .env)."""
    model_config = SettingsConfigDict(extra="ignore")

    database_url: str = "sqlite:///./lingua.db"
    secret_key: str = "change-me-in-production"
    access_token_expire_minutes: int = 30
    verification_code_ttl_minutes: int = 30
    reset_code_ttl_minutes: int = 15
    progress_cache_seconds: int = 120
    seed_on_startup: bool = True

    smtp_host: Optional[str] = None
    smtp_port: int = 587
    smtp_username: Optional[str] = None
    smtp_password: Optional[str] = None
    smtp_sender: str = "no-reply@lingua.local"

    log_level: str = "INFO"
    log_dir: str = "logs"


settings = Settings()

# sqlite connections are used from FastAPI's threadpool
_connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}
engine = create_engine(settings.database_url, connect_args=_connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def create_db():
    # Import so every table is registered on Base.metadata
    import api.models.models  # noqa: F401
    Base.metadata.create_all(bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
