"""
Pytest configuration and shared fixtures for the test suite.
Points the app at an in-memory database before anything imports api.config,
and provides DB fixtures for unit and integration tests.
"""
import os
import sys
import tempfile
from pathlib import Path

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Settings are read at import time; never touch a real database from tests.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_ON_STARTUP"] = "false"
os.environ.setdefault("LOG_DIR", str(Path(tempfile.gettempdir()) / "lingua-test-logs"))

# Add project root to Python path for imports
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


# ----- In-memory DB (for tests that need DB without touching real DB) -----
@pytest.fixture
def in_memory_engine():
    """In-memory SQLite engine shared across threads (TestClient runs handlers in a threadpool)."""
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture
def session_factory(in_memory_engine):
    from api.config import Base
    import api.models.models  # noqa: F401
    Base.metadata.create_all(in_memory_engine)
    return sessionmaker(autocommit=False, autoflush=False, bind=in_memory_engine)


@pytest.fixture
def db_session(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def seeded_db(db_session):
    """db_session with the bundled demo content loaded."""
    from api.bootstrap import seed_content
    seed_content(db_session)
    return db_session
