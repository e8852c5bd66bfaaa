"""
Integration test fixtures. Overrides get_db and the email sender for API tests.
"""
import pytest

from api.services.email_service import EmailSender


class RecordingMailer(EmailSender):
    """Captures outgoing mail instead of sending it."""

    def __init__(self):
        super().__init__()
        self.sent: list[dict] = []

    def send(self, to_email: str, subject: str, body: str) -> bool:
        self.sent.append({"to": to_email, "subject": subject, "body": body})
        return True

    def last_code(self) -> str:
        body = self.sent[-1]["body"]
        return next(tok.strip(".") for tok in body.split() if tok.strip(".").isdigit() and len(tok.strip(".")) == 6)


@pytest.fixture
def override_get_db(session_factory):
    def _get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    return _get_db


@pytest.fixture
def mailer():
    return RecordingMailer()


@pytest.fixture
def app_with_overrides(override_get_db, mailer):
    from api.api import app
    from api.config import get_db
    from api.services.email_service import get_email_sender
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_sender] = lambda: mailer
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def api_client(app_with_overrides):
    """FastAPI TestClient with in-memory DB override."""
    from fastapi.testclient import TestClient
    with TestClient(app_with_overrides) as client:
        yield client


@pytest.fixture
def seeded_client(api_client, seeded_db):
    """API client whose database holds the demo content."""
    return api_client


@pytest.fixture
def verified_user(db_session):
    """A verified user with password 'testpass123'."""
    from api.models.models import User
    from api.utils.jwt import get_password_hash
    user = User(
        id="user-1",
        username="tester",
        email="test@example.com",
        hashed_password=get_password_hash("testpass123"),
        email_verified=True,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user
