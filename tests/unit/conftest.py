"""
Unit test fixtures. Fakes only; no real DB or network.
"""
import asyncio
from typing import Optional

import pytest

from sync_client.errors import LoadFailed, MutationFailed
from sync_client.identity import IdentityContext, IdentityUser
from sync_client.models import ProgressSnapshot


class FakeBackend:
    """
    In-memory stand-in for ProgressEndpoint.

    With hold_updates=True every update parks on a future the test resolves,
    so response order can be controlled.
    """

    def __init__(self, stored: Optional[dict] = None):
        self.stored: dict[str, dict] = stored or {}
        self.fetch_calls: list[str] = []
        self.update_calls: list[dict] = []
        self.fail_fetch = False
        self.fail_updates = False
        # Raised as is, for errors outside the endpoint contract
        self.fetch_error: Optional[Exception] = None
        self.update_error: Optional[Exception] = None
        self.hold_updates = False
        self.pending: list[asyncio.Future] = []

    async def fetch(self, user_id: str) -> ProgressSnapshot:
        self.fetch_calls.append(user_id)
        await asyncio.sleep(0)
        if self.fetch_error is not None:
            raise self.fetch_error
        if self.fail_fetch:
            raise LoadFailed("service unavailable", status_code=503)
        return ProgressSnapshot(user_id=user_id, **self.stored.get(user_id, {}))

    async def update(self, user_id: str, *, lesson_id=None, flashcard_id=None) -> ProgressSnapshot:
        self.update_calls.append({"user_id": user_id, "lesson_id": lesson_id, "flashcard_id": flashcard_id})
        if self.hold_updates:
            future = asyncio.get_running_loop().create_future()
            self.pending.append(future)
            return await future
        await asyncio.sleep(0)
        if self.update_error is not None:
            raise self.update_error
        if self.fail_updates:
            raise MutationFailed("progress update returned 500", status_code=500)
        row = self.stored.setdefault(user_id, {})
        if lesson_id is not None:
            row["last_lesson_id"] = lesson_id
        if flashcard_id is not None:
            row["last_flashcard_id"] = flashcard_id
        return ProgressSnapshot(user_id=user_id, **row)


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def identity():
    return IdentityContext()


@pytest.fixture
def alice():
    return IdentityUser(id="u-alice", username="alice", email="alice@example.com")


@pytest.fixture
def bob():
    return IdentityUser(id="u-bob", username="bob", email="bob@example.com")
