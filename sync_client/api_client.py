"""
Thin async clients for the account and content endpoints.

AuthApi keeps the IdentityContext in step with the server session: a
successful login or email verification signs the user in, logout signs out.
"""

import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from sync_client.errors import ApiError
from sync_client.identity import IdentityContext, IdentityUser

logger = logging.getLogger(__name__)


async def _request(client: httpx.AsyncClient, method: str, url: str, **kwargs) -> Any:
    try:
        response = await client.request(method, url, **kwargs)
    except httpx.HTTPError as exc:
        raise ApiError(f"{method} {url} failed: {exc}") from exc
    try:
        data = response.json()
    except ValueError:
        data = None
    if not response.is_success:
        detail = data.get("detail") if isinstance(data, dict) else None
        raise ApiError(str(detail or f"{method} {url} returned {response.status_code}"), response.status_code)
    return data


def _field(data: Any, key: str, url: str) -> Any:
    """Pull `key` out of a JSON object body; ApiError when the body is not one."""
    if not isinstance(data, dict) or data.get(key) is None:
        raise ApiError(f"{url} returned no {key!r} in its body")
    return data[key]


def _user(data: Any, url: str) -> IdentityUser:
    try:
        return IdentityUser.model_validate(_field(data, "user", url))
    except ValidationError as exc:
        raise ApiError(f"{url} returned an unreadable user: {exc}") from exc


class AuthApi:
    def __init__(self, client: httpx.AsyncClient, identity: IdentityContext):
        self._client = client
        self.identity = identity

    async def register(self, username: str, email: str, password: str) -> str:
        """Returns the new user id; the user must verify their email before logging in."""
        data = await _request(
            self._client, "POST", "/auth/register",
            json={"username": username, "email": email, "password": password},
        )
        return _field(data, "userId", "/auth/register")

    async def verify_email(self, user_id: str, code: str) -> IdentityUser:
        data = await _request(self._client, "POST", "/auth/verify-email", json={"userId": user_id, "code": code})
        user = _user(data, "/auth/verify-email")
        self.identity.login(user)
        return user

    async def login(self, email: str, password: str) -> IdentityUser:
        data = await _request(self._client, "POST", "/auth/login", json={"email": email, "password": password})
        user = _user(data, "/auth/login")
        self.identity.login(user)
        return user

    async def logout(self) -> None:
        # Local sign-out happens even if the server call fails.
        self.identity.logout()
        try:
            await _request(self._client, "POST", "/auth/logout")
        except ApiError as exc:
            logger.warning("server logout failed: %s", exc)

    async def forgot_password(self, email: str) -> None:
        await _request(self._client, "POST", "/auth/forgot-password", json={"email": email})

    async def reset_password(self, email: str, code: str, new_password: str) -> None:
        await _request(
            self._client, "POST", "/auth/reset-password",
            json={"email": email, "code": code, "newPassword": new_password},
        )


class ContentApi:
    def __init__(self, client: httpx.AsyncClient):
        self._client = client

    async def list_lessons(self) -> list[dict]:
        return await _request(self._client, "GET", "/lessons")

    async def get_lesson(self, lesson_id: str) -> Optional[dict]:
        return await self._get_or_none(f"/lessons/{quote(lesson_id, safe='')}")

    async def list_decks(self) -> list[dict]:
        return await _request(self._client, "GET", "/flashcards")

    async def get_deck(self, deck_id: str) -> Optional[dict]:
        return await self._get_or_none(f"/flashcards/{quote(deck_id, safe='')}")

    async def list_daily_words(self) -> list[dict]:
        return await _request(self._client, "GET", "/daily-words")

    async def daily_word(self) -> Optional[dict]:
        return await self._get_or_none("/daily-word")

    async def _get_or_none(self, url: str) -> Optional[dict]:
        try:
            return await _request(self._client, "GET", url)
        except ApiError as exc:
            if exc.status_code == 404:
                return None
            raise
