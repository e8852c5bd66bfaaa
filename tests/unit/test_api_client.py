"""Unit tests for AuthApi / ContentApi against a mocked httpx transport."""
import httpx
import pytest

from sync_client.api_client import AuthApi, ContentApi
from sync_client.errors import ApiError
from sync_client.identity import IdentityContext

USER = {"id": "u1", "username": "anna", "email": "anna@example.com", "emailVerified": True}


def _client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://testserver")


@pytest.mark.unit
class TestAuthApi:
    @pytest.mark.asyncio
    async def test_login_signs_in(self):
        identity = IdentityContext()
        auth = AuthApi(_client(lambda request: httpx.Response(200, json={"message": "ok", "user": USER})), identity)

        user = await auth.login("anna@example.com", "geheim123")

        assert user.id == "u1"
        assert identity.user_id == "u1"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("response", [
        httpx.Response(200),
        httpx.Response(200, content=b"<html>ok</html>"),
        httpx.Response(200, json=["not", "an", "object"]),
        httpx.Response(200, json={"message": "ok"}),
    ])
    async def test_login_with_unusable_body_is_api_error(self, response):
        identity = IdentityContext()
        auth = AuthApi(_client(lambda request: response), identity)

        with pytest.raises(ApiError):
            await auth.login("anna@example.com", "geheim123")
        assert identity.user_id is None

    @pytest.mark.asyncio
    async def test_register_without_user_id_is_api_error(self):
        auth = AuthApi(_client(lambda request: httpx.Response(200)), IdentityContext())
        with pytest.raises(ApiError):
            await auth.register("anna", "anna@example.com", "geheim123")

    @pytest.mark.asyncio
    async def test_error_detail_is_surfaced(self):
        auth = AuthApi(
            _client(lambda request: httpx.Response(403, json={"detail": "Email not verified"})),
            IdentityContext(),
        )
        with pytest.raises(ApiError) as info:
            await auth.login("anna@example.com", "geheim123")
        assert str(info.value) == "Email not verified"
        assert info.value.status_code == 403


@pytest.mark.unit
class TestContentApi:
    @pytest.mark.asyncio
    async def test_missing_deck_is_none(self):
        content = ContentApi(_client(lambda request: httpx.Response(404, json={"detail": "Not Found"})))
        assert await content.get_deck("99") is None
