from __future__ import annotations

import json

import httpx
import pytest

from suarasekolah.core.exceptions import AuthProviderError
from suarasekolah.services.auth_provider import AuthProvider, AuthUser, SupabaseAuthProvider


def _provider(handler) -> SupabaseAuthProvider:
    return SupabaseAuthProvider(
        url="https://project.supabase.co/",
        service_role_key="service-key",
        transport=httpx.MockTransport(handler),
    )


# --- get_user ---


@pytest.mark.asyncio
async def test_get_user_resolves_token():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url == "https://project.supabase.co/auth/v1/user"
        assert request.headers["authorization"] == "Bearer caller-token"
        assert request.headers["apikey"] == "service-key"
        return httpx.Response(200, json={"id": "abc", "email": "1@suarasekolah.id", "user_metadata": {"role": "admin"}})

    user = await _provider(handler).get_user("caller-token")
    assert user == AuthUser(id="abc", email="1@suarasekolah.id", user_metadata={"role": "admin"})


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [401, 403, 404])
async def test_get_user_rejected_token_returns_none(status):
    provider = _provider(lambda request: httpx.Response(status, json={"msg": "invalid JWT"}))
    assert await provider.get_user("bad") is None


@pytest.mark.asyncio
async def test_get_user_server_error_raises():
    provider = _provider(lambda request: httpx.Response(500, json={"message": "boom"}))
    with pytest.raises(AuthProviderError, match="boom") as excinfo:
        await provider.get_user("token")
    assert excinfo.value.status_code == 500


@pytest.mark.asyncio
async def test_network_error_raises_provider_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(AuthProviderError, match="unreachable"):
        await _provider(handler).get_user("token")


# --- create_user ---


@pytest.mark.asyncio
async def test_create_user_posts_admin_request():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["auth"] = request.headers["authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"id": "new-id", "email": "2024001@suarasekolah.id"})

    user = await _provider(handler).create_user(
        "2024001@suarasekolah.id", "secret", {"full_name": "Budi", "role": "siswa"}
    )

    assert user.id == "new-id"
    assert seen["method"] == "POST"
    assert seen["path"] == "/auth/v1/admin/users"
    assert seen["auth"] == "Bearer service-key"
    assert seen["body"] == {
        "email": "2024001@suarasekolah.id",
        "password": "secret",
        "user_metadata": {"full_name": "Budi", "role": "siswa"},
    }


@pytest.mark.asyncio
async def test_create_user_accepts_wrapped_user():
    provider = _provider(lambda request: httpx.Response(200, json={"user": {"id": "wrapped"}}))
    user = await provider.create_user("a@b.c", "pw", {})
    assert user.id == "wrapped"
    assert user.user_metadata == {}


@pytest.mark.asyncio
async def test_create_user_error_message_passthrough():
    provider = _provider(
        lambda request: httpx.Response(
            422, json={"code": 422, "msg": "A user with this email address has already been registered"}
        )
    )
    with pytest.raises(AuthProviderError) as excinfo:
        await provider.create_user("a@b.c", "pw", {})
    assert excinfo.value.message == "A user with this email address has already been registered"
    assert excinfo.value.status_code == 422


@pytest.mark.asyncio
async def test_create_user_plain_text_error():
    provider = _provider(lambda request: httpx.Response(502, text="Bad Gateway"))
    with pytest.raises(AuthProviderError, match="Bad Gateway"):
        await provider.create_user("a@b.c", "pw", {})


# --- delete_user ---


@pytest.mark.asyncio
async def test_delete_user():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        return httpx.Response(200, json={})

    await _provider(handler).delete_user("abc")
    assert seen == {"method": "DELETE", "path": "/auth/v1/admin/users/abc"}


@pytest.mark.asyncio
async def test_delete_missing_user_reports_404():
    provider = _provider(lambda request: httpx.Response(404, json={"msg": "User not found"}))
    with pytest.raises(AuthProviderError) as excinfo:
        await provider.delete_user("gone")
    assert excinfo.value.status_code == 404


def test_auth_provider_subclass_must_implement_all_calls():
    class ReadOnly(AuthProvider):
        async def get_user(self, access_token):
            return None

    with pytest.raises(TypeError):
        ReadOnly()
