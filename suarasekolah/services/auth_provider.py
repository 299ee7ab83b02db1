"""Client for the hosted auth provider (Supabase GoTrue).

Only the three calls the portal needs are wrapped: resolving a caller's
access token, creating an account and deleting an account. Admin calls are
authenticated with the service role key.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

import httpx

from suarasekolah.core import config
from suarasekolah.core.exceptions import AuthProviderError

logger = logging.getLogger(__name__)


@dataclass
class AuthUser:
    id: str
    email: str | None = None
    user_metadata: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> "AuthUser":
        # Admin endpoints on some GoTrue versions wrap the user object
        if "user" in data and isinstance(data["user"], dict):
            data = data["user"]
        return cls(
            id=data["id"],
            email=data.get("email"),
            user_metadata=data.get("user_metadata") or {},
        )


class AuthProvider(ABC):
    """Interface the rest of the app uses to reach the auth provider."""

    @abstractmethod
    async def get_user(self, access_token: str) -> AuthUser | None:
        """Return the account behind an access token, or None if it is not valid."""

    @abstractmethod
    async def create_user(
        self, email: str, password: str, user_metadata: dict[str, Any]
    ) -> AuthUser:
        pass

    @abstractmethod
    async def delete_user(self, user_id: str) -> None:
        pass


def _error_message(resp: httpx.Response) -> str:
    """Pull the human readable error out of a GoTrue error response."""
    try:
        data = resp.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        for key in ("msg", "message", "error_description", "error"):
            if data.get(key):
                return str(data[key])
    return resp.text or resp.reason_phrase or f"HTTP {resp.status_code}"


class SupabaseAuthProvider(AuthProvider):
    def __init__(
        self,
        url: str,
        service_role_key: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = f"{url.rstrip('/')}/auth/v1"
        self.service_role_key = service_role_key
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            transport=self.transport,
            headers={"apikey": self.service_role_key},
        )

    def _admin_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.service_role_key}"}

    async def get_user(self, access_token: str) -> AuthUser | None:
        try:
            async with self._client() as client:
                resp = await client.get(
                    "/user", headers={"Authorization": f"Bearer {access_token}"}
                )
        except httpx.HTTPError as exc:
            raise AuthProviderError(f"Auth provider unreachable: {exc}") from exc

        if resp.status_code in (401, 403, 404):
            return None
        if resp.is_error:
            raise AuthProviderError(_error_message(resp), resp.status_code)
        return AuthUser.from_payload(resp.json())

    async def create_user(
        self, email: str, password: str, user_metadata: dict[str, Any]
    ) -> AuthUser:
        payload = {"email": email, "password": password, "user_metadata": user_metadata}
        try:
            async with self._client() as client:
                resp = await client.post(
                    "/admin/users", json=payload, headers=self._admin_headers()
                )
        except httpx.HTTPError as exc:
            raise AuthProviderError(f"Auth provider unreachable: {exc}") from exc

        if resp.is_error:
            raise AuthProviderError(_error_message(resp), resp.status_code)
        return AuthUser.from_payload(resp.json())

    async def delete_user(self, user_id: str) -> None:
        try:
            async with self._client() as client:
                resp = await client.delete(
                    f"/admin/users/{user_id}", headers=self._admin_headers()
                )
        except httpx.HTTPError as exc:
            raise AuthProviderError(f"Auth provider unreachable: {exc}") from exc

        if resp.is_error:
            raise AuthProviderError(_error_message(resp), resp.status_code)


def build_auth_provider() -> AuthProvider:
    if not config.SUPABASE_URL or not config.SUPABASE_SERVICE_ROLE_KEY:
        logger.warning("SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY is not set")
    return SupabaseAuthProvider(
        url=config.SUPABASE_URL,
        service_role_key=config.SUPABASE_SERVICE_ROLE_KEY,
        timeout=config.AUTH_REQUEST_TIMEOUT,
    )
