"""FastAPI dependencies shared by the routers."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends, Request

from suarasekolah.core.exceptions import AuthProviderError
from suarasekolah.services.auth_provider import AuthProvider, AuthUser, build_auth_provider
from suarasekolah.services.counselor import Responder, get_responder

logger = logging.getLogger(__name__)

# Built on first use so config can be patched before the first request
_auth_provider: AuthProvider | None = None

ACCESS_TOKEN_COOKIE = "access_token"


def get_auth_provider() -> AuthProvider:
    global _auth_provider
    if _auth_provider is None:
        _auth_provider = build_auth_provider()
    return _auth_provider


def get_counselor() -> Responder:
    return get_responder()


async def get_optional_user(
    request: Request,
    auth: AuthProvider = Depends(get_auth_provider),
) -> AuthUser | None:
    """Identify the chat user from a bearer header or the access token cookie.

    Anonymous visitors and unresolvable tokens yield None; the chat works
    without an identity, it is just not logged.
    """
    header = request.headers.get("Authorization", "")
    token = header.replace("Bearer ", "", 1).strip() or request.cookies.get(ACCESS_TOKEN_COOKIE)
    if not token:
        return None
    try:
        return await auth.get_user(token)
    except AuthProviderError as exc:
        logger.warning("Could not resolve chat user: %s", exc.message)
        return None


AuthProviderDep = Annotated[AuthProvider, Depends(get_auth_provider)]
CounselorDep = Annotated[Responder, Depends(get_counselor)]
OptionalUserDep = Annotated[AuthUser | None, Depends(get_optional_user)]
