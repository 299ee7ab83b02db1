from __future__ import annotations

import json
import logging

import pydantic
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from suarasekolah.core.dependencies import AuthProviderDep
from suarasekolah.core.exceptions import PortalError, ValidationError
from suarasekolah.db.session import get_db
from suarasekolah.schemas.provisioning import CreateUserRequest, CreateUserResponse
from suarasekolah.services.provisioning import UserProvisioner, authorize_admin

logger = logging.getLogger(__name__)

# Mounted under /functions/v1 by suarasekolah.main
router = APIRouter(tags=["admin"])

CORS_ALLOW_HEADERS = ["authorization", "x-client-info", "apikey", "content-type"]
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": ", ".join(CORS_ALLOW_HEADERS),
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}


async def _parse_body(request: Request) -> CreateUserRequest | None:
    raw = await request.body()
    if not raw:
        return None
    try:
        data = json.loads(raw)
    except ValueError as exc:
        raise ValidationError("Invalid JSON body") from exc
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    try:
        return CreateUserRequest.model_validate(data)
    except pydantic.ValidationError as exc:
        raise ValidationError(f"Invalid request body: {exc.errors()[0]['msg']}") from exc


@router.options("/create-user", include_in_schema=False)
async def create_user_preflight():
    return PlainTextResponse("ok", headers=CORS_HEADERS)


@router.post("/create-user", response_model=CreateUserResponse)
async def create_user(
    request: Request,
    auth: AuthProviderDep,
    db: AsyncSession = Depends(get_db),
):
    try:
        caller = await authorize_admin(request.headers.get("Authorization"), db, auth)
        body = await _parse_body(request)
        created = await UserProvisioner(db, auth).create_user(body)
    except PortalError as exc:
        return JSONResponse({"error": exc.message}, status_code=exc.status_code, headers=CORS_HEADERS)
    except Exception as exc:
        logger.exception("Unexpected error while creating user")
        return JSONResponse({"error": str(exc)}, status_code=500, headers=CORS_HEADERS)

    logger.info("Admin %s created user %s", caller.id, created.id)
    return JSONResponse(
        CreateUserResponse(user=created).model_dump(),
        headers=CORS_HEADERS,
    )
