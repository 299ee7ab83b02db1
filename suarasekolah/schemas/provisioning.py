"""Request and response bodies for the user provisioning endpoint."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CreateUserRequest(BaseModel):
    """Body of ``POST /functions/v1/create-user``.

    Every field is optional at the schema level so that a missing field is
    reported as ``Missing required fields`` (400) by the provisioning service
    rather than as a schema error.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str | None = None
    nik_nis: str | None = Field(default=None, alias="nikNis")
    role: str | None = None
    kelas: str | None = None
    password: str | None = None


class CreatedUser(BaseModel):
    id: str
    name: str
    nik_nis: str
    display_id: str
    role: str
    kelas: str | None = None


class CreateUserResponse(BaseModel):
    success: bool = True
    user: CreatedUser
