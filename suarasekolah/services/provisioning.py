"""Admin-driven account creation.

Creating a portal user touches two systems that share no transaction: the
auth provider holds the login account and the store holds the profile and
leaderboard rows. The steps run as a small saga:

1. allocate a unique display id (bounded retries)
2. create the auth account
3. insert the profile row; on failure delete the auth account again
4. seed the leaderboard row (best effort, failures are only logged)
"""

from __future__ import annotations

import logging
import secrets
import string

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from suarasekolah.core import config
from suarasekolah.core.exceptions import (
    AuthProviderError,
    DisplayIdExhaustedError,
    InsufficientPermissionsError,
    InvalidTokenError,
    MissingAuthorizationError,
    ProvisioningError,
    ValidationError,
)
from suarasekolah.models import LeaderboardEntry, UserProfile, UserRole
from suarasekolah.schemas.provisioning import CreatedUser, CreateUserRequest
from suarasekolah.services.auth_provider import AuthProvider, AuthUser

logger = logging.getLogger(__name__)

DISPLAY_ID_ALPHABET = string.ascii_uppercase + string.digits


def generate_display_id(length: int | None = None) -> str:
    """Return a random uppercase alphanumeric display id."""
    length = length or config.DISPLAY_ID_LENGTH
    return "".join(secrets.choice(DISPLAY_ID_ALPHABET) for _ in range(length))


def login_email(nik_nis: str) -> str:
    """Synthesize the login email for an external login identifier."""
    return f"{nik_nis}@{config.LOGIN_EMAIL_DOMAIN}"


def bearer_token(authorization: str | None) -> str:
    """Extract the credential from an Authorization header.

    Raises:
        MissingAuthorizationError: If the header is absent.
    """
    if not authorization:
        raise MissingAuthorizationError()
    return authorization.replace("Bearer ", "", 1).strip()


async def authorize_admin(
    authorization: str | None, db: AsyncSession, auth: AuthProvider
) -> AuthUser:
    """Resolve the caller and check that their stored role is admin.

    Raises:
        MissingAuthorizationError: No Authorization header.
        InvalidTokenError: The auth provider does not know the token.
        InsufficientPermissionsError: The caller has no admin profile.
    """
    token = bearer_token(authorization)
    caller = await auth.get_user(token) if token else None
    if caller is None:
        raise InvalidTokenError()

    role = await db.scalar(select(UserProfile.role).where(UserProfile.id == caller.id))
    if role != UserRole.admin.value:
        logger.info("Caller %s with role %r tried to create a user", caller.id, role)
        raise InsufficientPermissionsError()
    return caller


def validate_request(req: CreateUserRequest | None) -> CreateUserRequest:
    """Check required fields and the role before anything is written."""
    if req is None or not (req.name and req.nik_nis and req.role and req.password):
        raise ValidationError("Missing required fields")
    if req.role not in {r.value for r in UserRole}:
        raise ValidationError(f"Invalid role: {req.role}")
    return req


def _store_error_message(exc: SQLAlchemyError) -> str:
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


class UserProvisioner:
    """Runs the account creation saga for one request."""

    def __init__(self, db: AsyncSession, auth: AuthProvider):
        self.db = db
        self.auth = auth

    async def display_id_taken(self, candidate: str) -> bool:
        existing = await self.db.scalar(
            select(UserProfile.display_id).where(UserProfile.display_id == candidate)
        )
        return existing is not None

    async def allocate_display_id(self) -> str:
        """Find a display id no stored profile uses yet.

        Raises:
            DisplayIdExhaustedError: After DISPLAY_ID_MAX_ATTEMPTS collisions.
        """
        attempts = config.DISPLAY_ID_MAX_ATTEMPTS
        for attempt in range(1, attempts + 1):
            candidate = generate_display_id()
            if not await self.display_id_taken(candidate):
                return candidate
            logger.debug("Display id %s already taken (attempt %d)", candidate, attempt)
        logger.error("No unique display id after %d attempts", attempts)
        raise DisplayIdExhaustedError(attempts)

    async def create_user(self, req: CreateUserRequest) -> CreatedUser:
        req = validate_request(req)
        kelas = req.kelas or None
        display_id = await self.allocate_display_id()

        try:
            account = await self.auth.create_user(
                email=login_email(req.nik_nis),
                password=req.password,
                user_metadata={
                    "full_name": req.name,
                    "nik_nis": req.nik_nis,
                    "role": req.role,
                    "kelas": kelas,
                },
            )
        except AuthProviderError as exc:
            logger.warning("Auth account creation failed for %s: %s", req.nik_nis, exc.message)
            raise ProvisioningError(exc.message) from exc

        profile = UserProfile(
            id=account.id,
            nik_nis=req.nik_nis,
            display_id=display_id,
            name=req.name,
            role=req.role,
            kelas=kelas,
        )
        self.db.add(profile)
        try:
            await self.db.commit()
        except SQLAlchemyError as exc:
            await self.db.rollback()
            message = _store_error_message(exc)
            logger.warning("Profile insert failed for %s: %s", account.id, message)
            await self.compensate(account.id)
            raise ProvisioningError(message) from exc

        await self.seed_leaderboard(account.id)

        logger.info("Created %s account %s (%s)", req.role, account.id, display_id)
        return CreatedUser(
            id=account.id,
            name=req.name,
            nik_nis=req.nik_nis,
            display_id=display_id,
            role=req.role,
            kelas=kelas,
        )

    async def compensate(self, user_id: str) -> bool:
        """Delete an auth account whose profile could not be stored.

        Deleting is idempotent: an account the provider no longer knows
        counts as deleted. Returns False if the account is left orphaned.
        """
        attempts = config.COMPENSATION_MAX_ATTEMPTS
        for attempt in range(1, attempts + 1):
            try:
                await self.auth.delete_user(user_id)
                return True
            except AuthProviderError as exc:
                if exc.status_code == 404:
                    return True
                logger.warning(
                    "Deleting auth account %s failed (attempt %d/%d): %s",
                    user_id, attempt, attempts, exc.message,
                )
        logger.error("Auth account %s is orphaned: no profile row and delete failed", user_id)
        return False

    async def seed_leaderboard(self, user_id: str) -> bool:
        """Insert the zeroed leaderboard row. Failures are logged, not raised."""
        self.db.add(
            LeaderboardEntry(user_id=user_id, total_berita=0, total_pengaduan=0, points=0)
        )
        try:
            await self.db.commit()
        except SQLAlchemyError as exc:
            await self.db.rollback()
            logger.error(
                "Failed to create leaderboard entry for %s: %s",
                user_id, _store_error_message(exc),
            )
            return False
        return True
