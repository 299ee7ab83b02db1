from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# Passwords live only in the auth provider; the column keeps a marker.
PASSWORD_HASH_MARKER = "handled_by_supabase_auth"


class Base(DeclarativeBase):
    pass


class UserRole(str, enum.Enum):
    siswa = "siswa"  # student
    guru = "guru"  # teacher
    osis = "osis"  # student council
    admin = "admin"


class UserProfile(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    nik_nis: Mapped[str] = mapped_column(String, unique=True, nullable=False)
    display_id: Mapped[str] = mapped_column(String(16), unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    role: Mapped[str] = mapped_column(String, nullable=False)
    password_hash: Mapped[str] = mapped_column(
        String, nullable=False, default=PASSWORD_HASH_MARKER
    )
    kelas: Mapped[str | None] = mapped_column(String, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), nullable=False
    )
