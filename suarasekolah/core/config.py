from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()

DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./suarasekolah.db")

# Hosted auth provider (Supabase GoTrue)
SUPABASE_URL: str = os.getenv("SUPABASE_URL", "").rstrip("/")
SUPABASE_SERVICE_ROLE_KEY: str = os.getenv("SUPABASE_SERVICE_ROLE_KEY", "")
AUTH_REQUEST_TIMEOUT: float = float(os.getenv("AUTH_REQUEST_TIMEOUT", "10"))

# Account provisioning
LOGIN_EMAIL_DOMAIN: str = os.getenv("LOGIN_EMAIL_DOMAIN", "suarasekolah.id")
DISPLAY_ID_LENGTH: int = int(os.getenv("DISPLAY_ID_LENGTH", "8"))
DISPLAY_ID_MAX_ATTEMPTS: int = int(os.getenv("DISPLAY_ID_MAX_ATTEMPTS", "20"))
COMPENSATION_MAX_ATTEMPTS: int = int(os.getenv("COMPENSATION_MAX_ATTEMPTS", "3"))

# AI Konselor chat
SCHOOL_NAME: str = os.getenv("SCHOOL_NAME", "SMAN 1 Cibinong")
CHAT_REPLY_DELAY: float = float(os.getenv("CHAT_REPLY_DELAY", "1.5"))
COUNSELOR_BACKEND: str = os.getenv("COUNSELOR_BACKEND", "keyword")  # keyword / llm

# LLM configuration (only used when COUNSELOR_BACKEND=llm)
LLM_PROVIDER: str = os.getenv("LLM_PROVIDER", "openai")
LLM_MODEL: str = os.getenv("LLM_MODEL", "gpt-4o-mini")
LLM_TEMPERATURE: float = float(os.getenv("LLM_TEMPERATURE", "0.5"))
LLM_BASE_URL: str = os.getenv("LLM_BASE_URL", "")
LLM_API_KEY: str = os.getenv("LLM_API_KEY", "")

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
