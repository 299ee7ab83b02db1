"""Best-effort log of counselor conversations (``chat_ai_log``).

Writes here never affect the chat itself: store errors are logged, the
session is rolled back, and the caller gets None/False back instead of an
exception.
"""

from __future__ import annotations

import logging

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from suarasekolah.models import PENDING_RESPONSE, ChatAiLog

logger = logging.getLogger(__name__)


class ChatLogWriter:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def record_prompt(self, user_id: str, prompt: str) -> int | None:
        """Insert a log row with a placeholder response and return its id."""
        entry = ChatAiLog(user_id=user_id, prompt=prompt, response=PENDING_RESPONSE)
        self.db.add(entry)
        try:
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            logger.exception("Failed to log chat prompt for user %s", user_id)
            return None
        return entry.id

    async def record_response(self, log_id: int, response: str) -> bool:
        """Replace the placeholder of a previously logged prompt."""
        try:
            await self.db.execute(
                update(ChatAiLog).where(ChatAiLog.id == log_id).values(response=response)
            )
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            logger.exception("Failed to log chat response for log entry %s", log_id)
            return False
        return True
