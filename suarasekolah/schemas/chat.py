from __future__ import annotations

from datetime import datetime
from uuid import uuid4

from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    """A message shown on the chat page. Lives only in the page, never stored."""

    id: str = Field(default_factory=lambda: uuid4().hex)
    content: str
    is_user: bool
    timestamp: datetime = Field(default_factory=datetime.now)
