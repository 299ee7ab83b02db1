from __future__ import annotations

import asyncio

from fastapi import APIRouter, Depends, Form, Request
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession

from suarasekolah.core import config
from suarasekolah.core.dependencies import CounselorDep, OptionalUserDep
from suarasekolah.core.templates import templates
from suarasekolah.db.session import get_db
from suarasekolah.schemas.chat import ChatMessage
from suarasekolah.services.chat_log import ChatLogWriter
from suarasekolah.services.counselor import greeting

router = APIRouter(prefix="/chat", tags=["chat"])


@router.get("")
async def chat_page(request: Request):
    messages = [ChatMessage(id="1", content=greeting(), is_user=False)]
    return templates.TemplateResponse(
        request,
        "chat.html",
        {"messages": messages, "school_name": config.SCHOOL_NAME},
    )


@router.post("/send")
async def send_message(
    request: Request,
    counselor: CounselorDep,
    user: OptionalUserDep,
    message: str = Form(""),
    db: AsyncSession = Depends(get_db),
):
    # Blank input is ignored; the page keeps its message list as is
    if not message.strip():
        return templates.TemplateResponse(request, "partials/chat_messages.html", {"messages": []})

    user_msg = ChatMessage(content=message, is_user=True)

    chat_log = ChatLogWriter(db)
    log_id = None
    if user is not None:
        log_id = await chat_log.record_prompt(user.id, message)

    # The LLM responder blocks on network I/O
    reply_text = await run_in_threadpool(counselor.reply, message)
    if config.CHAT_REPLY_DELAY > 0:
        await asyncio.sleep(config.CHAT_REPLY_DELAY)
    reply = ChatMessage(content=reply_text, is_user=False)

    if log_id is not None:
        await chat_log.record_response(log_id, reply_text)

    return templates.TemplateResponse(
        request,
        "partials/chat_messages.html",
        {"messages": [user_msg, reply]},
    )
