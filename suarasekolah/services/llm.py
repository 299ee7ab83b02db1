from __future__ import annotations

import logging

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from suarasekolah.core import config
from suarasekolah.services.counselor import Responder

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """\
You are AI Konselor, the school counselor assistant of {school}, an Indonesian senior high school.
You talk with students about academic, social and personal problems.

Rules:
- Always answer in Bahasa Indonesia, using the polite "Anda" form.
- Be warm and supportive. Acknowledge the student's feelings before giving suggestions.
- Keep answers short: at most one paragraph, ending with an open question.
- Do not diagnose. If the student mentions self-harm or danger, urge them to contact a guru BK or a trusted adult right away.\
"""


def get_chat_model() -> BaseChatModel:
    """Build the LangChain chat model for the configured provider."""
    provider = config.LLM_PROVIDER.lower()
    if not config.LLM_API_KEY:
        raise ValueError("LLM_API_KEY is required when COUNSELOR_BACKEND=llm")

    if provider == "openai":
        from langchain_openai import ChatOpenAI

        kwargs = {}
        if config.LLM_BASE_URL:
            kwargs["base_url"] = config.LLM_BASE_URL
        return ChatOpenAI(
            model=config.LLM_MODEL,
            temperature=config.LLM_TEMPERATURE,
            api_key=config.LLM_API_KEY,
            **kwargs,
        )

    if provider == "anthropic":
        try:
            from langchain_anthropic import ChatAnthropic
        except ImportError as exc:
            raise ImportError(
                "langchain-anthropic is required for LLM_PROVIDER=anthropic. "
                "Install it with: pip install langchain-anthropic"
            ) from exc
        return ChatAnthropic(
            model=config.LLM_MODEL,
            temperature=config.LLM_TEMPERATURE,
            api_key=config.LLM_API_KEY,
        )

    raise ValueError(
        f"Unsupported LLM_PROVIDER={config.LLM_PROVIDER!r}. Supported: openai, anthropic"
    )


def _to_langchain_messages(messages: list[dict]) -> list[BaseMessage]:
    result: list[BaseMessage] = []
    for m in messages:
        role = m.get("role")
        if role == "system":
            result.append(SystemMessage(content=m["content"]))
        elif role == "assistant":
            result.append(AIMessage(content=m["content"]))
        else:
            result.append(HumanMessage(content=m["content"]))
    return result


class LLMResponder(Responder):
    """Asks a chat model for the reply, falling back to canned replies on failure."""

    def __init__(self, fallback: Responder):
        self.fallback = fallback

    def reply(self, prompt: str) -> str:
        messages = [
            {"role": "system", "content": SYSTEM_PROMPT.format(school=config.SCHOOL_NAME)},
            {"role": "user", "content": prompt},
        ]
        try:
            model = get_chat_model()
            response = model.invoke(_to_langchain_messages(messages))
            content = response.content if isinstance(response.content, str) else ""
        except Exception:
            logger.exception("LLM call failed, using canned reply")
            return self.fallback.reply(prompt)

        content = content.strip()
        if not content:
            logger.warning("LLM returned an empty reply, using canned reply")
            return self.fallback.reply(prompt)
        return content
