from __future__ import annotations

import logging
from typing import Any, Optional

from openai import AsyncOpenAI
from pydantic import BaseModel

from app.errors import (
    InvalidCredentialFormat,
    MissingCredential,
    ProviderError,
    UnauthorizedCredential,
)
from app.settings import get_settings

logger = logging.getLogger(__name__)

API_KEY_PREFIX = "sk-"
NO_ANSWER = "No answer from model."
SOURCE_OPENAI = "openai"

SYSTEM_PROMPT = (
    "You are a helpful, India-focused financial education assistant. "
    "Use short bullet points when useful. "
    "Educational only—no personalized investment advice."
)


class FinanceAnswer(BaseModel):
    answer: str
    source: str = SOURCE_OPENAI


def check_api_key(raw: Optional[str]) -> str:
    """Validate the configured credential locally, before any network call."""
    key = (raw or "").strip()
    if not key:
        raise MissingCredential("Missing OPENAI_API_KEY")
    if not key.startswith(API_KEY_PREFIX):
        raise InvalidCredentialFormat(
            f'OPENAI_API_KEY looks invalid (must start with "{API_KEY_PREFIX}")'
        )
    return key


def _extract_answer(resp: Any) -> str:
    choices = getattr(resp, "choices", None)
    if not choices:
        return ""
    msg = getattr(choices[0], "message", None)
    content = getattr(msg, "content", None) if msg is not None else None
    return content.strip() if isinstance(content, str) else ""


def _is_auth_rejection(err: Exception) -> bool:
    if getattr(err, "status_code", None) == 401:
        return True
    return getattr(err, "code", None) == "invalid_api_key"


async def ask_finance_question(
    query: str,
    *,
    api_key: Optional[str] = None,
    model: Optional[str] = None,
    temperature: Optional[float] = None,
) -> FinanceAnswer:
    """Single-turn educational answer from the hosted chat model.

    Raises MissingCredential / InvalidCredentialFormat for local config
    problems, UnauthorizedCredential when the provider rejects the key and
    ProviderError for anything else. No retries.
    """
    settings = get_settings()
    key = check_api_key(settings.openai_api_key if api_key is None else api_key)
    model = model or settings.llm_model
    temperature = settings.llm_temperature if temperature is None else temperature

    client = AsyncOpenAI(api_key=key)
    try:
        resp = await client.chat.completions.create(
            model=model,
            temperature=temperature,
            messages=[
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": query},
            ],
        )
    except Exception as e:
        if _is_auth_rejection(e):
            logger.warning("openai rejected the api key")
            raise UnauthorizedCredential("OpenAI rejected the API key") from e
        logger.exception("ai-finance error")
        raise ProviderError("OpenAI call failed") from e
    finally:
        await client.close()

    return FinanceAnswer(answer=_extract_answer(resp) or NO_ANSWER)
