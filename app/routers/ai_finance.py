from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Body
from fastapi.responses import JSONResponse

from app.errors import (
    InvalidCredentialFormat,
    LLMError,
    MissingCredential,
    UnauthorizedCredential,
)
from app.llm.finance_qa import ask_finance_question
from models import AiFinanceError, AiFinanceRequest, AiFinanceResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["ai"])

REJECTED_KEY_MSG = "OpenAI rejected the API key (invalid/expired). Update OPENAI_API_KEY and redeploy."
PROVIDER_FAILED_MSG = "OpenAI call failed. Try again later."


def _llm_error_body(err: LLMError) -> AiFinanceError:
    if isinstance(err, (MissingCredential, InvalidCredentialFormat)):
        return AiFinanceError(
            answer=f"{err} — set it in the environment and redeploy.",
            source=err.source,
        )
    if isinstance(err, UnauthorizedCredential):
        return AiFinanceError(answer=REJECTED_KEY_MSG, source=err.source)
    return AiFinanceError(answer=PROVIDER_FAILED_MSG, source=err.source)


@router.post(
    "/ai-finance",
    response_model=AiFinanceResponse,
    responses={500: {"model": AiFinanceError}},
)
async def ai_finance(req: Optional[AiFinanceRequest] = Body(default=None)):
    query = req.query_text() if req is not None else ""
    try:
        result = await ask_finance_question(query)
    except LLMError as e:
        if isinstance(e, (MissingCredential, InvalidCredentialFormat)):
            logger.warning("ai-finance config error: %s", e)
        body = _llm_error_body(e)
        return JSONResponse(status_code=500, content=body.model_dump())

    return AiFinanceResponse(answer=result.answer, source=result.source)
