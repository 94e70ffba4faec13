# app/routers/plans.py
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse, Response

from adapters.plan_source import PlanSource
from app.deps.plan_deps import PdfRenderer, get_pdf_renderer, get_plan_source
from app.errors import PlanUnavailable, RenderFailed
from app.report.pdf import PDF_FILENAME
from models import ErrorResponse, PlanDocument

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/plan", tags=["plans"])

PLAN_UNAVAILABLE_MSG = "plan.json not found/invalid"
PDF_FAILED_MSG = "PDF generation failed"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.get(
    "",
    responses={200: {"model": PlanDocument}, 500: {"model": ErrorResponse}},
)
def get_plan(source: PlanSource = Depends(get_plan_source)):
    """Return the stored plan exactly as it is on disk."""
    try:
        return source.load_plan()
    except PlanUnavailable:
        return _error(500, PLAN_UNAVAILABLE_MSG)


@router.post(
    "/pdf",
    response_class=Response,
    responses={
        200: {"content": {"application/pdf": {}}, "description": "Rendered plan"},
        500: {"model": ErrorResponse},
    },
)
async def plan_pdf(
    plan: Optional[Dict[str, Any]] = Body(default=None),
    source: PlanSource = Depends(get_plan_source),
    renderer: PdfRenderer = Depends(get_pdf_renderer),
):
    """Render a plan to PDF.

    A non-empty JSON object in the body is rendered as-is; an empty body or
    ``{}`` falls back to the stored plan.
    """
    try:
        if not plan:
            plan = source.load_plan()
        pdf_bytes = await renderer(plan)
    except PlanUnavailable:
        logger.error("pdf error: stored plan unavailable")
        return _error(500, PDF_FAILED_MSG)
    except RenderFailed:
        return _error(500, PDF_FAILED_MSG)

    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{PDF_FILENAME}"'},
    )
