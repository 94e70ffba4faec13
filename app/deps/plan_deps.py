from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict

from fastapi import Depends

from adapters.file_plan_source import FilePlanSource
from adapters.plan_source import PlanSource
from app.report.pdf import render_pdf
from app.settings import Settings, get_settings

PdfRenderer = Callable[[Dict[str, Any]], Awaitable[bytes]]


def get_plan_source(settings: Settings = Depends(get_settings)) -> PlanSource:
    return FilePlanSource(settings.plan_path)


def get_pdf_renderer() -> PdfRenderer:
    return render_pdf
