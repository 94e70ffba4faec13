# app/report/pdf.py
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict

from playwright.async_api import Browser, async_playwright

from app.errors import RenderFailed
from app.report.html import render_plan_html

logger = logging.getLogger(__name__)

PDF_FILENAME = "BlueSparrow-Plan.pdf"
PDF_FORMAT = "A4"
PDF_MARGIN = {"top": "14mm", "right": "14mm", "bottom": "16mm", "left": "14mm"}

# Container hosts (Render, Docker) cannot use the Chromium sandbox.
CHROMIUM_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
]


@asynccontextmanager
async def browser_session() -> AsyncIterator[Browser]:
    """Launch a headless Chromium for one render and always tear it down.

    Every call starts its own Playwright driver and browser process; there is
    no pooling, so concurrent exports each pay the full startup cost.
    """
    try:
        playwright = await async_playwright().start()
    except Exception as e:
        raise RenderFailed("could not start playwright") from e

    browser = None
    try:
        try:
            browser = await playwright.chromium.launch(headless=True, args=CHROMIUM_ARGS)
        except Exception as e:
            raise RenderFailed("could not launch chromium") from e
        yield browser
    finally:
        if browser is not None:
            try:
                await browser.close()
            except Exception:
                logger.warning("chromium close failed", exc_info=True)
        try:
            await playwright.stop()
        except Exception:
            logger.warning("playwright stop failed", exc_info=True)


async def render_pdf(plan: Dict[str, Any]) -> bytes:
    """Render a plan document to A4 PDF bytes."""
    html_doc = render_plan_html(plan)
    try:
        async with browser_session() as browser:
            page = await browser.new_page()
            await page.set_content(html_doc, wait_until="networkidle")
            pdf_bytes = await page.pdf(
                format=PDF_FORMAT,
                print_background=True,
                margin=PDF_MARGIN,
            )
    except RenderFailed:
        logger.exception("pdf error")
        raise
    except Exception as e:
        logger.exception("pdf error")
        raise RenderFailed("PDF generation failed") from e

    logger.info("pdf rendered", extra={"pdf_bytes": len(pdf_bytes)})
    return pdf_bytes
