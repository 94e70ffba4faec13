# main.py

import os
import time
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse
from dotenv import load_dotenv
load_dotenv(dotenv_path=os.path.join(os.path.dirname(__file__), ".env"), override=True)

from app.logging_config import configure_logging
from app.services.body_limit import BodySizeLimitMiddleware
from app.services.rate_limit import RateLimiter, RateLimitError
from app.services.static_site import SiteStaticFiles
from app.settings import get_settings
from app.routers import plans
from app.routers import ai_finance

logger = logging.getLogger("bluesparrow")

ROOT_PAGE = "mutual-funds.html"


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging()

    # FastAPI app (create ONCE per process; tests build their own)
    app = FastAPI(title="Blue Sparrow Plan API")
    app.state.rate_limiter = RateLimiter(
        per_minute=settings.rate_limit_per_minute,
        disabled=settings.rate_limit_disabled,
    )

    # ---------- Middleware ----------
    # innermost: runs after rate limiting, so oversized requests still count
    app.add_middleware(BodySizeLimitMiddleware, max_body_bytes=settings.max_body_bytes)

    @app.middleware("http")
    async def rate_limit(request: Request, call_next):
        client_key = request.client.host if request.client else "unknown"
        try:
            request.app.state.rate_limiter.check(client_key)
        except RateLimitError as e:
            logger.warning("rate limited %s", client_key)
            return JSONResponse(
                status_code=429,
                content={"error": "Too many requests, please try again later."},
                headers={"Retry-After": str(e.retry_after_seconds)},
            )
        return await call_next(request)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        duration_ms = int((time.perf_counter() - started) * 1000)
        logger.info(
            "[req] %s %s %s %dms",
            request.method, request.url.path, response.status_code, duration_ms,
        )
        return response

    # added last so it runs first and also covers 413/429 replies
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.exception("unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    # ---------- Health ----------
    @app.get("/api/health")
    def health():
        current = get_settings()
        return {"ok": True, "port": current.port, "hasKey": current.has_openai_key}

    @app.get("/", include_in_schema=False)
    def root():
        page = os.path.join(settings.site_root, ROOT_PAGE)
        if os.path.isfile(page):
            return FileResponse(page)
        return PlainTextResponse("OK")

    # ---------- API ----------
    app.include_router(plans.router)
    app.include_router(ai_finance.router)

    # ---------- Static ----------
    for prefix in ("public", "data"):
        directory = os.path.join(settings.site_root, prefix)
        if os.path.isdir(directory):
            app.mount(f"/{prefix}", SiteStaticFiles(directory=directory), name=prefix)
    # catch-all: everything else under the site root (index.html, assets/, ...)
    app.mount("/", SiteStaticFiles(directory=settings.site_root, html=True), name="site")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    logger.info("Server running on :%s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)
