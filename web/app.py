from __future__ import annotations

import hashlib
import logging
import traceback
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.responses import HTMLResponse
from starlette.middleware.sessions import SessionMiddleware

from roadbill.constants import COMPANY_NAME, now
from roadbill.logging import configure_logging
from roadbill.models import format_inr
from roadbill.settings import settings
from web.routes.api import router as api_router
from web.routes.images import router as images_router
from web.routes.views import router as views_router

configure_logging()
logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).parent


def _build_asset_version() -> str:
    """Hash all static files to produce a short cache-bust token."""
    h = hashlib.md5()
    for f in sorted((BASE_DIR / "static").rglob("*")):
        if f.is_file():
            h.update(f.read_bytes())
    return h.hexdigest()[:10]


ASSET_VERSION = _build_asset_version()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info(
        "Application started (storage=%s, cache=%s)",
        settings.storage_backend,
        settings.storage_cache,
    )
    yield
    logger.info("Application stopped")


app = FastAPI(docs_url=None, redoc_url=None, lifespan=lifespan)

app.add_middleware(SessionMiddleware, secret_key=settings.get_secret_key())
app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])

app.mount("/static", StaticFiles(directory=BASE_DIR / "static"), name="static")

templates = Jinja2Templates(directory=BASE_DIR / "templates")
templates.env.globals["format_inr"] = format_inr
templates.env.globals["company_name"] = COMPANY_NAME
templates.env.globals["asset_version"] = ASSET_VERSION

app.include_router(api_router)
app.include_router(images_router)
app.include_router(views_router)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(
        "Unhandled exception on %s %s:\n%s",
        request.method,
        request.url.path,
        traceback.format_exc(),
    )
    return HTMLResponse("Internal Server Error", status_code=500)


@app.get("/api/health")
async def health():
    return {"status": "ok", "timestamp": now().isoformat()}
