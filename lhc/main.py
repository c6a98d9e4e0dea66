# lhc/main.py
from __future__ import annotations

import logging
import os
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from mangum import Mangum

# --- Settings / DB / logging ---
from lhc.core.db import init_db
from lhc.core.exceptions import (
    AssessmentNotFoundError,
    AssessmentValidationError,
    LHCException,
    PersistenceError,
)
from lhc.core.logging_config import configure_logging
from lhc.core.pool import get_pool
from lhc.core.report import get_grades
from lhc.core.settings import settings

# --- Routers ---
from lhc.routers.diag import router as diag_router
from lhc.routers.health import router as health_router
from lhc.routers.lhc import router as lhc_router

configure_logging(settings.LOG_LEVEL, settings.LOG_FILE)
logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# FastAPI app
# -----------------------------------------------------------------------------
API_PREFIX = "/api/lhc"
ROOT_PATH = os.getenv("FASTAPI_ROOT_PATH", "")   # e.g. "/prod" behind API Gateway
BUILD_TAG = os.getenv("BUILD_TAG", "dev")


class UTF8JSONResponse(JSONResponse):
    # question texts and findings are Cyrillic
    media_type = "application/json; charset=utf-8"


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    root_path=ROOT_PATH,
    default_response_class=UTF8JSONResponse,
)

# -----------------------------------------------------------------------------
# CORS
# -----------------------------------------------------------------------------
def cors_options() -> Dict[str, Any]:
    if settings.ALLOW_ALL_CORS or settings.DEBUG:
        return {"allow_origins": ["*"], "allow_credentials": False}
    return {"allow_origins": list(settings.CORS_ORIGINS), "allow_credentials": True}


# the frontend only reads questions and posts evaluations
app.add_middleware(
    CORSMiddleware,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["content-type", "x-user-id"],
    **cors_options(),
)

# -----------------------------------------------------------------------------
# Register routers
# -----------------------------------------------------------------------------
app.include_router(lhc_router,  prefix=API_PREFIX)
app.include_router(diag_router, prefix=API_PREFIX)
app.include_router(health_router)

# -----------------------------------------------------------------------------
# Health / Debug
# -----------------------------------------------------------------------------
@app.get("/")
def root():
    return {
        "ok": True,
        "service": settings.PROJECT_NAME,
        "prefix": API_PREFIX,
        "docs": "/docs",
        "build": BUILD_TAG,
    }

@app.get(f"{API_PREFIX}/ping")
def ping():
    return {"ok": True, "prefix": API_PREFIX}

# -----------------------------------------------------------------------------
# Exception handlers
# -----------------------------------------------------------------------------
@app.exception_handler(AssessmentValidationError)
async def validation_error_handler(request: Request, exc: AssessmentValidationError):
    logger.info("[evaluate] rejected: %s", exc)
    return UTF8JSONResponse(
        status_code=400,
        content={"ok": False, "error": "validation_error", "field": exc.field, "detail": exc.message},
    )

@app.exception_handler(AssessmentNotFoundError)
async def not_found_handler(request: Request, exc: AssessmentNotFoundError):
    return UTF8JSONResponse(
        status_code=404,
        content={"ok": False, "error": "not_found", "detail": "Проценката не е пронајдена"},
    )

@app.exception_handler(PersistenceError)
async def persistence_error_handler(request: Request, exc: PersistenceError):
    logger.error("[store] %s", exc, exc_info=exc)
    return UTF8JSONResponse(
        status_code=500,
        content={"ok": False, "error": "persistence_error", "detail": exc.message},
    )

@app.exception_handler(LHCException)
async def lhc_error_handler(request: Request, exc: LHCException):
    logger.error("[lhc] %s", exc, exc_info=exc)
    return UTF8JSONResponse(
        status_code=500,
        content={"ok": False, "error": "lhc_error", "detail": exc.message},
    )

@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error("[unhandled] %s %s: %r", request.method, request.url.path, exc, exc_info=exc)
    return UTF8JSONResponse(
        status_code=500,
        content={"ok": False, "error": "internal_error", "detail": "Внатрешна грешка. Обидете се повторно."},
    )

# -----------------------------------------------------------------------------
# Startup
# -----------------------------------------------------------------------------
@app.on_event("startup")
def on_startup():
    init_db()
    # build the pool and grade tiers now so a broken bank fails the boot
    pool = get_pool()
    get_grades()
    logger.info("[BOOT] pool ready: %d questions %s", pool.stats["total"], dict(pool.stats["byCategory"]))

# -----------------------------------------------------------------------------
# Lambda handler
# -----------------------------------------------------------------------------
handler = Mangum(app)
