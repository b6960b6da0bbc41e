"""FastAPI application for the Second Brain API."""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .... import __version__
from ....config.logging import setup_logging
from ....config.settings import settings
from ....core.domain.exceptions import SecondBrainError
from ...common.exception_handler import (
    format_exception_json,
    get_http_status_code,
    log_exception,
)
from .routers import conflicts, files, health, uploads

logger = logging.getLogger(__name__)

# Determine if we're in debug mode (shows full stack traces)
DEBUG_MODE = os.getenv("DEBUG", "false").lower() == "true"


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level, json_format=settings.log_json)
    logger.info("Second Brain API starting up (backend=%s)", settings.storage_backend)
    logger.info("Debug mode: %s", "ENABLED" if DEBUG_MODE else "DISABLED")
    yield
    logger.info("Second Brain API shutting down...")


app = FastAPI(
    title="Second Brain API",
    description=(
        "Personal document storage that warns before uploading content "
        "that is a near-duplicate of something already stored."
    ),
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(files.router)
app.include_router(uploads.router)
app.include_router(conflicts.router)


@app.exception_handler(SecondBrainError)
async def second_brain_error_handler(request: Request, exc: SecondBrainError) -> JSONResponse:
    """Render domain errors as structured JSON with a mapped status code."""
    log_exception(
        exc,
        level=logging.WARNING if get_http_status_code(exc) < 500 else logging.ERROR,
        extra_context={"path": str(request.url.path), "method": request.method},
    )
    return JSONResponse(
        status_code=get_http_status_code(exc),
        content=exc.to_dict(include_trace=DEBUG_MODE),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render anything else as a 500 with the same JSON shape."""
    log_exception(exc, extra_context={"path": str(request.url.path), "method": request.method})
    return JSONResponse(
        status_code=get_http_status_code(exc),
        content=format_exception_json(exc, include_trace=DEBUG_MODE),
    )


__all__ = ["app"]
