from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from caption_genius.api.router import router as api_router
from caption_genius.bootstrap import bootstrap
from caption_genius.core.errors import CaptionGeniusError, ValidationError
from caption_genius.core.logging import RequestContextMiddleware, get_logger, log_event

logger = get_logger(__name__)

# Routes whose malformed bodies render as {"error": ...} 400s like any other
# rejected request instead of FastAPI's 422 detail list.
ERROR_SHAPED_VALIDATION_PATHS = frozenset({"/api/generate-caption"})


async def caption_genius_error_handler(request: Request, exc: CaptionGeniusError) -> JSONResponse:
    if exc.status_code >= 500:
        log_event(
            logger,
            "http.request.failed",
            level=logging.ERROR,
            path=request.url.path,
            error_type=type(exc).__name__,
            detail=exc.message,
        )
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


async def request_body_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    if request.url.path not in ERROR_SHAPED_VALIDATION_PATHS:
        return await request_validation_exception_handler(request, exc)

    errors = exc.errors()
    log_event(
        logger,
        "caption.generate.rejected",
        reason="RequestValidationError",
        status_code=400,
        error_types=[e.get("type") for e in errors] or None,
    )
    error = ValidationError("Invalid request body")
    return JSONResponse(status_code=error.status_code, content=error.to_payload())


def create_app() -> FastAPI:
    @asynccontextmanager
    async def lifespan(_: FastAPI):
        bootstrap()
        yield

    app = FastAPI(title="Caption Genius", version="0.1.0", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)
    app.add_exception_handler(CaptionGeniusError, caption_genius_error_handler)
    app.add_exception_handler(RequestValidationError, request_body_error_handler)
    app.include_router(api_router)
    return app


app = create_app()
