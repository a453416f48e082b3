# src/news_vote/main.py
"""Main entry point for the News Vote application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from news_vote.api.v1 import (
    admin_router,
    articles_router,
    auth_router,
    categories_router,
    comments_router,
    rankings_router,
    short_news_router,
    users_router,
    votes_router,
)
from news_vote.core.errors import NewsVoteError, ValidationError
from news_vote.core.messages import message_for, resolve_locale
from news_vote.core.settings import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="News Vote API",
    description="Binary-choice news polls with points and a leaderboard",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)


def _error_response(request: Request, status_code: int, code: str, detail: object) -> JSONResponse:
    locale = resolve_locale(request.headers.get("accept-language"))
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(
            {"detail": detail, "code": code, "message": message_for(code, locale)}
        ),
    )


@app.exception_handler(NewsVoteError)
async def handle_domain_error(request: Request, exc: NewsVoteError) -> JSONResponse:
    """Render domain errors as ``{detail, code, message}``."""
    return _error_response(request, exc.status_code, exc.code, exc.detail)


@app.exception_handler(RequestValidationError)
async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render malformed requests with the same envelope as domain validation errors."""
    return _error_response(request, ValidationError.status_code, ValidationError.code, exc.errors())


_HTTP_CODES = {401: "unauthorized", 403: "forbidden", 404: "not_found", 429: "limit_exceeded"}


@app.exception_handler(StarletteHTTPException)
async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Give framework-raised errors (unknown routes and the like) the same envelope."""
    code = _HTTP_CODES.get(exc.status_code, "error")
    return _error_response(request, exc.status_code, code, exc.detail)


# Include API routers
app.include_router(auth_router, prefix="/api/v1")
app.include_router(articles_router, prefix="/api/v1")
app.include_router(votes_router, prefix="/api/v1")
app.include_router(comments_router, prefix="/api/v1")
app.include_router(rankings_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")
app.include_router(categories_router, prefix="/api/v1")
app.include_router(short_news_router, prefix="/api/v1")
app.include_router(admin_router, prefix="/api/v1")


@app.on_event("startup")
async def on_startup() -> None:
    logger.info("%s %s starting", settings.app_name, settings.app_version)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Binary-choice news polls with points and a leaderboard",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("news_vote.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
