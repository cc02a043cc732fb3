# src/marketchat/main.py
"""Main entry point for the messaging service."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from marketchat.api.v1 import (
    blocks_router,
    conversations_router,
    messages_router,
)
from marketchat.core.errors import MessagingError, TransientError, ValidationError
from marketchat.core.settings import settings

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Marketchat API",
    description="Buyer and listing-owner messaging for the book marketplace",
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

# Include API routers
app.include_router(messages_router, prefix="/api/v1")
app.include_router(conversations_router, prefix="/api/v1")
app.include_router(blocks_router, prefix="/api/v1")


@app.exception_handler(MessagingError)
async def messaging_error_handler(request: Request, exc: MessagingError) -> JSONResponse:
    """Render messaging failures as typed error results."""
    if isinstance(exc, TransientError):
        logger.warning("%s %s failed transiently: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"error": exc.to_payload()})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render malformed requests as validation errors."""
    problems = []
    for error in exc.errors():
        # loc starts with the request part: body, query, path or header.
        location = ".".join(str(part) for part in tuple(error.get("loc", ()))[1:])
        problems.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    failure = ValidationError("; ".join(problems) or "invalid request")
    return JSONResponse(status_code=failure.status_code, content={"error": failure.to_payload()})


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
        "description": "Buyer and listing-owner messaging for the book marketplace",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("marketchat.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
