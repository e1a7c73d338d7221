"""FastAPI application."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bookings_api import __version__
from bookings_api.api.routes import bookings, event_types, webhooks
from bookings_api.core.config import get_settings
from bookings_api.core.exceptions import APIException
from bookings_api.core.logging import get_logger
from bookings_api.storage.database.base import close_db

settings = get_settings()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """Application lifespan manager."""
    logger.info("application_starting", version=__version__)
    yield
    await close_db()
    logger.info("application_shutting_down")


app = FastAPI(
    title="Bookings API",
    description="Scheduling API with webhook notifications",
    version=__version__,
    lifespan=lifespan,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(bookings.router, prefix="/api")
app.include_router(event_types.router, prefix="/api")
app.include_router(webhooks.router, prefix="/api")


@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException) -> JSONResponse:
    """Render API exceptions as JSON."""
    if exc.status_code >= 500:
        logger.error("api_error", path=request.url.path, error=exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message, "details": exc.details},
    )


@app.get("/health")
async def health() -> dict:
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": __version__,
    }
