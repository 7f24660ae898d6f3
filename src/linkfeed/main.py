# src/linkfeed/main.py
"""Main entry point for the LinkFeed application."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.staticfiles import StaticFiles

from linkfeed.api.v1 import auth_router, posts_router, system_router
from linkfeed.core.errors import register_exception_handlers
from linkfeed.core.settings import settings
from linkfeed.db.session import check_connection, create_tables
from linkfeed.services.uploads import upload_root

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    # An unreachable database aborts startup.
    check_connection()
    if settings.auto_create_tables:
        create_tables()
    logger.info("%s %s started", settings.app_name, settings.app_version)
    yield


# Initialize FastAPI app
app = FastAPI(
    title="LinkFeed API",
    description="Posts, likes and comments for a small social feed",
    version=settings.app_version,
    lifespan=lifespan,
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

register_exception_handlers(app)

# Include API routers
app.include_router(auth_router, prefix=settings.api_prefix)
app.include_router(posts_router, prefix=settings.api_prefix)
app.include_router(system_router, prefix=settings.api_prefix)

# Uploaded images are served as static files.
app.mount(
    settings.upload_url_path,
    StaticFiles(directory=str(upload_root())),
    name="uploads",
)


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
        "description": "Posts, likes and comments for a small social feed",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("linkfeed.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
