# ============================================================================
# EESHIM - MAIN APPLICATION
# ============================================================================
# STATUS: Core - FastAPI application entry point
# PURPOSE: HTTP surface for invoking shims
# CREATED: 19 OCT 2026
# ============================================================================
"""
EEShim Main Application

FastAPI application that exposes the shim registry over HTTP.

Usage:
    uvicorn main:app --host 0.0.0.0 --port 8000
"""

import os
from contextlib import asynccontextmanager

from fastapi import FastAPI

from __version__ import __version__, BUILD_DATE
from api.routes import router
from core.logging import configure_logging, get_logger, ComponentType
from shims.registry import list_shims, preload_shims

configure_logging(
    level=os.environ.get("LOG_LEVEL", "INFO"),
    json_output=os.environ.get("LOG_FORMAT", "").lower() == "json",
)
logger = get_logger(__name__, ComponentType.API)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Loads the configured shims on startup.
    """
    logger.info(f"Starting EEShim v{__version__} (Build {BUILD_DATE})")

    missing = preload_shims()
    logger.info(f"Preloaded {len(list_shims())} shims" + (f", missing {missing}" if missing else ""))

    yield

    logger.info("EEShim stopped")


app = FastAPI(
    title="EEShim",
    description="Named shim operations with a uniform success/fail protocol",
    version=__version__,
    lifespan=lifespan,
)

app.include_router(router, prefix="/api/v1")


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "service": "EEShim",
        "version": __version__,
        "build_date": BUILD_DATE,
        "status": "running",
    }


@app.get("/livez")
async def livez():
    """Liveness check."""
    return {"status": "alive"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host=os.environ.get("HOST", "0.0.0.0"),
        port=int(os.environ.get("PORT", "8000")),
    )
