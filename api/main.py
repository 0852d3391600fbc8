#!/usr/bin/env python3
"""
Bondgraph API - HTTP API layer for the Bondgraph friendship network.

This is the FastAPI application behind the network visualization frontend.
It serves:
- The friendship graph with derived 2nd and 3rd degree links
- Network statistics
- Profile and bond management
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bondgraph.errors import BondValidationError, MalformedEndpointError, RecordStoreError
from bondgraph.logging_config import configure_logging, get_logger

from .dependencies import authenticate_pb
from .settings import get_settings

# Configure unified logging format
# Format: 2026-01-06T14:05:52Z [api] LEVEL message
configure_logging(source="api")
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifecycle - startup and shutdown."""
    settings = get_settings()

    # Startup
    if not settings.skip_pb_auth:
        await authenticate_pb()
    else:
        logger.warning("Skipping PocketBase authentication (SKIP_PB_AUTH=true)")

    yield


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(title="Bondgraph API", description="Friendship network API", lifespan=lifespan)

    # Add exception handlers
    @app.exception_handler(BondValidationError)
    async def bond_validation_handler(request: Request, exc: BondValidationError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(RecordStoreError)
    async def record_store_handler(request: Request, exc: RecordStoreError) -> JSONResponse:
        logger.error(f"Record store failure on {request.url.path}: {exc}")
        return JSONResponse(status_code=502, content={"detail": str(exc)})

    @app.exception_handler(MalformedEndpointError)
    async def malformed_record_handler(request: Request, exc: MalformedEndpointError) -> JSONResponse:
        logger.error(f"Malformed record on {request.url.path}: {exc}")
        return JSONResponse(status_code=502, content={"detail": f"Malformed record in store: {exc}"})

    # Load settings
    settings = get_settings()

    # CORS configuration
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    # Register routers
    from .routers import bonds, people, social_graph

    app.include_router(social_graph.router)
    app.include_router(people.router)
    app.include_router(bonds.router)

    # Core endpoints (not in a router)
    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy", "service": "bondgraph-api"}

    return app


# Create app instance for uvicorn
app = create_app()
