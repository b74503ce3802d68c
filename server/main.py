"""
Itinera FastAPI application.

Entry point for the API server.
"""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from server.config import configure_logging, settings
from server.routes import render as render_routes
from server.routes import ws as ws_routes
from server.services.layouts import preload_layouts


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for FastAPI application.

    Startup: configure logging, import every configured template module.
    """
    configure_logging()
    loaded = await preload_layouts()
    print(f"Layouts loaded: {', '.join(loaded) or 'none'} ({settings.ENVIRONMENT})")

    yield


app = FastAPI(
    title="Itinera",
    docs_url=None,
    redoc_url=None,
    lifespan=lifespan,
)

# Register routes
app.include_router(render_routes.router)
app.include_router(ws_routes.router)


@app.get("/health")
async def health():
    """Health check endpoint for uptime monitoring."""
    return {"status": "ok"}
