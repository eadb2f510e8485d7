"""FastAPI application — entry point for the rcdesign backend.

Registers route modules, configures CORS and serves the health endpoint.

Environment:
  RCDESIGN_CORS_ORIGINS     — comma-separated allowed origins
                              (default: the Vite dev server)
  RCDESIGN_GEOMETRY_WORKERS — concurrent recompute threads (default 4)
  RCDESIGN_WING_SEGMENTS    — span stations per half wing (default 10)

Run with:  uvicorn rcdesign.main:app
"""

from __future__ import annotations

import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rcdesign.geometry.engine import GEOMETRY_WORKERS
from rcdesign.routes.generate import router as generate_router
from rcdesign.routes.info import router as info_router
from rcdesign.routes.websocket import router as websocket_router

logger = logging.getLogger("rcdesign")

VERSION = "0.1.0"

_DEFAULT_CORS_ORIGINS = "http://localhost:5173,http://127.0.0.1:5173"

CORS_ORIGINS: list[str] = [
    origin.strip()
    for origin in os.environ.get("RCDESIGN_CORS_ORIGINS", _DEFAULT_CORS_ORIGINS).split(",")
    if origin.strip()
]

app = FastAPI(title="rcdesign", version=VERSION)

# ---------------------------------------------------------------------------
# CORS middleware (frontend dev server by default)
# ---------------------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------------------------------------------------------------------------
# API route registration
# ---------------------------------------------------------------------------
app.include_router(generate_router)
app.include_router(info_router)
app.include_router(websocket_router)

logger.info("rcdesign %s: %d geometry worker(s), CORS %s", VERSION, GEOMETRY_WORKERS, CORS_ORIGINS)


@app.get("/health")
async def health() -> dict:
    """Health check endpoint."""
    return {"status": "ok", "version": VERSION}
