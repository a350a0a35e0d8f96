"""
FastAPI + Socket.IO server for the blueprint canvas.

Start with:
    python -m blueprints.server.main

Or via uvicorn directly:
    uvicorn blueprints.server.main:socket_app --port 3001 --reload
"""
from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from blueprints import __version__
from blueprints.server.config import settings
from blueprints.server.events.socket_server import create_socket_app
from blueprints.server.routes.canvas_routes import router

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

# ---------------------------------------------------------------------------
# FastAPI application
# ---------------------------------------------------------------------------

app = FastAPI(title="Blueprints API", version=__version__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router, prefix="/api")


@app.get("/health")
async def health() -> dict:
    return {"status": "ok"}


# ---------------------------------------------------------------------------
# Wrap with Socket.IO ASGI layer
# ---------------------------------------------------------------------------

# socket_app is the top-level ASGI app passed to uvicorn.
socket_app = create_socket_app(app, settings.cors_origins)


def main() -> None:
    import uvicorn

    uvicorn.run(
        "blueprints.server.main:socket_app",
        host=settings.host,
        port=settings.port,
        reload=settings.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
