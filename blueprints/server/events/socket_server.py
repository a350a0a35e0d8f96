"""
Socket.IO server for live canvas updates.

Uses python-socketio in ASGI mode so it can wrap FastAPI.
`create_socket_app(fastapi_app)` returns the composite ASGI application to
pass to uvicorn.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional, Set

import socketio

from .canvas_emitter import global_emitter

logger = logging.getLogger(__name__)

# Emits scheduled but not yet finished. The loop only keeps weak references
# to tasks, so they are held here until done.
_pending_emits: Set[asyncio.Task] = set()

# The emitter listener of the most recently created app; replaced, not
# stacked, when create_socket_app is called again.
_forwarder: Optional[Callable[[Dict[str, Any]], None]] = None


def create_sio(cors_origins: List[str]) -> socketio.AsyncServer:
    origins: Any = "*" if cors_origins == ["*"] else cors_origins
    return socketio.AsyncServer(
        async_mode="asgi",
        cors_allowed_origins=origins,
        logger=False,
        engineio_logger=False,
    )


def _emit_done(task: asyncio.Task) -> None:
    _pending_emits.discard(task)
    if not task.cancelled() and task.exception() is not None:
        logger.error("Socket emit failed", exc_info=task.exception())


def create_socket_app(fastapi_app: Any, cors_origins: List[str]) -> socketio.ASGIApp:
    """Wrap *fastapi_app* inside a Socket.IO ASGI application."""
    global _forwarder

    sio = create_sio(cors_origins)

    # ------------------------------------------------------------------
    # Emitter fan-out: global_emitter → Socket.IO "canvas" event
    # ------------------------------------------------------------------

    def _on_event(event: Dict[str, Any]) -> None:
        # Called synchronously from a request handler; schedule the async
        # emit on the running loop.
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug(f"No running loop, {event.get('type')} not broadcast")
            return
        task = loop.create_task(sio.emit("canvas", event))
        _pending_emits.add(task)
        task.add_done_callback(_emit_done)

    if _forwarder is not None:
        global_emitter.remove_listener(_forwarder)
    _forwarder = _on_event
    global_emitter.on_event(_on_event)

    @sio.event
    async def connect(sid: str, environ: dict) -> None:
        logger.info(f"Socket client connected: {sid}")

    @sio.event
    async def disconnect(sid: str) -> None:
        logger.info(f"Socket client disconnected: {sid}")

    return socketio.ASGIApp(sio, other_asgi_app=fastapi_app)
