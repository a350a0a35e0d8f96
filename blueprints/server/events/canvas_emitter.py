"""
CanvasEmitter: fan-out of canvas change events to registered listeners
(Socket.IO, loggers, tests).

Each event is a plain dict so it can be emitted over Socket.IO as-is:

    {"type": "CANVAS_CHANGED", "action": "DRAG_DELTA", "outline": "...", "ts": 1700000000000}
"""
from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, List, TYPE_CHECKING

if TYPE_CHECKING:
    from ...core.Canvas import Canvas, CanvasEvent

logger = logging.getLogger(__name__)


class CanvasEmitter:
    def __init__(self) -> None:
        self._listeners: List[Callable[[Dict[str, Any]], None]] = []

    # ------------------------------------------------------------------
    # Listener registration
    # ------------------------------------------------------------------

    def on_event(self, callback: Callable[[Dict[str, Any]], None]) -> None:
        """Register a callback that receives every emitted event."""
        self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[Dict[str, Any]], None]) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    # ------------------------------------------------------------------
    # Emit
    # ------------------------------------------------------------------

    def fire(self, payload: Dict[str, Any]) -> None:
        """Stamp the payload with a millisecond timestamp and broadcast it."""
        if "ts" not in payload:
            payload["ts"] = _now_ms()
        for cb in list(self._listeners):
            try:
                cb(payload)
            except Exception:
                logger.exception(f"Listener failed for {payload.get('type')} event")

    def canvas_changed(self, canvas: "Canvas", event: "CanvasEvent") -> None:
        """Canvas.on_change hook: recompute the outline and broadcast it."""
        self.fire(
            {
                "type": "CANVAS_CHANGED",
                "action": event.action.name,
                "outline": canvas.outline(),
            }
        )


# ---------------------------------------------------------------------------
# Module-level singleton
# ---------------------------------------------------------------------------

global_emitter = CanvasEmitter()


def _now_ms() -> int:
    return int(time.time() * 1000)
