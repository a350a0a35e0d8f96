"""
CanvasState: the single canvas served by this process.

Route handlers talk to this object only.  Boundary input (kind names from the
request body) is validated here; ValueError is turned into a 400 response by
the routes.
"""
from __future__ import annotations

import logging
from typing import Optional

from ..core.BlockLibrary import get_block_template
from ..core.Canvas import Canvas
from ..core.GraphPrimitives import BlockInstance
from ..core.PortInteraction import ClickResult
from .events.canvas_emitter import global_emitter

logger = logging.getLogger(__name__)


class CanvasState:
    """Holds the live canvas and wires its change hook to the emitter."""

    def __init__(self) -> None:
        self.canvas = Canvas()
        self.canvas.on_change(global_emitter.canvas_changed)

    def add_node(self, kind: str) -> BlockInstance:
        template = get_block_template(kind)  # ValueError on unknown kind
        node = self.canvas.add_node(template)
        logger.info(f"Added block '{node.id}' ({template.title})")
        return node

    def move_node(self, node_id: str, dx: float, dy: float) -> bool:
        return self.canvas.drag(node_id, dx, dy)

    def click_port(self, node_id: str, port: str) -> Optional[ClickResult]:
        return self.canvas.port_clicked(node_id, port)

    def clear_connections(self) -> None:
        self.canvas.clear_connections()
        logger.info("Connections cleared")

    def reset(self) -> None:
        self.canvas.reset()
        logger.info("Canvas reset to starter graph")


canvas_state = CanvasState()
