"""
Canvas: one editing session.

Owns the graph store and the port click state machine and is the only entry
point for UI actions.  Actions arrive as CanvasEvent values (a closed set of
CanvasAction kinds) and are handled synchronously, one at a time; derived
views (outline text, link segments) are recomputed from the current snapshot
on every call.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, List, Optional, Tuple

from ..compiler import synthesize
from .BlockLibrary import BlockTemplate, get_block_template
from .Geometry import LinkSegment, link_segments
from .GraphPrimitives import BlockGraph, BlockInstance, Connection, PortRef
from .PortInteraction import ClickResult, InteractionState, PortInteraction
from .Types import BlockKind

logger = logging.getLogger(__name__)

IDLE_STATUS = "Click an output port, then an input port, to form a link. Drag a node to reposition it."


class CanvasAction(Enum):
    PORT_CLICKED = auto()
    DRAG_DELTA = auto()
    ADD_NODE = auto()
    CLEAR_CONNECTIONS = auto()
    RESET = auto()


@dataclass(frozen=True)
class CanvasEvent:
    action: CanvasAction
    node_id: Optional[str] = None
    port: Optional[str] = None
    dx: float = 0.0
    dy: float = 0.0
    kind: Optional[BlockKind] = None

    @classmethod
    def port_clicked(cls, node_id: str, port: str) -> "CanvasEvent":
        return cls(CanvasAction.PORT_CLICKED, node_id=node_id, port=port)

    @classmethod
    def drag(cls, node_id: str, dx: float, dy: float) -> "CanvasEvent":
        return cls(CanvasAction.DRAG_DELTA, node_id=node_id, dx=dx, dy=dy)

    @classmethod
    def add_node(cls, kind: BlockKind) -> "CanvasEvent":
        return cls(CanvasAction.ADD_NODE, kind=kind)

    @classmethod
    def clear_connections(cls) -> "CanvasEvent":
        return cls(CanvasAction.CLEAR_CONNECTIONS)

    @classmethod
    def reset(cls) -> "CanvasEvent":
        return cls(CanvasAction.RESET)


ChangeListener = Callable[["Canvas", CanvasEvent], None]


class Canvas:
    def __init__(self, graph: Optional[BlockGraph] = None):
        self.graph = graph if graph is not None else BlockGraph()
        self.interaction = PortInteraction(self.graph)
        self._listeners: List[ChangeListener] = []

    # ------------------------------------------------------------------
    # Listener registration
    # ------------------------------------------------------------------

    def on_change(self, callback: ChangeListener) -> None:
        """Register a callback run after every handled action."""
        self._listeners.append(callback)

    def remove_listener(self, callback: ChangeListener) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def dispatch(self, event: CanvasEvent) -> Any:
        handled = True
        result: Any = None

        if event.action == CanvasAction.PORT_CLICKED:
            result = self._handle_port_click(event.node_id, event.port)
            handled = result is not None
        elif event.action == CanvasAction.DRAG_DELTA:
            result = handled = self.graph.move_node(event.node_id, event.dx, event.dy)
        elif event.action == CanvasAction.ADD_NODE:
            result = self.graph.add_node(get_block_template(event.kind))
        elif event.action == CanvasAction.CLEAR_CONNECTIONS:
            self.graph.clear_connections()
            self.interaction.cancel()
        elif event.action == CanvasAction.RESET:
            self.graph.reset()
            self.interaction.cancel()

        if handled:
            self._notify(event)
        return result

    def _handle_port_click(self, node_id: Optional[str], label: Optional[str]) -> Optional[ClickResult]:
        node = self.graph.get_node_by_id(node_id) if node_id else None
        port = node.template.get_port(label) if node and label else None
        if port is None:
            logger.debug(f"Click on unknown port '{node_id}.{label}' ignored")
            return None
        return self.interaction.port_clicked(node.id, port)

    def _notify(self, event: CanvasEvent) -> None:
        for cb in list(self._listeners):
            try:
                cb(self, event)
            except Exception:
                logger.exception(f"Canvas listener failed on {event.action.name}")

    # ------------------------------------------------------------------
    # Inbound actions
    # ------------------------------------------------------------------

    def port_clicked(self, node_id: str, port: str) -> Optional[ClickResult]:
        return self.dispatch(CanvasEvent.port_clicked(node_id, port))

    def drag(self, node_id: str, dx: float, dy: float) -> bool:
        return self.dispatch(CanvasEvent.drag(node_id, dx, dy))

    def add_node(self, kind) -> BlockInstance:
        if isinstance(kind, BlockTemplate):
            kind = kind.kind
        elif not isinstance(kind, BlockKind):
            kind = BlockKind.parse(kind)
        return self.dispatch(CanvasEvent.add_node(kind))

    def clear_connections(self) -> None:
        self.dispatch(CanvasEvent.clear_connections())

    def reset(self) -> None:
        self.dispatch(CanvasEvent.reset())

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------

    @property
    def pending(self) -> Optional[PortRef]:
        return self.interaction.pending

    @property
    def state(self) -> InteractionState:
        return self.interaction.state

    def snapshot(self) -> Tuple[Tuple[BlockInstance, ...], Tuple[Connection, ...]]:
        return self.graph.snapshot()

    def outline(self) -> str:
        return synthesize(*self.graph.snapshot())

    def links(self) -> List[LinkSegment]:
        return link_segments(*self.graph.snapshot())

    def status_message(self) -> str:
        pending = self.interaction.pending
        if pending is None:
            return IDLE_STATUS
        return f"Select an input port to connect from {pending.port}"
