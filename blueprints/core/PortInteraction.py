"""
Port click state machine.

    IDLE --click output--> ARMED(source)
    ARMED --click output (any block)--> ARMED(new source)
    ARMED --click input, same block--> IDLE
    ARMED --click input, other block--> add connection, IDLE
    IDLE --click input--> IDLE

Clicks are handled synchronously, one at a time.
"""
from __future__ import annotations

import logging
from enum import Enum, auto
from typing import NamedTuple, Optional

from .BlockLibrary import PortSpec
from .GraphPrimitives import BlockGraph, Connection, PortRef

logger = logging.getLogger(__name__)


class InteractionState(Enum):
    IDLE = auto()
    ARMED = auto()


class ClickResult(NamedTuple):
    state: InteractionState
    connection: Optional[Connection] = None   # the connection offered to the store, if any
    added: bool = False                       # False for duplicates


class PortInteraction:
    def __init__(self, graph: BlockGraph):
        self.graph = graph
        self._pending: Optional[PortRef] = None

    @property
    def state(self) -> InteractionState:
        return InteractionState.IDLE if self._pending is None else InteractionState.ARMED

    @property
    def pending(self) -> Optional[PortRef]:
        return self._pending

    def is_armed(self) -> bool:
        return self._pending is not None

    def cancel(self) -> None:
        self._pending = None

    def port_clicked(self, node_id: str, port: PortSpec) -> ClickResult:
        if port.is_output():
            # last click wins, pending selections never stack
            self._pending = PortRef(node_id, port.label)
            logger.debug(f"Armed output {self._pending!r}")
            return ClickResult(InteractionState.ARMED)

        if self._pending is None:
            return ClickResult(InteractionState.IDLE)

        source = self._pending
        self._pending = None

        if source.node_id == node_id:
            logger.debug(f"Input on armed block '{node_id}', selection cancelled")
            return ClickResult(InteractionState.IDLE)

        connection = Connection(source, PortRef(node_id, port.label))
        added = self.graph.add_connection(connection)
        return ClickResult(InteractionState.IDLE, connection, added)
