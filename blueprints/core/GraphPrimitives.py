from __future__ import annotations

import itertools
import logging
import math
from typing import Container, Dict, Iterable, List, NamedTuple, Optional, Tuple

from .BlockLibrary import BlockTemplate, get_block_template
from .Types import BlockKind

logger = logging.getLogger(__name__)

# Canvas bounds. Positions are clamped into [GRID_PADDING, MAX_*] on each axis.
GRID_PADDING = 18
MAX_X = 1200
MAX_Y = 720

# Cascade step for freshly added blocks
CASCADE_STEP = 120
CASCADE_ROWS = 3


def clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


# A port address: (block id, port label)
class PortRef(NamedTuple):
    node_id: str
    port: str

    def __repr__(self):
        return f"{self.node_id}.{self.port}"


# Connections are plain tuples so they hash and compare by value;
# the store relies on that for duplicate detection.
class Connection(NamedTuple):
    source: PortRef   # output port
    target: PortRef   # input port

    @classmethod
    def between(cls, from_node_id: str, from_port: str, to_node_id: str, to_port: str) -> "Connection":
        return cls(PortRef(from_node_id, from_port), PortRef(to_node_id, to_port))

    @property
    def from_node_id(self) -> str:
        return self.source.node_id

    @property
    def to_node_id(self) -> str:
        return self.target.node_id

    def __repr__(self):
        return f"Connection({self.source!r} -> {self.target!r})"


def live_connections(connections: Iterable[Connection], node_ids: Container[str]) -> List[Connection]:
    """Connections whose two endpoint blocks are both in *node_ids*."""
    return [c for c in connections if c.from_node_id in node_ids and c.to_node_id in node_ids]


class BlockInstance:
    """A template placed on the canvas. Only the position ever changes."""

    def __init__(self, id: str, template: BlockTemplate, x: float, y: float):
        self.id = id
        self.template = template
        self.x = x
        self.y = y

    @property
    def kind(self) -> BlockKind:
        return self.template.kind

    @property
    def title(self) -> str:
        return self.template.title

    def __repr__(self):
        return f"BlockInstance({self.id}, {self.kind.value}, x={self.x}, y={self.y})"


# ── Starter graph ────────────────────────────────────────────────────────────
# The known good configuration restored by BlockGraph.reset().

STARTER_NODES: Tuple[Tuple[str, BlockKind, float, float], ...] = (
    ("entry",  BlockKind.START,  GRID_PADDING, GRID_PADDING),
    ("select", BlockKind.SELECT, 280, 140),
    ("loop",   BlockKind.LOOP,   560, 82),
    ("write",  BlockKind.WRITE,  860, 120),
)

STARTER_CONNECTIONS: Tuple[Connection, ...] = (
    Connection.between("entry",  "Output", "select", "Rows"),
    Connection.between("select", "Result", "loop",   "Table"),
    Connection.between("loop",   "Row",    "write",  "Value"),
)


class BlockGraph:
    """
    The graph store: placed blocks in insertion order plus the ordered set of
    connections between them.

    Every public mutation runs to completion before returning, so observers
    never see a half-applied action.
    """

    def __init__(self, seed: bool = True):
        self._nodes: Dict[str, BlockInstance] = {}
        self._connections: List[Connection] = []
        # Never rewound, not even by reset(), so ids are not reused
        self._id_counter = itertools.count(1)

        if seed:
            self._seed_starter()

    # ── Queries ─────────────────────────────────────────────────────────────

    @property
    def nodes(self) -> Tuple[BlockInstance, ...]:
        return tuple(self._nodes.values())

    @property
    def connections(self) -> Tuple[Connection, ...]:
        return tuple(self._connections)

    def get_node_by_id(self, node_id: str) -> Optional[BlockInstance]:
        return self._nodes.get(node_id)

    def live_connections(self) -> List[Connection]:
        return live_connections(self._connections, self._nodes)

    def snapshot(self) -> Tuple[Tuple[BlockInstance, ...], Tuple[Connection, ...]]:
        """Read-only view for consumers; dangling connections are left out."""
        return self.nodes, tuple(self.live_connections())

    # ── Mutations ───────────────────────────────────────────────────────────

    def add_node(self, template: BlockTemplate) -> BlockInstance:
        count = len(self._nodes)
        x = clamp(GRID_PADDING + count * CASCADE_STEP, GRID_PADDING, MAX_X)
        y = clamp(GRID_PADDING + (count % CASCADE_ROWS) * CASCADE_STEP, GRID_PADDING, MAX_Y)

        node = BlockInstance(self._new_id(template.kind), template, x, y)
        self._nodes[node.id] = node
        logger.debug(f"Added block '{node.id}' at ({x}, {y})")
        return node

    def move_node(self, node_id: str, dx: float, dy: float) -> bool:
        node = self._nodes.get(node_id)
        if node is None:
            logger.debug(f"move_node: unknown block '{node_id}', ignored")
            return False
        if not (math.isfinite(dx) and math.isfinite(dy)):
            logger.debug(f"move_node: non-finite delta ({dx}, {dy}) for '{node_id}' ignored")
            return False

        node.x = clamp(node.x + dx, GRID_PADDING, MAX_X)
        node.y = clamp(node.y + dy, GRID_PADDING, MAX_Y)
        return True

    def add_connection(self, candidate: Connection) -> bool:
        # Directions are not checked here; the port state machine only ever
        # offers output -> input pairs.
        if candidate in self._connections:
            logger.debug(f"Duplicate {candidate!r} ignored")
            return False

        self._connections.append(candidate)
        logger.debug(f"Added {candidate!r}")
        return True

    def clear_connections(self) -> None:
        self._connections.clear()

    def reset(self) -> None:
        self._nodes.clear()
        self._connections.clear()
        self._seed_starter()
        logger.debug("Canvas graph reset to starter configuration")

    # ── Internals ───────────────────────────────────────────────────────────

    def _new_id(self, kind: BlockKind) -> str:
        while True:
            candidate = f"{kind.value}-{next(self._id_counter)}"
            if candidate not in self._nodes:
                return candidate

    def _seed_starter(self) -> None:
        for node_id, kind, x, y in STARTER_NODES:
            self._nodes[node_id] = BlockInstance(node_id, get_block_template(kind), x, y)
        self._connections.extend(STARTER_CONNECTIONS)
