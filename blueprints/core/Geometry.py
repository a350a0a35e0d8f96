"""
Port anchor geometry for the link-drawing layer.

Purely derived from a snapshot; nothing here is cached between renders and
none of it feeds the outline compiler.
"""
from __future__ import annotations

from typing import Dict, Iterable, List, NamedTuple

from .GraphPrimitives import BlockInstance, Connection, live_connections
from .Types import PortDirection

NODE_WIDTH = 240
PORT_VERTICAL_SPACING = 32
PORT_VERTICAL_OFFSET = 74


class Point(NamedTuple):
    x: float
    y: float


class LinkSegment(NamedTuple):
    start: Point   # output side of the source block
    end: Point     # input side of the target block


def anchor(node: BlockInstance, port_label: str, side: PortDirection) -> Point:
    index = node.template.port_index(port_label)
    x = node.x + (NODE_WIDTH if side == PortDirection.OUTPUT else 0)
    y = node.y + PORT_VERTICAL_OFFSET + index * PORT_VERTICAL_SPACING
    return Point(x, y)


def link_segments(nodes: Iterable[BlockInstance], connections: Iterable[Connection]) -> List[LinkSegment]:
    nodes_by_id: Dict[str, BlockInstance] = {n.id: n for n in nodes}

    segments = []
    for connection in live_connections(connections, nodes_by_id):
        source = nodes_by_id[connection.source.node_id]
        target = nodes_by_id[connection.target.node_id]
        segments.append(LinkSegment(
            anchor(source, connection.source.port, PortDirection.OUTPUT),
            anchor(target, connection.target.port, PortDirection.INPUT),
        ))
    return segments
