"""
Outline Compiler: Graph Walk
============================
Turns a (nodes, connections) snapshot into indented outline lines.

    roots      every block with no incoming connection, in node order
    adjacency  downstream block ids per block, in connection order
    walk       depth-first from each root; a block is emitted once, on the
               first path that reaches it, so fan-in and cycles terminate

Blocks reachable only through a cycle have no root and are never emitted.
Connections with a missing endpoint block are ignored.

The walk keeps its own frame stack, so chain length is not bounded by the
interpreter's recursion limit.
"""

from __future__ import annotations

import logging
from collections import Counter, defaultdict
from typing import Dict, Iterable, Iterator, List, Set, Tuple

from ..core.GraphPrimitives import BlockInstance, Connection, live_connections
from .templates import CodeWriter, get_template

logger = logging.getLogger(__name__)


class OutlineSynthesizer:
    def __init__(self, nodes: Iterable[BlockInstance], connections: Iterable[Connection]):
        self.nodes: List[BlockInstance] = list(nodes)
        self.nodes_by_id: Dict[str, BlockInstance] = {n.id: n for n in self.nodes}
        self.connections: List[Connection] = live_connections(connections, self.nodes_by_id)

        self.adjacency: Dict[str, List[str]] = defaultdict(list)
        for c in self.connections:
            self.adjacency[c.from_node_id].append(c.to_node_id)

        self.in_degree: Counter = Counter(c.to_node_id for c in self.connections)

    def roots(self) -> List[str]:
        return [n.id for n in self.nodes if self.in_degree[n.id] == 0]

    def build(self) -> List[str]:
        writer = CodeWriter()
        visited: Set[str] = set()

        for root_id in self.roots():
            if root_id not in visited:
                self._walk(root_id, writer, visited)

        logger.debug(f"Outline: {len(writer.lines())} lines from {len(visited)} of {len(self.nodes)} blocks")
        return writer.lines()

    def _walk(self, root_id: str, writer: CodeWriter, visited: Set[str]) -> None:
        # Each frame: (block id, iterator over its remaining neighbors)
        stack: List[Tuple[str, Iterator[str]]] = [self._open(root_id, writer, visited)]

        while stack:
            node_id, neighbors = stack[-1]
            for neighbor in neighbors:
                if neighbor not in visited:
                    stack.append(self._open(neighbor, writer, visited))
                    break
            else:
                stack.pop()
                self._close(node_id, writer)

    def _open(self, node_id: str, writer: CodeWriter, visited: Set[str]) -> Tuple[str, Iterator[str]]:
        visited.add(node_id)
        node = self.nodes_by_id[node_id]
        get_template(node.kind).emit_open(node, writer)
        writer.push()
        return node_id, iter(self.adjacency.get(node_id, []))

    def _close(self, node_id: str, writer: CodeWriter) -> None:
        writer.pop()
        node = self.nodes_by_id[node_id]
        get_template(node.kind).emit_close(node, writer)
