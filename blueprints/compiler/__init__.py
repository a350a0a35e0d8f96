"""
Blueprints Outline Compiler
===========================
Derives a readable, indented outline from the current canvas graph.

Pipeline:
    (nodes, connections)  →  [OutlineSynthesizer]  →  lines
    lines                 →  joined text, or PLACEHOLDER when empty

The result is a pure function of the snapshot; call it again after every
mutation instead of caching it.

Public API
----------
    from blueprints.compiler import synthesize

    text = synthesize(graph.nodes, graph.connections)
"""

from __future__ import annotations

from typing import Iterable, List, TYPE_CHECKING

from .synthesizer import OutlineSynthesizer

if TYPE_CHECKING:
    from ..core.GraphPrimitives import BlockInstance, Connection

PLACEHOLDER = "Connect ports to generate a stitched ABAP outline."


def outline_lines(
    nodes: Iterable["BlockInstance"],
    connections: Iterable["Connection"],
) -> List[str]:
    return OutlineSynthesizer(nodes, connections).build()


def synthesize(
    nodes: Iterable["BlockInstance"],
    connections: Iterable["Connection"],
) -> str:
    """
    Compile a canvas snapshot into outline text.

    Args:
        nodes:        Placed blocks, in insertion order.
        connections:  Connections, in the order they were added.

    Returns:
        One line per emitted row joined with newlines, or PLACEHOLDER when
        no block could be reached from a root.
    """
    lines = outline_lines(nodes, connections)
    return "\n".join(lines) if lines else PLACEHOLDER


__all__ = ["synthesize", "outline_lines", "PLACEHOLDER", "OutlineSynthesizer"]
