"""
Block Library
=============
The fixed catalog of block kinds a user can place on the canvas.

Templates are process-wide reference data: every placed BlockInstance holds a
reference to one of the objects in BLOCK_LIBRARY, never a copy.  Port order
within a template is significant; it drives the vertical stacking used by
Geometry and, together with the label, addresses connection endpoints.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from .Types import BlockKind, PortDirection


# ── Port ─────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class PortSpec:
    label: str
    direction: PortDirection

    def is_input(self) -> bool:
        return self.direction == PortDirection.INPUT

    def is_output(self) -> bool:
        return self.direction == PortDirection.OUTPUT


# ── Template ─────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class BlockTemplate:
    kind: BlockKind
    title: str
    description: str
    ports: Tuple[PortSpec, ...] = ()

    def __post_init__(self):
        labels = [p.label for p in self.ports]
        if len(labels) != len(set(labels)):
            raise ValueError(f"Duplicate port label on template '{self.title}'")

    def get_port(self, label: str) -> Optional[PortSpec]:
        return next((p for p in self.ports if p.label == label), None)

    def port_index(self, label: str) -> int:
        # -1 when absent, same as a failed list search
        for i, port in enumerate(self.ports):
            if port.label == label:
                return i
        return -1


def _in(label: str) -> PortSpec:
    return PortSpec(label, PortDirection.INPUT)


def _out(label: str) -> PortSpec:
    return PortSpec(label, PortDirection.OUTPUT)


# ── Catalog ──────────────────────────────────────────────────────────────────

_TEMPLATES = (
    BlockTemplate(
        BlockKind.START, "START-OF-SELECTION", "Entry point",
        (_out("Event"), _out("Output")),
    ),
    BlockTemplate(
        BlockKind.SELECT, "SELECT", "Read table",
        (_in("Rows"), _in("Fields"), _out("Result")),
    ),
    BlockTemplate(
        BlockKind.LOOP, "LOOP AT", "Iterate internal table",
        (_in("Table"), _out("Row"), _out("End")),
    ),
    BlockTemplate(
        BlockKind.WRITE, "WRITE", "Display output",
        (_in("Value"),),
    ),
    BlockTemplate(
        BlockKind.IF, "IF / ELSE", "Branch on condition",
        (_in("Condition"), _out("Then"), _out("Else")),
    ),
)

BLOCK_LIBRARY: Mapping[BlockKind, BlockTemplate] = MappingProxyType(
    {t.kind: t for t in _TEMPLATES}
)


def get_block_template(kind) -> BlockTemplate:
    """Look up a template by BlockKind or by its string value."""
    if not isinstance(kind, BlockKind):
        kind = BlockKind.parse(kind)
    return BLOCK_LIBRARY[kind]


def list_block_templates() -> Tuple[BlockTemplate, ...]:
    return _TEMPLATES
