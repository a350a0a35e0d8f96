"""
Outline Compiler: Block Snippet Templates
==========================================
An OutlineTemplate provides two emission hooks:

  emit_open(node, writer)
      Emits the block's own line at the writer's current indent.  Called
      before any downstream block is visited.

  emit_close(node, writer)
      Emits scope-closing lines at the same indent as the opening line.
      Called after every downstream block has been emitted.

Closing lines depend only on the block's kind, never on whether it has
downstream blocks.

Adding a new block kind
-----------------------
1. Instantiate SnippetTemplate (or subclass OutlineTemplate).
2. Register: TEMPLATE_REGISTRY[BlockKind.MY_KIND] = SnippetTemplate(...)

Kinds without a registered template fall back to DefaultTemplate, which
emits the block's title.
"""

from __future__ import annotations

from typing import Dict, List, Sequence, TYPE_CHECKING

from ..core.Types import BlockKind

if TYPE_CHECKING:
    from ..core.GraphPrimitives import BlockInstance

INDENT = "  "


# ── Code writer ───────────────────────────────────────────────────────────────

class CodeWriter:
    """Indented line accumulator, two spaces per level."""

    def __init__(self, indent: int = 0):
        self._lines: List[str] = []
        self._indent = indent

    def writeln(self, line: str) -> "CodeWriter":
        self._lines.append(INDENT * self._indent + line)
        return self

    def push(self) -> "CodeWriter":
        self._indent += 1
        return self

    def pop(self) -> "CodeWriter":
        self._indent = max(0, self._indent - 1)
        return self

    def lines(self) -> List[str]:
        return self._lines


# ── Base template ─────────────────────────────────────────────────────────────

class OutlineTemplate:
    def emit_open(self, node: "BlockInstance", writer: CodeWriter) -> None:
        writer.writeln(node.title)

    def emit_close(self, node: "BlockInstance", writer: CodeWriter) -> None:
        pass


class SnippetTemplate(OutlineTemplate):
    """Fixed opening line plus a fixed (possibly empty) list of closing lines."""

    def __init__(self, opening: str, closing: Sequence[str] = ()):
        self.opening = opening
        self.closing = tuple(closing)

    def emit_open(self, node: "BlockInstance", writer: CodeWriter) -> None:
        writer.writeln(self.opening)

    def emit_close(self, node: "BlockInstance", writer: CodeWriter) -> None:
        for line in self.closing:
            writer.writeln(line)


# ── Registry ──────────────────────────────────────────────────────────────────

_DEFAULT_TEMPLATE = OutlineTemplate()

TEMPLATE_REGISTRY: Dict[BlockKind, OutlineTemplate] = {
    BlockKind.START:  SnippetTemplate("START-OF-SELECTION."),
    BlockKind.SELECT: SnippetTemplate("SELECT * FROM mara INTO TABLE @DATA(lt_rows)."),
    BlockKind.LOOP:   SnippetTemplate("LOOP AT lt_rows INTO DATA(ls_row).", ["ENDLOOP."]),
    BlockKind.IF:     SnippetTemplate("IF ls_row IS NOT INITIAL.", ["ELSE.", "ENDIF."]),
    BlockKind.WRITE:  SnippetTemplate("WRITE / ls_row."),
}


def get_template(kind: BlockKind) -> OutlineTemplate:
    return TEMPLATE_REGISTRY.get(kind, _DEFAULT_TEMPLATE)
