"""
Canvas serializer.

Converts core objects into JSON-safe dicts for the browser front end.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from ...core.BlockLibrary import BlockTemplate, PortSpec
from ...core.Canvas import Canvas
from ...core.Geometry import LinkSegment
from ...core.GraphPrimitives import BlockInstance, Connection, PortRef

# ── Wire shapes (dicts, not TypedDicts, for easy JSON serialisation) ──────────
# SerializedPort keys:       label, direction
# SerializedTemplate keys:   kind, title, description, ports
# SerializedNode keys:       id, kind, title, description, x, y, ports, pending
# SerializedConnection keys: id, source {nodeId, port}, target {nodeId, port}
# SerializedLink keys:       from {x, y}, to {x, y}
# SerializedCanvas keys:     nodes, connections, links, pending, status, outline


def _serialize_port(port: PortSpec) -> Dict[str, Any]:
    return {"label": port.label, "direction": port.direction.value}


def _serialize_ref(ref: Optional[PortRef]) -> Optional[Dict[str, Any]]:
    if ref is None:
        return None
    return {"nodeId": ref.node_id, "port": ref.port}


def serialize_template(template: BlockTemplate) -> Dict[str, Any]:
    return {
        "kind": template.kind.value,
        "title": template.title,
        "description": template.description,
        "ports": [_serialize_port(p) for p in template.ports],
    }


def serialize_node(node: BlockInstance, pending: Optional[PortRef] = None) -> Dict[str, Any]:
    return {
        "id": node.id,
        "kind": node.kind.value,
        "title": node.template.title,
        "description": node.template.description,
        "x": node.x,
        "y": node.y,
        "ports": [_serialize_port(p) for p in node.template.ports],
        # the UI highlights the armed output on this block
        "pending": pending is not None and pending.node_id == node.id,
    }


def serialize_connection(connection: Connection) -> Dict[str, Any]:
    s, t = connection.source, connection.target
    return {
        "id": f"{s.node_id}:{s.port}→{t.node_id}:{t.port}",
        "source": _serialize_ref(s),
        "target": _serialize_ref(t),
    }


def serialize_link(link: LinkSegment) -> Dict[str, Any]:
    return {
        "from": {"x": link.start.x, "y": link.start.y},
        "to": {"x": link.end.x, "y": link.end.y},
    }


# ── Public API ─────────────────────────────────────────────────────────────────

def serialize_canvas(canvas: Canvas) -> Dict[str, Any]:
    """Serialize the whole canvas, derived views included."""
    nodes, connections = canvas.snapshot()
    pending = canvas.pending
    return {
        "nodes": [serialize_node(n, pending) for n in nodes],
        "connections": [serialize_connection(c) for c in connections],
        "links": [serialize_link(link) for link in canvas.links()],
        "pending": _serialize_ref(pending),
        "status": canvas.status_message(),
        "outline": canvas.outline(),
    }
