"""
Canvas REST routes.

All routes are mounted under /api by main.py.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import APIRouter, HTTPException, Response
from pydantic import BaseModel, Field

from ...compiler import synthesize
from ...core.BlockLibrary import list_block_templates
from ..serializers.canvas_serializer import (
    serialize_canvas,
    serialize_node,
    serialize_template,
)
from ..state import canvas_state

logger = logging.getLogger(__name__)

router = APIRouter()


# ── GET /templates ────────────────────────────────────────────────────────────

@router.get("/templates")
async def get_templates() -> List[Dict[str, Any]]:
    return [serialize_template(t) for t in list_block_templates()]


# ── GET /canvas ───────────────────────────────────────────────────────────────

@router.get("/canvas")
async def get_canvas() -> Dict[str, Any]:
    return serialize_canvas(canvas_state.canvas)


# ── GET /canvas/outline ───────────────────────────────────────────────────────

@router.get("/canvas/outline")
async def get_outline() -> Dict[str, Any]:
    nodes, connections = canvas_state.canvas.snapshot()
    return {"outline": synthesize(nodes, connections)}


# ── POST /canvas/nodes ────────────────────────────────────────────────────────

class AddNodeBody(BaseModel):
    kind: str


@router.post("/canvas/nodes", status_code=201)
async def add_node(body: AddNodeBody) -> Dict[str, Any]:
    try:
        node = canvas_state.add_node(body.kind)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return serialize_node(node, canvas_state.canvas.pending)


# ── POST /canvas/nodes/:nodeId/move ───────────────────────────────────────────

class MoveBody(BaseModel):
    dx: float = Field(allow_inf_nan=False)
    dy: float = Field(allow_inf_nan=False)


@router.post("/canvas/nodes/{node_id}/move")
async def move_node(node_id: str, body: MoveBody) -> Dict[str, Any]:
    # unknown ids are a no-op, not an error
    canvas_state.move_node(node_id, body.dx, body.dy)
    return serialize_canvas(canvas_state.canvas)


# ── POST /canvas/ports/click ──────────────────────────────────────────────────

class PortClickBody(BaseModel):
    nodeId: str
    port: str


@router.post("/canvas/ports/click")
async def click_port(body: PortClickBody) -> Dict[str, Any]:
    result = canvas_state.click_port(body.nodeId, body.port)
    pending = canvas_state.canvas.pending
    return {
        "pending": {"nodeId": pending.node_id, "port": pending.port} if pending else None,
        "connectionAdded": bool(result and result.added),
        "status": canvas_state.canvas.status_message(),
    }


# ── DELETE /canvas/connections ────────────────────────────────────────────────

@router.delete("/canvas/connections", status_code=204)
async def clear_connections() -> Response:
    canvas_state.clear_connections()
    return Response(status_code=204)


# ── POST /canvas/reset ────────────────────────────────────────────────────────

@router.post("/canvas/reset")
async def reset_canvas() -> Dict[str, Any]:
    canvas_state.reset()
    return serialize_canvas(canvas_state.canvas)
