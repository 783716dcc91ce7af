"""
REST API routes: health check and owner-scoped todo CRUD.

Every /todos handler depends on ``get_current_identity`` first, so an
unauthenticated request is rejected before its body is read or any store
is touched.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from api.dependencies import get_stores, read_json_body
from auth.dependencies import get_current_identity
from auth.jwt import VerifiedIdentity
from database.helpers import create_todo, delete_todo, list_todos, update_todo
from database.session import Stores
from utils.schemas import TodoCreateRequest
from utils.validators import extract_todo_patch, parse_body

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health", tags=["health"])
async def health() -> Dict[str, Any]:
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/todos", tags=["todos"])
async def get_todos(
    identity: VerifiedIdentity = Depends(get_current_identity),
    stores: Stores = Depends(get_stores),
) -> Dict[str, Any]:
    """List the caller's todos in insertion order."""
    todos = list_todos(stores.todos, identity.user_id)
    return {
        "success": True,
        "data": [t.to_public() for t in todos],
        "count": len(todos),
    }


@router.post("/todos", tags=["todos"], status_code=status.HTTP_201_CREATED)
async def post_todo(
    identity: VerifiedIdentity = Depends(get_current_identity),
    body: Any = Depends(read_json_body),
    stores: Stores = Depends(get_stores),
) -> JSONResponse:
    req = parse_body(TodoCreateRequest, body)
    todo = create_todo(
        stores.todos,
        identity.user_id,
        title=req.title,
        completed=req.completed,
        location=req.location,
        photo_uri=req.photo_uri,
    )
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content={"success": True, "data": todo.to_public()},
    )


@router.patch("/todos/{todo_id}", tags=["todos"])
async def patch_todo(
    todo_id: str,
    identity: VerifiedIdentity = Depends(get_current_identity),
    body: Any = Depends(read_json_body),
    stores: Stores = Depends(get_stores),
) -> Dict[str, Any]:
    """
    Partial update.  Fields with the wrong type are ignored, and an
    unparseable body behaves like ``{}`` (only ``updatedAt`` moves).
    """
    changes = extract_todo_patch(body)
    todo = update_todo(stores.todos, identity.user_id, todo_id, changes)
    return {"success": True, "data": todo.to_public()}


@router.delete("/todos/{todo_id}", tags=["todos"])
async def remove_todo(
    todo_id: str,
    identity: VerifiedIdentity = Depends(get_current_identity),
    stores: Stores = Depends(get_stores),
) -> Dict[str, Any]:
    deleted = delete_todo(stores.todos, identity.user_id, todo_id)
    return {
        "success": True,
        "data": deleted.to_public(),
        "message": "Todo deleted",
    }
