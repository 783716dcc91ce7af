"""
Database helper functions: credential lookups and owner-scoped todo CRUD.

Every todo helper takes the caller's verified ``owner_id`` and filters on
``id == todo_id AND user_id == owner_id``.  A todo owned by someone else is
reported exactly like one that does not exist.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Dict, List, Optional

from api.errors import ConflictError, NotFoundError
from database.models import Location, TodoRecord, UserRecord, utc_now
from database.store import KeyValueStore

logger = logging.getLogger(__name__)


def _new_id() -> str:
    return str(uuid.uuid4())


# ── Credential store ───────────────────────────────────────────────────


def get_user_by_email(users: KeyValueStore[UserRecord], email: str) -> Optional[UserRecord]:
    """Exact (case-sensitive) email lookup."""
    return users.get(email)


def create_user(
    users: KeyValueStore[UserRecord],
    email: str,
    password_hash: str,
) -> UserRecord:
    """Persist a new identity.  Raises ``ConflictError`` if the email is taken."""
    if email in users:
        raise ConflictError()

    now = utc_now()
    user = UserRecord(
        id=_new_id(),
        email=email,
        password_hash=password_hash,
        created_at=now,
        updated_at=now,
    )
    users.put(email, user)
    logger.info("Created user %s", user.id)
    return user


# ── Resource store (owner-scoped) ──────────────────────────────────────


def list_todos(todos: KeyValueStore[TodoRecord], owner_id: str) -> List[TodoRecord]:
    return todos.find(lambda t: t.user_id == owner_id)


def create_todo(
    todos: KeyValueStore[TodoRecord],
    owner_id: str,
    title: str,
    completed: bool = False,
    location: Optional[Location] = None,
    photo_uri: Optional[str] = None,
) -> TodoRecord:
    now = utc_now()
    todo = TodoRecord(
        id=_new_id(),
        user_id=owner_id,
        title=title,
        completed=completed,
        location=location,
        photo_uri=photo_uri,
        created_at=now,
        updated_at=now,
    )
    todos.put(todo.id, todo)
    logger.info("Created todo %s for user %s", todo.id, owner_id)
    return todo


def get_owned_todo(
    todos: KeyValueStore[TodoRecord],
    owner_id: str,
    todo_id: str,
) -> Optional[TodoRecord]:
    todo = todos.get(todo_id)
    if todo is None or todo.user_id != owner_id:
        return None
    return todo


def update_todo(
    todos: KeyValueStore[TodoRecord],
    owner_id: str,
    todo_id: str,
    changes: Dict[str, Any],
) -> TodoRecord:
    """
    Merge pre-validated ``changes`` into the owner's todo and refresh
    ``updated_at``.  ``id``, ``user_id`` and ``created_at`` never change.
    """
    todo = get_owned_todo(todos, owner_id, todo_id)
    if todo is None:
        raise NotFoundError()

    allowed = {k: v for k, v in changes.items() if k in {"title", "completed", "location", "photo_uri"}}
    updated = todo.model_copy(update={**allowed, "updated_at": utc_now()})
    todos.put(todo_id, updated)
    logger.info("Updated todo %s (%s)", todo_id, ", ".join(sorted(allowed)) or "no fields")
    return updated


def delete_todo(
    todos: KeyValueStore[TodoRecord],
    owner_id: str,
    todo_id: str,
) -> TodoRecord:
    """Remove the owner's todo and return its last state."""
    if get_owned_todo(todos, owner_id, todo_id) is None:
        raise NotFoundError()

    removed = todos.delete(todo_id)
    if removed is None:
        raise NotFoundError()
    logger.info("Deleted todo %s", todo_id)
    return removed
