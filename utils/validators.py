"""
Request-body validators used by the route handlers.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from api.errors import ValidationError
from database.models import Location

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def _flatten_errors(exc: PydanticValidationError) -> List[Dict[str, str]]:
    # input values are left out so passwords never echo back
    return [
        {
            "field": ".".join(str(p) for p in err["loc"]) or "body",
            "message": err["msg"],
        }
        for err in exc.errors()
    ]


def parse_body(model: Type[M], payload: Any) -> M:
    """
    Validate ``payload`` against ``model``.

    ``None`` (missing or unparseable JSON) and non-object payloads fail like
    any other malformed body.  Raises ``ValidationError`` with per-field details.
    """
    if not isinstance(payload, dict):
        raise ValidationError(details=[{"field": "body", "message": "Expected a JSON object"}])
    try:
        return model.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError(details=_flatten_errors(exc)) from exc


def extract_todo_patch(body: Any) -> Dict[str, Any]:
    """
    Keep only the fields of a PATCH body that are present with the right
    runtime type; everything else is dropped silently.

    Returns snake_case keys ready for ``database.helpers.update_todo``.
    """
    if not isinstance(body, dict):
        return {}

    changes: Dict[str, Any] = {}

    title = body.get("title")
    if isinstance(title, str) and title:
        changes["title"] = title

    completed = body.get("completed")
    if isinstance(completed, bool):
        changes["completed"] = completed

    location = body.get("location")
    if isinstance(location, dict):
        try:
            changes["location"] = Location.model_validate(location)
        except PydanticValidationError:
            logger.debug("Ignoring malformed location in patch")

    photo_uri = body.get("photoUri")
    if isinstance(photo_uri, str):
        changes["photo_uri"] = photo_uri

    return changes
