"""
FastAPI dependencies (shared across routes).
"""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import Request

from auth.jwt import TokenSigner
from database.session import Stores

logger = logging.getLogger(__name__)


def get_stores(request: Request) -> Stores:
    """The process-wide stores created by the app factory."""
    return request.app.state.stores


def get_token_signer(request: Request) -> TokenSigner:
    return request.app.state.token_signer


def _reject_constant(token: str) -> Any:
    # NaN and Infinity are not JSON
    raise ValueError(f"Invalid JSON constant {token}")


async def read_json_body(request: Request) -> Any:
    """
    Decode the request body as JSON.

    Returns ``None`` for an empty or unparseable body instead of failing, so
    each handler decides what malformed input means for it.
    """
    raw = await request.body()
    if not raw:
        return None
    try:
        return json.loads(raw, parse_constant=_reject_constant)
    except (ValueError, UnicodeDecodeError):
        logger.debug("Unparseable JSON body on %s %s", request.method, request.url.path)
        return None
