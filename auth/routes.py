"""
Auth API routes — register, login.

Route prefix: /auth
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from api.dependencies import get_stores, get_token_signer, read_json_body
from api.errors import ConflictError, InvalidCredentialsError
from auth.jwt import TokenSigner
from auth.password import hash_password_async, verify_password_async
from database.helpers import create_user, get_user_by_email
from database.models import UserRecord
from database.session import Stores
from utils.schemas import CredentialsRequest
from utils.validators import parse_body

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


def _auth_payload(user: UserRecord, signer: TokenSigner) -> Dict[str, Any]:
    return {
        "success": True,
        "data": {
            "user": user.to_public(),
            "token": signer.issue(user.id, user.email),
        },
    }


# ── Endpoints ──────────────────────────────────────────────────────────


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    body: Any = Depends(read_json_body),
    stores: Stores = Depends(get_stores),
    signer: TokenSigner = Depends(get_token_signer),
) -> JSONResponse:
    """Register a new user."""
    req = parse_body(CredentialsRequest, body)

    # cheap early reject; create_user re-checks after the hashing await
    if get_user_by_email(stores.users, req.email) is not None:
        raise ConflictError()

    password_hash = await hash_password_async(req.password)
    user = create_user(stores.users, req.email, password_hash)
    logger.info("Registered user %s", user.id)

    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=_auth_payload(user, signer),
    )


@router.post("/login")
async def login(
    body: Any = Depends(read_json_body),
    stores: Stores = Depends(get_stores),
    signer: TokenSigner = Depends(get_token_signer),
) -> Dict[str, Any]:
    """Login with email + password."""
    req = parse_body(CredentialsRequest, body)

    user = get_user_by_email(stores.users, req.email)
    password_ok = await verify_password_async(
        req.password, user.password_hash if user is not None else None
    )
    if user is None or not password_ok:
        raise InvalidCredentialsError()

    logger.info("Login: %s", user.id)
    return _auth_payload(user, signer)
