"""
FastAPI dependencies for authentication.

``authenticate`` is the gate every protected route goes through before
touching a store; ``get_current_identity`` wraps it as a dependency.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Depends, Header

from api.dependencies import get_token_signer
from api.errors import AuthorizationError
from auth.jwt import TokenCheck, TokenSigner, VerifiedIdentity

logger = logging.getLogger(__name__)

_SCHEME = "bearer"


def authenticate(authorization: Optional[str], signer: TokenSigner) -> TokenCheck:
    """
    Check an ``Authorization`` header value.

    A missing header is rejected without attempting verification.  Every
    failure mode comes back as a rejected ``TokenCheck``; only its ``reason``
    differs.
    """
    if not authorization or not authorization.strip():
        return TokenCheck.rejected("missing")

    try:
        scheme, _, token = authorization.strip().partition(" ")
        if scheme.lower() != _SCHEME or not token.strip():
            return TokenCheck.rejected("bad_scheme")
        return signer.verify(token.strip())
    except Exception:
        logger.debug("Token verification raised", exc_info=True)
        return TokenCheck.rejected("invalid")


async def get_current_identity(
    authorization: Optional[str] = Header(None, alias="Authorization"),
    signer: TokenSigner = Depends(get_token_signer),
) -> VerifiedIdentity:
    """
    Return the caller's verified identity or raise ``AuthorizationError``.
    """
    result = authenticate(authorization, signer)
    if not result.ok:
        logger.debug("Rejected credential: %s", result.reason)
        raise AuthorizationError()
    return result.identity
