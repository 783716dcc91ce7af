"""
JWT-style token creation and verification.

Tokens are base64url-encoded JSON payloads signed with HMAC-SHA256:

    <base64url(payload)>.<hex(hmac_sha256(secret, payload))>

The payload carries ``sub`` (user id), ``email``, ``iat`` and ``exp``.
The signer is built once at startup from ``config.jwt_secret``; changing the
secret invalidates every token issued under the old one.
"""

from __future__ import annotations

import binascii
import hashlib
import hmac
import json
import time
from base64 import urlsafe_b64decode, urlsafe_b64encode
from typing import Optional

from pydantic import BaseModel


class VerifiedIdentity(BaseModel):
    """Subject id + email proven by a valid token."""

    user_id: str
    email: str


class TokenCheck(BaseModel):
    """
    Outcome of verifying a credential.

    ``identity`` is set only when the token is valid.  ``reason`` explains a
    rejection for logs; callers must treat every rejection the same way.
    """

    identity: Optional[VerifiedIdentity] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.identity is not None

    @classmethod
    def rejected(cls, reason: str) -> "TokenCheck":
        return cls(reason=reason)


class TokenSigner:
    """Issues and verifies signed, time-limited identity tokens."""

    def __init__(self, secret: str, expiry_seconds: int = 604800):
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        if expiry_seconds <= 0:
            raise ValueError("Token expiry must be positive")
        self._secret = secret.encode()
        self.expiry_seconds = expiry_seconds

    def _sign(self, raw: bytes) -> str:
        return hmac.new(self._secret, raw, hashlib.sha256).hexdigest()

    def issue(self, user_id: str, email: str, *, now: float | None = None) -> str:
        """Create a signed token for ``user_id`` expiring ``expiry_seconds`` from now."""
        issued_at = int(now if now is not None else time.time())
        payload = {
            "sub": user_id,
            "email": email,
            "iat": issued_at,
            "exp": issued_at + self.expiry_seconds,
        }
        raw = json.dumps(payload, separators=(",", ":")).encode()
        return urlsafe_b64encode(raw).decode() + "." + self._sign(raw)

    def verify(self, token: str, *, now: float | None = None) -> TokenCheck:
        """
        Verify ``token``.  Never raises: every failure becomes a rejected
        ``TokenCheck``.
        """
        parts = token.split(".", 1) if isinstance(token, str) else []
        if len(parts) != 2 or not parts[0] or not parts[1]:
            return TokenCheck.rejected("malformed")

        try:
            raw = urlsafe_b64decode(parts[0].encode())
        except (binascii.Error, ValueError):
            return TokenCheck.rejected("malformed")

        if not hmac.compare_digest(parts[1].encode(), self._sign(raw).encode()):
            return TokenCheck.rejected("bad_signature")

        try:
            payload = json.loads(raw)
        except ValueError:
            return TokenCheck.rejected("malformed")
        if not isinstance(payload, dict):
            return TokenCheck.rejected("bad_claims")

        sub, email, exp = payload.get("sub"), payload.get("email"), payload.get("exp")
        if not isinstance(sub, str) or not isinstance(email, str):
            return TokenCheck.rejected("bad_claims")
        if isinstance(exp, bool) or not isinstance(exp, (int, float)):
            return TokenCheck.rejected("bad_claims")

        current = now if now is not None else time.time()
        if current >= exp:
            return TokenCheck.rejected("expired")

        return TokenCheck(identity=VerifiedIdentity(user_id=sub, email=email))
