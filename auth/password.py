"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic salting.  The work factor
comes from ``config.bcrypt_rounds`` (default 8): a moderate cost that keeps
login/register CPU time bounded under load while still resisting offline
brute force.
"""

from __future__ import annotations

import asyncio

import bcrypt

from config.settings import config

# bcrypt ignores (or, in recent releases, rejects) input beyond 72 bytes.
MAX_PASSWORD_BYTES = 72

_DUMMY_HASH: str | None = None


def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash a password with bcrypt (auto-salted)."""
    salt = bcrypt.gensalt(rounds=rounds or config.bcrypt_rounds)
    return bcrypt.hashpw(password.encode(), salt).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time comparison against a bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except (ValueError, TypeError):
        return False


def verify_against_dummy(password: str) -> bool:
    """
    Burn one verification against a throwaway hash.

    Used when the login email is unknown so the response takes as long as a
    wrong-password attempt.  Always returns ``False``.
    """
    global _DUMMY_HASH
    if _DUMMY_HASH is None:
        _DUMMY_HASH = hash_password("dummy-password-for-timing")
    verify_password(password, _DUMMY_HASH)
    return False


async def hash_password_async(password: str) -> str:
    return await asyncio.to_thread(hash_password, password)


async def verify_password_async(password: str, password_hash: str | None) -> bool:
    """Verify off the event loop; ``password_hash=None`` runs the dummy check."""
    if password_hash is None:
        return await asyncio.to_thread(verify_against_dummy, password)
    return await asyncio.to_thread(verify_password, password, password_hash)
