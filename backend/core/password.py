"""Password hashing utilities using Argon2.

Argon2 is deliberately slow, so the async helpers run it in a worker thread
to keep the event loop free while a login or registration is hashing.
"""

import argon2
from litestar.concurrency import sync_to_thread

_hasher = argon2.PasswordHasher()


def hash_password_sync(password: str) -> str:
    """Hash a password using Argon2 (salted, irreversible)."""
    return _hasher.hash(password)


def verify_password_sync(password: str, hash: str) -> bool:
    """Verify a password against a hash.

    Returns True if the password matches, False otherwise. A malformed stored
    hash counts as a mismatch.
    """
    try:
        return _hasher.verify(hash, password)
    except (
        argon2.exceptions.VerifyMismatchError,
        argon2.exceptions.VerificationError,
        argon2.exceptions.InvalidHashError,
    ):
        return False


async def hash_password(password: str) -> str:
    return await sync_to_thread(hash_password_sync, password)


async def verify_password(password: str, hash: str) -> bool:
    return await sync_to_thread(verify_password_sync, password, hash)
