"""Password Hashing — bcrypt wrapper behind an opaque hash/verify pair.

Invariants:
    - Hashes are salted per password (bcrypt.gensalt)
    - verify_password never raises for bad input: malformed hash or over-long
      password is simply a mismatch
    - Plaintext is never logged

Design Decisions:
    - Hashing runs in a worker thread: bcrypt is CPU-bound by design and would
      otherwise stall the event loop for every login
"""

import asyncio
import logging

import bcrypt

logger = logging.getLogger(__name__)


def _hash(password: str, rounds: int) -> str:
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def _verify(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(
            password.encode("utf-8"), password_hash.encode("utf-8"),
        )
    except ValueError as e:
        logger.warning(f"Password verification rejected input: {e}")
        return False


async def hash_password(password: str, rounds: int = 12) -> str:
    return await asyncio.to_thread(_hash, password, rounds)


async def verify_password(password: str, password_hash: str) -> bool:
    return await asyncio.to_thread(_verify, password, password_hash)
