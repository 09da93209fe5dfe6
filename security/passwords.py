"""
security/passwords.py
---------------------
One-way password hashing with bcrypt.
Stored passwords are always digests produced here, never plaintext.
"""

import bcrypt

from config import BCRYPT_WORK_FACTOR


def hash_password(plaintext: str, rounds: int = BCRYPT_WORK_FACTOR) -> str:
    """
    Hash a password with a fresh salt.

    Args:
        plaintext: The password as typed by the user.
        rounds: bcrypt work factor (log2 of the iteration count).

    Returns:
        The bcrypt digest as text, ready to store.
    """
    digest = bcrypt.hashpw(plaintext.encode("utf-8"), bcrypt.gensalt(rounds=rounds))
    return digest.decode("utf-8")


def verify_password(plaintext: str, digest: str) -> bool:
    """Return True if ``plaintext`` matches ``digest``. Malformed digests never match."""
    try:
        return bcrypt.checkpw(plaintext.encode("utf-8"), digest.encode("utf-8"))
    except ValueError:
        return False
