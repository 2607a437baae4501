"""Password Hashing — bcrypt with per-password salt.

Invariants:
    - Plain passwords never leave this module in any persisted form
    - verify_password returns False (never raises) on malformed hashes or oversized input
"""

import bcrypt

from scheduler.config import get_settings


def hash_password(password: str) -> str:
    """Hash a plain text password using bcrypt."""
    salt = bcrypt.gensalt(rounds=get_settings().bcrypt_rounds)
    hashed = bcrypt.hashpw(password.encode("utf-8"), salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, password_hash: str) -> bool:
    """Verify a plain text password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(
            plain_password.encode("utf-8"), password_hash.encode("utf-8"),
        )
    except ValueError:
        return False
