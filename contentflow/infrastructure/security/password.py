"""Password hashing for user accounts.

bcrypt only reads the first 72 bytes of its input, so the password is first
reduced to a base64 SHA-256 digest (44 bytes) and that digest is hashed.
"""

import base64
import hashlib

import bcrypt

BCRYPT_ROUNDS = 12


def _digest(password: str) -> bytes:
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def get_password_hash(password: str) -> str:
    """Return a bcrypt hash suitable for User.hashed_password."""
    return bcrypt.hashpw(_digest(password), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("ascii")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Return True if plain_password matches; a malformed stored hash never matches."""
    try:
        return bool(bcrypt.checkpw(_digest(plain_password), hashed_password.encode("ascii")))
    except (ValueError, TypeError, UnicodeEncodeError):
        return False
