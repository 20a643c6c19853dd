"""Security: access tokens and password hashing."""

from contentflow.infrastructure.security.jwt import (
    TokenClaims,
    create_access_token,
    decode_access_token,
)
from contentflow.infrastructure.security.password import get_password_hash, verify_password

__all__ = [
    "TokenClaims",
    "create_access_token",
    "decode_access_token",
    "get_password_hash",
    "verify_password",
]
