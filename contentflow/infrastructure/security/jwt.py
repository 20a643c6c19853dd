"""Bearer tokens for API users.

A token names the user (sub), the organisation it acts in and the role at
issue time. Signing secret and algorithm come from contentflow.core.config.
"""

from dataclasses import dataclass
from datetime import timedelta
from typing import Any, cast

from jose import JWTError, jwt

from contentflow.core.config import get_settings
from contentflow.domain.enums import UserRole
from contentflow.domain.exceptions import AuthenticationException
from contentflow.shared.utils.datetime import utc_now


@dataclass(frozen=True)
class TokenClaims:
    """Decoded access token."""

    user_id: str
    organisation_id: str
    role: UserRole


def create_access_token(
    user_id: str,
    organisation_id: str,
    role: UserRole,
    expires_delta: timedelta | None = None,
) -> str:
    """Return a signed access token for the user.

    expires_delta defaults to settings.access_token_expire_minutes.
    """
    settings = get_settings()
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    claims: dict[str, Any] = {
        "sub": user_id,
        "organisation_id": organisation_id,
        "role": role.value,
        "exp": utc_now() + lifetime,
    }
    token = jwt.encode(
        claims,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, token)


def decode_access_token(token: str) -> TokenClaims:
    """Verify signature and expiry; return the claims.

    Raises:
        AuthenticationException: If the token is invalid, expired, or lacks a claim.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise AuthenticationException(f"Invalid token: {e!s}") from e
    organisation_id = payload.get("organisation_id")
    if not organisation_id:
        raise AuthenticationException("Token missing required claim: organisation_id")
    try:
        role = UserRole(payload.get("role", UserRole.USER.value))
    except ValueError as e:
        raise AuthenticationException("Token carries an unknown role") from e
    return TokenClaims(user_id=payload["sub"], organisation_id=organisation_id, role=role)
