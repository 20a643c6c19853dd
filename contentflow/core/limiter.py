"""Rate limiter instance for SlowAPI.

Shared by main (app.state.limiter) and the route modules. Limit strings live
here so they are defined once.
"""

import time
from collections import defaultdict
from threading import Lock

from fastapi import HTTPException
from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

LOGIN_LIMIT = "10/minute"
CREATE_ORGANISATION_LIMIT = "5/minute"
PAYMENT_LIMIT = "30/minute"
LOGIN_PER_EMAIL_LIMIT = 20  # attempts per window per email address
LOGIN_PER_EMAIL_WINDOW_SEC = 60

limit_auth = limiter.limit(LOGIN_LIMIT)
limit_create_organisation = limiter.limit(CREATE_ORGANISATION_LIMIT)
limit_payments = limiter.limit(PAYMENT_LIMIT)

# In-memory sliding window of login attempts, keyed by lower-cased email.
_login_attempts: defaultdict[str, list[float]] = defaultdict(list)
_login_attempts_lock = Lock()


def check_login_rate_per_email(email: str) -> None:
    """Raise 429 if this email has too many login attempts in the current window."""
    if not email:
        return
    now = time.monotonic()
    cutoff = now - LOGIN_PER_EMAIL_WINDOW_SEC
    key = email.strip().lower()
    with _login_attempts_lock:
        recent = [t for t in _login_attempts[key] if t > cutoff]
        if len(recent) >= LOGIN_PER_EMAIL_LIMIT:
            _login_attempts[key] = recent
            raise HTTPException(
                status_code=429,
                detail="Too many login attempts for this account; try again later",
            )
        recent.append(now)
        _login_attempts[key] = recent
