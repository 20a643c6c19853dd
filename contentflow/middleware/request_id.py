"""Request ID middleware.

Forwards a client X-Request-ID (when it is safe to log) or generates one,
echoes it on the response, and exposes it to log records via request_id_var.
Raw ASGI, so streaming responses pass through untouched.
"""

import re
import uuid
from typing import Callable

from contentflow.shared.telemetry.logging import request_id_var

REQUEST_ID_MAX_LENGTH = 64
_REQUEST_ID_PATTERN = re.compile(r"^[a-zA-Z0-9_-]{1,%d}$" % REQUEST_ID_MAX_LENGTH)


def _header(scope: dict, name: str) -> str | None:
    wanted = name.lower().encode()
    for key, value in scope.get("headers", []):
        if key.lower() == wanted:
            return value.decode("utf-8", errors="replace").strip()
    return None


def resolve_request_id(raw: str | None) -> str:
    """Return raw if it is a safe id, else a new UUID4 string."""
    if raw and _REQUEST_ID_PATTERN.match(raw):
        return raw
    return str(uuid.uuid4())


def RequestIDMiddleware(app: Callable, header_name: str = "X-Request-ID") -> Callable:
    """Wrap an ASGI app so every HTTP request carries a request id."""
    encoded_name = header_name.encode()

    async def asgi_app(scope: dict, receive: Callable, send: Callable) -> None:
        if scope["type"] != "http":
            await app(scope, receive, send)
            return
        request_id = resolve_request_id(_header(scope, header_name))
        scope.setdefault("state", {})["request_id"] = request_id
        token = request_id_var.set(request_id)

        async def send_with_id(message: dict) -> None:
            if message["type"] == "http.response.start":
                message["headers"] = [
                    *message.get("headers", []),
                    (encoded_name, request_id.encode()),
                ]
            await send(message)

        try:
            await app(scope, receive, send_with_id)
        finally:
            request_id_var.reset(token)

    return asgi_app
