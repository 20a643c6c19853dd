"""HTTP middleware. Applied in contentflow.main."""

from contentflow.middleware.request_id import RequestIDMiddleware

__all__ = ["RequestIDMiddleware"]
