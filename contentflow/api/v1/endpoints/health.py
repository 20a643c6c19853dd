"""Health check endpoints for liveness and readiness probes."""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from contentflow.domain.exceptions import SqlNotConfiguredException
from contentflow.infrastructure.persistence.database import get_session_factory
from contentflow.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Return simple ok status for liveness."""
    return HealthResponse()


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Database not reachable", "model": ReadinessErrorResponse}},
)
async def readiness_check() -> ReadinessResponse | JSONResponse:
    """Return 200 if the database answers SELECT 1; 503 otherwise."""
    try:
        async with get_session_factory()() as session:
            await session.execute(text("SELECT 1"))
    except SqlNotConfiguredException as e:
        return _not_ready(e.message)
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Readiness check failed: %s", e)
        return _not_ready("Database unreachable")
    return ReadinessResponse()


def _not_ready(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=503,
        content=ReadinessErrorResponse(status="not_ready", message=message).model_dump(),
    )
