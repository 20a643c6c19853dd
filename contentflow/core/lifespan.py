"""Application lifespan: startup and shutdown.

Wiring of infrastructure only (payment HTTP client, cache, telemetry,
in-process job worker, DB engine dispose). No business logic here.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from contentflow.core.config import get_settings
from contentflow.domain.exceptions import SqlNotConfiguredException

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: payment HTTP client, Redis cache (if enabled), telemetry
    (if enabled), job worker (if enabled). Shutdown runs in reverse: worker
    stop, HTTP client close, cache disconnect, telemetry shutdown, engine
    dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    # Shared client for payment gateway calls (connection reuse).
    app.state.payment_http_client = httpx.AsyncClient(
        timeout=settings.razorpay_timeout_seconds
    )

    if settings.redis_enabled:
        from contentflow.infrastructure.cache.redis_cache import CacheService

        cache = CacheService()
        await cache.connect()
        app.state.cache = cache
    else:
        app.state.cache = None

    if settings.telemetry_enabled:
        from contentflow.infrastructure.persistence import database
        from contentflow.shared.telemetry.telemetry import TelemetryConfig, set_telemetry

        telemetry = TelemetryConfig(
            service_name=settings.app_name,
            service_version=settings.app_version,
            enabled=True,
            environment=settings.telemetry_environment,
        )
        telemetry.setup_telemetry(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        set_telemetry(telemetry)
        telemetry.instrument_fastapi(app)
        try:
            database.get_session_factory()
            telemetry.instrument_sqlalchemy(database.engine)
        except SqlNotConfiguredException:
            logger.warning("Database not configured; SQLAlchemy instrumentation skipped")
        logger.info("Telemetry initialized")

    app.state.job_worker_stop = None
    app.state.job_worker_task = None
    if settings.job_worker_enabled:
        from contentflow.infrastructure.jobs.worker import JobWorker

        stop_event = asyncio.Event()
        worker = JobWorker(cache=app.state.cache)
        app.state.job_worker_stop = stop_event
        app.state.job_worker_task = asyncio.create_task(worker.run_forever(stop_event))
        logger.info("In-process job worker started")

    yield

    # ---- Shutdown ----
    worker_task = app.state.job_worker_task
    if worker_task is not None:
        app.state.job_worker_stop.set()
        try:
            await asyncio.wait_for(worker_task, timeout=settings.job_poll_interval_seconds + 30)
        except TimeoutError:
            worker_task.cancel()
            logger.warning("Job worker did not stop in time; cancelled")
        app.state.job_worker_task = None
        logger.info("Job worker stopped")

    if getattr(app.state, "payment_http_client", None) is not None:
        await app.state.payment_http_client.aclose()
        app.state.payment_http_client = None
        logger.info("Payment HTTP client closed")

    if getattr(app.state, "cache", None) is not None:
        await app.state.cache.disconnect()
        logger.info("Cache disconnected")

    from contentflow.shared.telemetry.telemetry import get_telemetry, set_telemetry

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        set_telemetry(None)
        logger.info("Telemetry shutdown complete")

    from contentflow.infrastructure.persistence.database import dispose_engine

    await dispose_engine()
    logger.info("Database engine disposed")
