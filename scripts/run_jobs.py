"""Process the background job queue.

Usage:
    python -m scripts.run_jobs           # poll until interrupted
    python -m scripts.run_jobs --once    # run one batch and exit
Requires Postgres (DATABASE_URL). Honors JOB_* settings for batch size,
poll interval, backoff and lock timeout.
"""

import asyncio
import signal
import sys
from pathlib import Path

from dotenv import load_dotenv

from contentflow.core.config import get_settings
from contentflow.infrastructure.cache.redis_cache import CacheService
from contentflow.infrastructure.jobs.worker import JobWorker
from contentflow.infrastructure.persistence.database import dispose_engine
from contentflow.shared.telemetry.logging import setup_logging


async def main() -> None:
    """Run one batch with --once, otherwise poll until SIGINT/SIGTERM."""
    load_dotenv(Path(__file__).resolve().parent.parent / ".env", override=True)
    setup_logging()
    settings = get_settings()
    cache = None
    if settings.redis_enabled:
        cache = CacheService()
        await cache.connect()
    worker = JobWorker(cache=cache)
    try:
        if "--once" in sys.argv[1:]:
            claimed = await worker.run_once()
            print(f"Processed {claimed} job(s)")
            return
        stop = asyncio.Event()
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, stop.set)
        await worker.run_forever(stop)
    finally:
        if cache is not None:
            await cache.disconnect()
        await dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
