"""Create the trial plan and the paid plans if they do not exist yet.

Usage:
    python -m scripts.seed_plans
Amounts are in the smallest currency unit (paise). Existing plans are left
unchanged, so the script can be re-run safely.
"""

import asyncio
from pathlib import Path

from dotenv import load_dotenv

from contentflow.core.config import get_settings
from contentflow.infrastructure.persistence.database import dispose_engine, get_session_factory
from contentflow.infrastructure.persistence.repositories import PlanRepository

PAID_PLANS: tuple[tuple[str, str, int, int], ...] = (
    ("Standard", "For small teams", 100_000, 1_000_000),
    ("Premium", "For growing organisations", 250_000, 2_500_000),
)


def _load_env() -> None:
    load_dotenv(Path(__file__).resolve().parent.parent / ".env", override=True)


async def main() -> None:
    """Insert missing plans in one transaction."""
    _load_env()
    settings = get_settings()
    plans = (
        (settings.trial_plan_name, "Trial for new organisations", 0, 0),
        *PAID_PLANS,
    )
    async with get_session_factory()() as session:
        async with session.begin():
            plan_repo = PlanRepository(session)
            for name, description, monthly, yearly in plans:
                if await plan_repo.get_by_name(name):
                    print(f"Plan exists: {name}")
                    continue
                plan = await plan_repo.create_plan(
                    name=name,
                    description=description,
                    monthly_amount=monthly,
                    yearly_amount=yearly,
                )
                print(f"Created plan: {plan.id} ({name})")
    await dispose_engine()


if __name__ == "__main__":
    asyncio.run(main())
