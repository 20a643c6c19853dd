"""Membership background jobs: trial membership for new organisations and expiry checks."""

from __future__ import annotations

from typing import Any

from contentflow.application.dtos.billing import MembershipResult
from contentflow.application.interfaces.repositories import (
    IMembershipRepository,
    IPlanRepository,
)
from contentflow.domain.entities.membership import is_expired, membership_period
from contentflow.domain.exceptions import ValidationException
from contentflow.shared.telemetry.logging import get_logger
from contentflow.shared.utils.datetime import utc_now

logger = get_logger(__name__)


class CreateTrialMembershipUseCase:
    """Puts a new organisation on the trial plan.

    Skips (with a warning) when the trial plan is missing or the
    organisation already has a membership; a retried job is a no-op.
    """

    def __init__(
        self,
        plan_repo: IPlanRepository,
        membership_repo: IMembershipRepository,
        trial_plan_name: str,
        trial_duration_days: int,
    ) -> None:
        self._plan_repo = plan_repo
        self._membership_repo = membership_repo
        self._trial_plan_name = trial_plan_name
        self._trial_duration_days = trial_duration_days

    async def execute(
        self, payload: dict[str, Any], organisation_id: str | None
    ) -> MembershipResult | None:
        if not organisation_id:
            raise ValidationException("organisation_id is required", field="organisation_id")
        if await self._membership_repo.get_by_organisation(organisation_id):
            logger.warning(
                "Organisation %s already has a membership; trial not created", organisation_id
            )
            return None
        plan = await self._plan_repo.get_by_name(self._trial_plan_name)
        if not plan:
            logger.warning(
                "Trial plan '%s' not found; organisation %s has no membership",
                self._trial_plan_name,
                organisation_id,
            )
            return None
        start_date, end_date = membership_period(utc_now(), self._trial_duration_days)
        membership = await self._membership_repo.create_membership(
            organisation_id=organisation_id,
            plan_id=plan.id,
            start_date=start_date,
            end_date=end_date,
            plan_duration=self._trial_duration_days,
        )
        logger.info("Created trial membership %s for organisation %s", membership.id, organisation_id)
        return membership


class MembershipExpiryCheckUseCase:
    """Marks a membership expired once its end date has passed.

    Scheduled at the membership's end date. If the membership was renewed in
    the meantime its end date lies in the future and nothing changes.
    """

    def __init__(self, membership_repo: IMembershipRepository) -> None:
        self._membership_repo = membership_repo

    async def execute(self, payload: dict[str, Any], organisation_id: str | None) -> bool:
        """Return True when the membership was marked expired."""
        membership_id = payload.get("membership_id")
        if not membership_id:
            raise ValidationException("membership_id is required", field="payload")
        membership = await self._membership_repo.get_by_id_for_update(membership_id)
        if not membership:
            logger.warning("Expiry check skipped: membership %s not found", membership_id)
            return False
        if membership.is_expired or not is_expired(membership.end_date, utc_now()):
            return False
        await self._membership_repo.mark_expired(membership_id)
        logger.info("Membership %s expired", membership_id)
        return True
