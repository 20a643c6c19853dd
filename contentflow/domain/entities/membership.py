"""Membership and plan pricing rules.

Plan duration is derived from the paid amount: the yearly price buys 365
days and the monthly price buys 30 days. Any other amount is rejected.
"""

from dataclasses import dataclass
from datetime import datetime

from contentflow.core.constants import MONTHLY_PLAN_DAYS, YEARLY_PLAN_DAYS
from contentflow.domain.enums import PaymentAction
from contentflow.domain.exceptions import ValidationException, WrongAmountException
from contentflow.shared.utils.datetime import add_days, ensure_utc


@dataclass(frozen=True)
class PlanPricing:
    """Immutable price view of a plan (amounts in the smallest currency unit)."""

    id: str
    monthly_amount: int
    yearly_amount: int

    def __post_init__(self) -> None:
        if self.monthly_amount < 0 or self.yearly_amount < 0:
            raise ValidationException("Plan amounts cannot be negative", field="amount")

    def duration_for_amount(self, amount: int) -> int:
        """Return the plan duration in days bought by ``amount``.

        Raises:
            WrongAmountException: If the amount matches neither price.
        """
        if amount == self.yearly_amount:
            return YEARLY_PLAN_DAYS
        if amount == self.monthly_amount:
            return MONTHLY_PLAN_DAYS
        raise WrongAmountException(self.id, amount)


def payment_action(old_plan: PlanPricing, new_plan: PlanPricing) -> PaymentAction:
    """Classify a plan change by comparing yearly prices (same plan renews)."""
    if old_plan.id == new_plan.id:
        return PaymentAction.RENEW
    if old_plan.yearly_amount > new_plan.yearly_amount:
        return PaymentAction.DOWNGRADE
    if old_plan.yearly_amount < new_plan.yearly_amount:
        return PaymentAction.UPGRADE
    return PaymentAction.RENEW


def membership_period(start: datetime, duration_days: int) -> tuple[datetime, datetime]:
    """Return (start_date, end_date) for a membership lasting ``duration_days``."""
    start_utc = ensure_utc(start)
    return start_utc, add_days(start_utc, duration_days)


def is_expired(end_date: datetime, now: datetime) -> bool:
    """Return whether a membership ending at ``end_date`` has lapsed at ``now``."""
    return ensure_utc(end_date) <= ensure_utc(now)
