"""Job kind to handler wiring.

A handler factory receives a JobContext (the job's own session plus
settings and cache) and returns the coroutine function that runs the job:
``handler(payload, organisation_id)``.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from contentflow.application.use_cases.billing import (
    CreateTrialMembershipUseCase,
    GenerateInvoiceUseCase,
    MembershipExpiryCheckUseCase,
)
from contentflow.application.use_cases.flows import SeedDefaultStatesUseCase
from contentflow.core.config import Settings
from contentflow.domain.exceptions import UnknownJobKindException
from contentflow.infrastructure.cache.cache_protocol import CacheProtocol
from contentflow.infrastructure.external.invoices import InvoiceRenderer, LocalInvoiceStorage
from contentflow.infrastructure.persistence.repositories import (
    FlowRepository,
    MembershipRepository,
    OrganisationRepository,
    PaymentRepository,
    PlanRepository,
    StateRepository,
)
from contentflow.shared.enums import JobKind

JobHandler = Callable[[dict[str, Any], str | None], Awaitable[Any]]


@dataclass(frozen=True)
class JobContext:
    """What a handler factory may use to build its use case."""

    session: AsyncSession
    settings: Settings
    cache: CacheProtocol | None = None


HandlerFactory = Callable[[JobContext], JobHandler]


def _plan_repo(ctx: JobContext) -> PlanRepository:
    return PlanRepository(ctx.session, ctx.cache, cache_ttl=ctx.settings.cache_ttl_plans)


def _seed_default_states(ctx: JobContext) -> JobHandler:
    return SeedDefaultStatesUseCase(
        FlowRepository(ctx.session), StateRepository(ctx.session)
    ).execute


def _create_trial_membership(ctx: JobContext) -> JobHandler:
    return CreateTrialMembershipUseCase(
        _plan_repo(ctx),
        MembershipRepository(ctx.session),
        trial_plan_name=ctx.settings.trial_plan_name,
        trial_duration_days=ctx.settings.trial_duration_days,
    ).execute


def _membership_expiry_check(ctx: JobContext) -> JobHandler:
    return MembershipExpiryCheckUseCase(MembershipRepository(ctx.session)).execute


def _generate_invoice(ctx: JobContext) -> JobHandler:
    return GenerateInvoiceUseCase(
        payment_repo=PaymentRepository(ctx.session),
        membership_repo=MembershipRepository(ctx.session),
        plan_repo=_plan_repo(ctx),
        organisation_repo=OrganisationRepository(ctx.session),
        renderer=InvoiceRenderer(),
        storage=LocalInvoiceStorage(ctx.settings.storage_root),
        invoice_prefix=ctx.settings.invoice_prefix,
    ).execute


DEFAULT_HANDLERS: dict[str, HandlerFactory] = {
    JobKind.SEED_DEFAULT_STATES.value: _seed_default_states,
    JobKind.CREATE_TRIAL_MEMBERSHIP.value: _create_trial_membership,
    JobKind.MEMBERSHIP_EXPIRY_CHECK.value: _membership_expiry_check,
    JobKind.GENERATE_INVOICE.value: _generate_invoice,
}


class JobHandlerRegistry:
    """Maps job kinds to handler factories. Defaults to DEFAULT_HANDLERS."""

    def __init__(self, factories: Mapping[str, HandlerFactory] | None = None) -> None:
        self._factories: dict[str, HandlerFactory] = dict(
            DEFAULT_HANDLERS if factories is None else factories
        )

    def register(self, kind: str, factory: HandlerFactory) -> None:
        self._factories[kind] = factory

    def kinds(self) -> list[str]:
        return sorted(self._factories)

    def build(self, kind: str, ctx: JobContext) -> JobHandler:
        """Return the handler for kind. Raises UnknownJobKindException if none is registered."""
        factory = self._factories.get(kind)
        if factory is None:
            raise UnknownJobKindException(kind)
        return factory(ctx)
