"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions, the current user, and
application services. Services are built from infrastructure
implementations here; routes depend only on these dependencies.

Write paths use get_db_transactional: the business change and any jobs it
enqueues commit in one transaction.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from contentflow.application.dtos.user import UserResult
from contentflow.application.use_cases.approvals import (
    ApprovalSystemService,
    ApproveContentUseCase,
)
from contentflow.application.use_cases.billing import (
    MembershipQueryService,
    PlanService,
    UpdateMembershipUseCase,
)
from contentflow.application.use_cases.content import ContentTypeService, InstanceService
from contentflow.application.use_cases.flows import FlowService, StateService
from contentflow.application.use_cases.jobs import JobAdminService
from contentflow.application.use_cases.organisations import OrganisationService
from contentflow.core.config import get_settings
from contentflow.domain.exceptions import AuthenticationException
from contentflow.infrastructure.cache.cache_protocol import CacheProtocol
from contentflow.infrastructure.external.payments import RazorpayGateway
from contentflow.infrastructure.persistence.database import get_db, get_db_transactional
from contentflow.infrastructure.persistence.repositories import (
    ApprovalSystemRepository,
    BackgroundJobRepository,
    ContentTypeRepository,
    FlowRepository,
    InstanceRepository,
    MembershipRepository,
    OrganisationRepository,
    PaymentRepository,
    PlanRepository,
    StateRepository,
    UserRepository,
)
from contentflow.infrastructure.security.jwt import decode_access_token

_http_bearer = HTTPBearer(auto_error=False)

ReadSession = Annotated[AsyncSession, Depends(get_db)]
WriteSession = Annotated[AsyncSession, Depends(get_db_transactional)]


def get_cache(request: Request) -> CacheProtocol | None:
    """Redis cache from app state, or None when disabled or not connected."""
    return getattr(request.app.state, "cache", None)


def get_payment_gateway(request: Request) -> RazorpayGateway:
    """Razorpay client sharing the lifespan's HTTP client (connection reuse)."""
    return RazorpayGateway(http_client=getattr(request.app.state, "payment_http_client", None))


def _plan_repo(db: AsyncSession, cache: CacheProtocol | None) -> PlanRepository:
    return PlanRepository(db, cache, cache_ttl=get_settings().cache_ttl_plans)


# ---- Auth ----


async def get_user_repo(db: ReadSession) -> UserRepository:
    """User repository for reads (login, current user)."""
    return UserRepository(db)


async def get_user_repo_for_write(db: WriteSession) -> UserRepository:
    """User repository for user creation (transactional)."""
    return UserRepository(db)


async def get_current_user_optional(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    user_repo: Annotated[UserRepository, Depends(get_user_repo)],
) -> UserResult | None:
    """Return current user from JWT if present and valid; else None."""
    if not credentials:
        return None
    try:
        claims = decode_access_token(credentials.credentials)
    except AuthenticationException:
        return None
    user = await user_repo.get_by_id_and_organisation(claims.user_id, claims.organisation_id)
    if not user or not user.is_active:
        return None
    return user


async def get_current_user(
    current_user: Annotated[UserResult | None, Depends(get_current_user_optional)],
) -> UserResult:
    """Return current user from JWT; raise 401 if missing or invalid."""
    if current_user is None:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return current_user


async def require_admin(
    current_user: Annotated[UserResult, Depends(get_current_user)],
) -> UserResult:
    """Return current user if admin; raise 403 otherwise."""
    if not current_user.is_admin:
        raise HTTPException(status_code=403, detail="Admin role required")
    return current_user


async def require_organisation_manager(
    current_user: Annotated[UserResult, Depends(get_current_user)],
) -> UserResult:
    """Return current user if they may manage their own organisation (owner or admin)."""
    if not current_user.can_manage(current_user.organisation_id):
        raise HTTPException(status_code=403, detail="Owner or admin role required")
    return current_user


CurrentUser = Annotated[UserResult, Depends(get_current_user)]
AdminUser = Annotated[UserResult, Depends(require_admin)]
ManagerUser = Annotated[UserResult, Depends(require_organisation_manager)]


# ---- Organisations ----


async def get_organisation_service(db: WriteSession) -> OrganisationService:
    """Organisation operations (transactional; creation enqueues the trial job)."""
    return OrganisationService(
        OrganisationRepository(db),
        UserRepository(db),
        BackgroundJobRepository(db),
        FlowRepository(db),
    )


# ---- Flows and states ----


async def get_flow_service(db: WriteSession) -> FlowService:
    """Flow CRUD (transactional; enqueues default state seeding)."""
    return FlowService(
        FlowRepository(db),
        StateRepository(db),
        ContentTypeRepository(db),
        job_queue=BackgroundJobRepository(db),
    )


async def get_state_service(db: WriteSession) -> StateService:
    """State CRUD and order shuffling (transactional)."""
    return StateService(
        FlowRepository(db),
        StateRepository(db),
        InstanceRepository(db),
        ApprovalSystemRepository(db),
    )


# ---- Content ----


async def get_content_type_service(db: WriteSession) -> ContentTypeService:
    """Content type CRUD (transactional)."""
    return ContentTypeService(
        ContentTypeRepository(db), FlowRepository(db), InstanceRepository(db)
    )


async def get_instance_service(db: WriteSession) -> InstanceService:
    """Instance CRUD with sequential instance ids (transactional)."""
    return InstanceService(InstanceRepository(db), ContentTypeRepository(db), StateRepository(db))


# ---- Approvals ----


async def get_approval_system_service(db: WriteSession) -> ApprovalSystemService:
    """Approval system CRUD (transactional)."""
    return ApprovalSystemService(
        ApprovalSystemRepository(db),
        InstanceRepository(db),
        ContentTypeRepository(db),
        StateRepository(db),
        UserRepository(db),
    )


async def get_approve_content_use_case(db: WriteSession) -> ApproveContentUseCase:
    """Approve transition (transactional, row-locked)."""
    return ApproveContentUseCase(ApprovalSystemRepository(db), InstanceRepository(db))


# ---- Billing ----


async def get_plan_service(
    db: WriteSession,
    cache: Annotated[CacheProtocol | None, Depends(get_cache)],
) -> PlanService:
    """Plan CRUD with cache invalidation (transactional)."""
    return PlanService(_plan_repo(db, cache), MembershipRepository(db))


async def get_membership_query_service(db: ReadSession) -> MembershipQueryService:
    """Membership and payment reads."""
    return MembershipQueryService(MembershipRepository(db), PaymentRepository(db))


async def get_update_membership_use_case(
    db: WriteSession,
    cache: Annotated[CacheProtocol | None, Depends(get_cache)],
    gateway: Annotated[RazorpayGateway, Depends(get_payment_gateway)],
) -> UpdateMembershipUseCase:
    """Membership update from a payment: membership, payment and jobs in one transaction."""
    return UpdateMembershipUseCase(
        membership_repo=MembershipRepository(db),
        plan_repo=_plan_repo(db, cache),
        payment_repo=PaymentRepository(db),
        payment_gateway=gateway,
        job_queue=BackgroundJobRepository(db),
    )


# ---- Jobs ----


async def get_job_admin_service(db: WriteSession) -> JobAdminService:
    """Job listing and retry (transactional)."""
    return JobAdminService(BackgroundJobRepository(db))
