"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol

from contentflow.domain.enums import PaymentAction, PaymentStatus, UserRole

if TYPE_CHECKING:
    from contentflow.application.dtos.approval import ApprovalSystemResult
    from contentflow.application.dtos.billing import (
        MembershipResult,
        PaymentResult,
        PlanResult,
    )
    from contentflow.application.dtos.content import ContentTypeResult, InstanceResult
    from contentflow.application.dtos.flow import FlowResult, StateResult
    from contentflow.application.dtos.job import JobResult
    from contentflow.application.dtos.organisation import OrganisationResult
    from contentflow.application.dtos.user import UserResult
    from contentflow.shared.enums import JobStatus


class IOrganisationRepository(Protocol):
    """Protocol for organisation repository (DIP)."""

    async def get_by_id(self, organisation_id: str) -> OrganisationResult | None:
        """Return organisation by ID."""

    async def get_by_name(self, name: str) -> OrganisationResult | None:
        """Return organisation by unique name."""

    async def create_organisation(self, name: str, email: str) -> OrganisationResult:
        """Create organisation; return created entity."""

    async def list_organisations(
        self, skip: int = 0, limit: int = 100
    ) -> list[OrganisationResult]:
        """Return organisations, newest first."""

    async def update_organisation(
        self,
        organisation_id: str,
        *,
        name: str | None = None,
        email: str | None = None,
    ) -> OrganisationResult | None:
        """Update organisation; return updated result or None if not found."""

    async def delete_organisation(self, organisation_id: str) -> bool:
        """Delete organisation and everything it owns; return True if deleted."""


class IUserRepository(Protocol):
    """Protocol for user repository (DIP)."""

    async def get_by_id(self, user_id: str) -> UserResult | None:
        """Return user by ID."""

    async def get_by_id_and_organisation(
        self, user_id: str, organisation_id: str
    ) -> UserResult | None:
        """Return user by ID if it belongs to the organisation."""

    async def get_by_email(self, email: str) -> UserResult | None:
        """Return user by (globally unique) email."""

    async def authenticate(self, email: str, password: str) -> UserResult | None:
        """Return the active user when the password matches, else None."""

    async def create_user(
        self,
        organisation_id: str,
        name: str,
        email: str,
        password: str,
        role: UserRole = UserRole.USER,
    ) -> UserResult:
        """Create user with a hashed password; return created entity."""

    async def list_by_organisation(
        self, organisation_id: str, skip: int = 0, limit: int = 100
    ) -> list[UserResult]:
        """Return the organisation's members, oldest first."""


class IFlowRepository(Protocol):
    """Protocol for flow repository (DIP)."""

    async def get_by_id(self, flow_id: str, organisation_id: str) -> FlowResult | None:
        """Return flow by ID if it belongs to the organisation."""

    async def get_by_id_for_update(
        self, flow_id: str, organisation_id: str
    ) -> FlowResult | None:
        """Return flow and lock its row until the transaction ends (serialises state edits)."""

    async def get_by_name(self, organisation_id: str, name: str) -> FlowResult | None:
        """Return flow by name in the organisation."""

    async def list_by_organisation(
        self, organisation_id: str, skip: int = 0, limit: int = 100
    ) -> list[FlowResult]:
        """Return flows for the organisation, newest first."""

    async def count_by_organisation(self, organisation_id: str) -> int:
        """Return number of flows in the organisation."""

    async def create_flow(
        self,
        organisation_id: str,
        name: str,
        controlled: bool,
        creator_id: str | None,
    ) -> FlowResult:
        """Create flow; return created entity."""

    async def update_flow(
        self,
        flow_id: str,
        organisation_id: str,
        *,
        name: str | None = None,
        controlled: bool | None = None,
    ) -> FlowResult | None:
        """Update flow; return updated result or None if not found."""

    async def delete_flow(self, flow_id: str, organisation_id: str) -> bool:
        """Delete flow; return True if deleted."""


class IStateRepository(Protocol):
    """Protocol for state repository (DIP)."""

    async def get_by_id(self, state_id: str, organisation_id: str) -> StateResult | None:
        """Return state by ID if it belongs to the organisation."""

    async def list_by_flow(self, flow_id: str) -> list[StateResult]:
        """Return the flow's states ordered by order ascending."""

    async def get_orders(self, flow_id: str) -> list[int]:
        """Return the order values of every state in the flow."""

    async def count_by_flow(self, flow_id: str) -> int:
        """Return number of states in the flow."""

    async def get_first_state(self, flow_id: str) -> StateResult | None:
        """Return the state with the lowest order in the flow."""

    async def create_state(
        self,
        organisation_id: str,
        flow_id: str,
        name: str,
        order: int,
        creator_id: str | None,
    ) -> StateResult:
        """Create state at the given order; return created entity."""

    async def update_state(
        self, state_id: str, organisation_id: str, *, name: str
    ) -> StateResult | None:
        """Rename state; return updated result or None if not found."""

    async def delete_state(self, state_id: str, organisation_id: str) -> bool:
        """Delete state; return True if deleted."""

    async def shuffle_order(self, flow_id: str, anchor: int, additive: int) -> int:
        """Add additive to the order of every state in the flow above anchor; return rows changed."""


class IContentTypeRepository(Protocol):
    """Protocol for content type repository (DIP)."""

    async def get_by_id(
        self, content_type_id: str, organisation_id: str
    ) -> ContentTypeResult | None:
        """Return content type by ID if it belongs to the organisation."""

    async def list_by_organisation(
        self, organisation_id: str, skip: int = 0, limit: int = 100
    ) -> list[ContentTypeResult]:
        """Return content types for the organisation, newest first."""

    async def count_by_flow(self, flow_id: str) -> int:
        """Return number of content types bound to the flow."""

    async def create_content_type(
        self,
        organisation_id: str,
        *,
        name: str,
        prefix: str,
        flow_id: str,
        description: str | None = None,
        fields: dict[str, Any] | None = None,
        color: str | None = None,
        creator_id: str | None = None,
    ) -> ContentTypeResult:
        """Create content type; return created entity."""

    async def update_content_type(
        self,
        content_type_id: str,
        organisation_id: str,
        *,
        name: str | None = None,
        description: str | None = None,
        fields: dict[str, Any] | None = None,
        color: str | None = None,
    ) -> ContentTypeResult | None:
        """Update content type; return updated result or None if not found."""

    async def delete_content_type(self, content_type_id: str, organisation_id: str) -> bool:
        """Delete content type; return True if deleted."""

    async def next_instance_sequence(self, content_type_id: str) -> tuple[str, int]:
        """Lock the content type row, increment its counter; return (prefix, new counter)."""


class IInstanceRepository(Protocol):
    """Protocol for content instance repository (DIP)."""

    async def get_by_id(self, instance_id: str, organisation_id: str) -> InstanceResult | None:
        """Return instance by ID if it belongs to the organisation."""

    async def get_by_id_for_update(
        self, instance_id: str, organisation_id: str
    ) -> InstanceResult | None:
        """Return instance and lock its row until the transaction ends."""

    async def list_by_content_type(
        self, content_type_id: str, skip: int = 0, limit: int = 100
    ) -> list[InstanceResult]:
        """Return instances of the content type, newest first."""

    async def list_by_organisation(
        self, organisation_id: str, skip: int = 0, limit: int = 100
    ) -> list[InstanceResult]:
        """Return instances in the organisation, newest first."""

    async def count_by_state(self, state_id: str) -> int:
        """Return number of instances currently in the state."""

    async def count_by_content_type(self, content_type_id: str) -> int:
        """Return number of instances of the content type."""

    async def create_instance(
        self,
        organisation_id: str,
        *,
        instance_id: str,
        content_type_id: str,
        state_id: str,
        raw: str | None,
        serialized: dict[str, Any] | None,
        creator_id: str | None,
    ) -> InstanceResult:
        """Create instance; return created entity."""

    async def update_instance(
        self,
        instance_id: str,
        organisation_id: str,
        *,
        raw: str | None = None,
        serialized: dict[str, Any] | None = None,
        state_id: str | None = None,
    ) -> InstanceResult | None:
        """Update instance; return updated result or None if not found."""

    async def delete_instance(self, instance_id: str, organisation_id: str) -> bool:
        """Delete instance; return True if deleted."""


class IApprovalSystemRepository(Protocol):
    """Protocol for approval system repository (DIP)."""

    async def get_by_id(
        self, approval_system_id: str, organisation_id: str
    ) -> ApprovalSystemResult | None:
        """Return approval system by ID if it belongs to the organisation."""

    async def get_by_id_for_update(
        self, approval_system_id: str, organisation_id: str
    ) -> ApprovalSystemResult | None:
        """Return approval system and lock its row until the transaction ends."""

    async def list_by_organisation(
        self,
        organisation_id: str,
        skip: int = 0,
        limit: int = 100,
        *,
        approver_id: str | None = None,
        pending_only: bool = False,
    ) -> list[ApprovalSystemResult]:
        """Return approval systems, optionally for one approver and/or not yet approved."""

    async def count_by_state(self, state_id: str) -> int:
        """Return number of approval systems using the state as pre- or post-state."""

    async def create_approval_system(
        self,
        organisation_id: str,
        *,
        instance_id: str,
        pre_state_id: str,
        post_state_id: str,
        approver_id: str,
        creator_id: str | None,
    ) -> ApprovalSystemResult:
        """Create approval system; return created entity."""

    async def update_approval_system(
        self,
        approval_system_id: str,
        organisation_id: str,
        *,
        instance_id: str,
        pre_state_id: str,
        post_state_id: str,
        approver_id: str,
    ) -> ApprovalSystemResult | None:
        """Replace the approval system's references; return updated result or None."""

    async def mark_approved(
        self, approval_system_id: str, approved_at: datetime
    ) -> ApprovalSystemResult:
        """Stamp approved=true with the given time; return updated entity."""

    async def delete_approval_system(
        self, approval_system_id: str, organisation_id: str
    ) -> bool:
        """Delete approval system; return True if deleted."""


class IPlanRepository(Protocol):
    """Protocol for plan repository (DIP)."""

    async def get_by_id(self, plan_id: str) -> PlanResult | None:
        """Return plan by ID."""

    async def get_by_name(self, name: str) -> PlanResult | None:
        """Return plan by unique name."""

    async def list_plans(self, skip: int = 0, limit: int = 100) -> list[PlanResult]:
        """Return plans ordered by yearly price."""

    async def create_plan(
        self,
        name: str,
        monthly_amount: int,
        yearly_amount: int,
        description: str | None = None,
    ) -> PlanResult:
        """Create plan; return created entity."""

    async def update_plan(
        self,
        plan_id: str,
        *,
        name: str | None = None,
        description: str | None = None,
        monthly_amount: int | None = None,
        yearly_amount: int | None = None,
    ) -> PlanResult | None:
        """Update plan; return updated result or None if not found."""

    async def delete_plan(self, plan_id: str) -> bool:
        """Delete plan; return True if deleted."""


class IMembershipRepository(Protocol):
    """Protocol for membership repository (DIP)."""

    async def get_by_id(self, membership_id: str) -> MembershipResult | None:
        """Return membership by ID."""

    async def get_by_id_for_update(self, membership_id: str) -> MembershipResult | None:
        """Return membership and lock its row until the transaction ends."""

    async def get_by_organisation(self, organisation_id: str) -> MembershipResult | None:
        """Return the organisation's membership."""

    async def count_by_plan(self, plan_id: str) -> int:
        """Return number of memberships on the plan."""

    async def create_membership(
        self,
        organisation_id: str,
        plan_id: str,
        start_date: datetime,
        end_date: datetime,
        plan_duration: int,
    ) -> MembershipResult:
        """Create membership; return created entity."""

    async def update_membership(
        self,
        membership_id: str,
        *,
        plan_id: str,
        start_date: datetime,
        end_date: datetime,
        plan_duration: int,
    ) -> MembershipResult:
        """Move membership to a plan and period (clears is_expired); return updated entity."""

    async def mark_expired(self, membership_id: str) -> MembershipResult | None:
        """Set is_expired; return updated result or None if not found."""


class IPaymentRepository(Protocol):
    """Protocol for payment repository (DIP)."""

    async def get_by_id(
        self, payment_id: str, organisation_id: str | None = None
    ) -> PaymentResult | None:
        """Return payment by ID (scoped to organisation when given)."""

    async def list_payments(
        self, organisation_id: str | None = None, skip: int = 0, limit: int = 100
    ) -> list[PaymentResult]:
        """Return payments newest first (all organisations when organisation_id is None)."""

    async def create_payment(
        self,
        organisation_id: str,
        *,
        membership_id: str,
        razorpay_id: str,
        amount: int,
        status: PaymentStatus,
        action: PaymentAction | None,
        from_plan_id: str | None,
        to_plan_id: str | None,
        meta: dict[str, Any] | None,
        creator_id: str | None,
    ) -> PaymentResult:
        """Create payment; return created entity (with its database number)."""

    async def get_by_razorpay_id(self, razorpay_id: str) -> PaymentResult | None:
        """Return the payment recorded for a gateway transaction id."""

    async def set_invoice(
        self, payment_id: str, invoice_number: str, invoice_path: str
    ) -> PaymentResult | None:
        """Record the generated invoice on the payment."""


class IJobRepository(Protocol):
    """Protocol for the background job table (DIP)."""

    async def enqueue(
        self,
        kind: str,
        payload: dict[str, Any],
        *,
        run_at: datetime | None = None,
        organisation_id: str | None = None,
        max_attempts: int | None = None,
    ) -> JobResult:
        """Insert a pending job in the current transaction; return it."""

    async def get_by_id(self, job_id: str) -> JobResult | None:
        """Return job by ID."""

    async def list_jobs(
        self,
        status: JobStatus | None = None,
        kind: str | None = None,
        skip: int = 0,
        limit: int = 100,
    ) -> list[JobResult]:
        """Return jobs newest first, optionally filtered by status and kind."""

    async def claim_due(
        self, now: datetime, batch_size: int, lock_timeout_seconds: int
    ) -> list[JobResult]:
        """Mark up to batch_size due jobs running (skipping rows locked elsewhere); return them."""

    async def mark_completed(self, job_id: str, now: datetime) -> None:
        """Mark job completed."""

    async def mark_attempt_failed(
        self, job_id: str, error: str, next_run_at: datetime | None
    ) -> JobResult | None:
        """Record a failed attempt: pending at next_run_at, or failed when next_run_at is None."""

    async def reset_for_retry(self, job_id: str, now: datetime) -> JobResult | None:
        """Reset a failed job to pending with zero attempts; return it or None if not found."""
