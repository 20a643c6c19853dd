"""Billing use cases: plans, membership updates from payments, membership jobs, invoices."""

from contentflow.application.use_cases.billing.generate_invoice import (
    GenerateInvoiceUseCase,
    invoice_number_for,
)
from contentflow.application.use_cases.billing.membership_jobs import (
    CreateTrialMembershipUseCase,
    MembershipExpiryCheckUseCase,
)
from contentflow.application.use_cases.billing.membership_queries import (
    MembershipQueryService,
)
from contentflow.application.use_cases.billing.plan_operations import PlanService
from contentflow.application.use_cases.billing.update_membership import (
    UpdateMembershipUseCase,
)

__all__ = [
    "CreateTrialMembershipUseCase",
    "GenerateInvoiceUseCase",
    "MembershipExpiryCheckUseCase",
    "MembershipQueryService",
    "PlanService",
    "UpdateMembershipUseCase",
    "invoice_number_for",
]
