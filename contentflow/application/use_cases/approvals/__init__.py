"""Approval use cases: approval system management and the approve transition."""

from contentflow.application.use_cases.approvals.approval_operations import (
    ApprovalSystemService,
)
from contentflow.application.use_cases.approvals.approve_content import ApproveContentUseCase

__all__ = [
    "ApprovalSystemService",
    "ApproveContentUseCase",
]
