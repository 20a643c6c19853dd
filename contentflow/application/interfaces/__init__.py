"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from contentflow.infrastructure or contentflow.api.
"""

from contentflow.application.interfaces.repositories import (
    IApprovalSystemRepository,
    IContentTypeRepository,
    IFlowRepository,
    IInstanceRepository,
    IJobRepository,
    IMembershipRepository,
    IOrganisationRepository,
    IPaymentRepository,
    IPlanRepository,
    IStateRepository,
    IUserRepository,
)
from contentflow.application.interfaces.services import (
    ICacheService,
    IInvoiceRenderer,
    IInvoiceStorage,
    IJobQueue,
    IPaymentGateway,
)

__all__ = [
    "IApprovalSystemRepository",
    "ICacheService",
    "IContentTypeRepository",
    "IFlowRepository",
    "IInstanceRepository",
    "IInvoiceRenderer",
    "IInvoiceStorage",
    "IJobQueue",
    "IJobRepository",
    "IMembershipRepository",
    "IOrganisationRepository",
    "IPaymentGateway",
    "IPaymentRepository",
    "IPlanRepository",
    "IStateRepository",
    "IUserRepository",
]
