"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from contentflow.api.v1.dependencies.
"""

from fastapi import APIRouter

from contentflow.api.v1.endpoints import (
    approval_systems,
    auth,
    content_types,
    flows,
    health,
    instances,
    jobs,
    memberships,
    organisations,
    payments,
    plans,
    users,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(
    organisations.router, prefix="/organisations", tags=["organisations"]
)
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(flows.router, prefix="/flows", tags=["flows"])
api_router.include_router(
    content_types.router, prefix="/content-types", tags=["content-types"]
)
api_router.include_router(instances.router, prefix="/instances", tags=["instances"])
api_router.include_router(
    approval_systems.router, prefix="/approval-systems", tags=["approval-systems"]
)
api_router.include_router(plans.router, prefix="/plans", tags=["plans"])
api_router.include_router(memberships.router, prefix="/memberships", tags=["memberships"])
api_router.include_router(payments.router, prefix="/payments", tags=["payments"])
api_router.include_router(jobs.router, prefix="/jobs", tags=["jobs"])
