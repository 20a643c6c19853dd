"""Organisation use cases."""

from contentflow.application.use_cases.organisations.create_organisation import (
    OrganisationService,
)

__all__ = ["OrganisationService"]
