"""DTOs for user use cases (no dependency on ORM)."""

from dataclasses import dataclass

from contentflow.domain.enums import UserRole


@dataclass(frozen=True)
class UserResult:
    """User read-model (result of get_by_id, create_user, etc.). No password."""

    id: str
    organisation_id: str
    name: str
    email: str
    role: UserRole
    is_active: bool

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def can_manage(self, organisation_id: str) -> bool:
        """True for platform admins and for owners of the given organisation."""
        if self.is_admin:
            return True
        return self.role == UserRole.OWNER and self.organisation_id == organisation_id
