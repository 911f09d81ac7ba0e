"""Studio users and role checks."""

from dataclasses import dataclass

from content_studio.domain.enums import UserRole
from content_studio.exceptions import PermissionDeniedError


@dataclass(frozen=True)
class User:
    """A studio user."""

    id: str
    name: str
    role: UserRole

    @property
    def is_owner(self) -> bool:
        return self.role == UserRole.OWNER


DEFAULT_USER = User(id="u_1", name="Admin User", role=UserRole.OWNER)


def require_owner(user: User, action: str) -> None:
    """Raise PermissionDeniedError unless the user holds the OWNER role."""
    if not user.is_owner:
        raise PermissionDeniedError(f"Only owners can {action}")
