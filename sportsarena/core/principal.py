"""The request-scoped principal and the capability checks run against it.

Every service operation receives the principal explicitly and calls
``require_role`` (or ``require_staff``) before touching the database.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from sportsarena.core.errors import AuthenticationRequired, PermissionDenied
from sportsarena.models.user import STAFF_ROLES, User, UserRole


@dataclass(frozen=True)
class Principal:
    user_id: int
    role: UserRole

    @classmethod
    def from_user(cls, user: User) -> "Principal":
        return cls(user_id=user.id, role=UserRole(user.role))

    @property
    def is_staff(self) -> bool:
        return self.role in STAFF_ROLES

    def owns(self, user_id: int) -> bool:
        return self.user_id == user_id


def require_role(
    principal: Principal | None,
    roles: Iterable[UserRole],
    message: str = "Insufficient role",
) -> Principal:
    """Raise unless the principal is authenticated and holds one of ``roles``."""
    if principal is None:
        raise AuthenticationRequired("Not authenticated")
    if principal.role not in tuple(roles):
        raise PermissionDenied(message)
    return principal


def require_staff(principal: Principal | None, message: str = "Staff access required") -> Principal:
    return require_role(principal, STAFF_ROLES, message)


def require_owner_or_staff(principal: Principal, owner_id: int, message: str) -> None:
    if not (principal.owns(owner_id) or principal.is_staff):
        raise PermissionDenied(message)
