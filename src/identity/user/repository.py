"""Repository for the User aggregate."""

from identity.domain import identity
from identity.user.user import User, UserRole, normalize_email


@identity.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email: str) -> User | None:
        return self._dao.query.filter(email=normalize_email(email)).all().first

    def list_customers(self) -> list[User]:
        """Accounts with the ``User`` role, newest first. Administrators are never listed."""
        return self._dao.query.filter(role=UserRole.USER.value).order_by("-registered_at").all().items
