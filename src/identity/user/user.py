"""User aggregate root - storefront customers and back-office administrators."""

import re
import secrets
import string
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, String

from identity.domain import identity

_PUBLIC_ID_ALPHABET = string.ascii_lowercase + string.digits
_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class UserRole(Enum):
    USER = "User"
    ADMIN = "Admin"


def generate_public_id() -> str:
    """Public handle shown to customers, e.g. ``user_k3x9q2a``."""
    return "user_" + "".join(secrets.choice(_PUBLIC_ID_ALPHABET) for _ in range(7))


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


@identity.aggregate
class User:
    """A registered account.

    Customers register themselves through the public API and always get the
    ``User`` role. Administrators are provisioned out of band (see
    ``manage.py create-admin``); no endpoint changes a role after creation.
    Only the password hash is ever stored.
    """

    user_id: String(required=True, max_length=20, unique=True)
    name: String(required=True, max_length=100)
    email: String(required=True, max_length=254, unique=True)
    password_hash: String(required=True, max_length=255)
    role: String(choices=UserRole, default=UserRole.USER.value)
    registered_at: DateTime()

    @invariant.post
    def email_must_be_well_formed(self):
        if self.email and not _EMAIL_PATTERN.match(self.email):
            raise ValidationError({"email": [f"Invalid email address: {self.email!r}"]})

    @property
    def is_admin(self):
        return self.role == UserRole.ADMIN.value

    @classmethod
    def register(cls, name, email, password_hash, role=None):
        from identity.user.events import UserRegistered

        now = datetime.now(UTC)
        user = cls(
            user_id=generate_public_id(),
            name=name.strip() if name else name,
            email=normalize_email(email),
            password_hash=password_hash,
            role=role or UserRole.USER.value,
            registered_at=now,
        )
        user.raise_(
            UserRegistered(
                account_id=user.id,
                user_id=user.user_id,
                name=user.name,
                email=user.email,
                role=user.role,
                registered_at=now,
            )
        )
        return user
