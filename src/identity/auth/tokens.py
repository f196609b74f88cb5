"""Signed session tokens (JWT) carried in an HTTP-only cookie.

Tokens have a fixed expiry; there is no refresh, sliding expiry or
revocation list.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from shared.settings import get_settings


@dataclass(frozen=True)
class SessionUser:
    """The identity carried by a valid session token."""

    id: str
    email: str
    name: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == "Admin"


class InvalidToken(Exception):
    """The token is missing, tampered with, or expired."""


def create_session_token(user_id: str, email: str, name: str, role: str, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    expire = datetime.now(UTC) + (expires_delta or timedelta(days=settings.jwt_expiry_days))
    claims = {
        "sub": str(user_id),
        "email": email,
        "name": name,
        "role": role,
        "exp": expire,
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_session_token(token: str) -> SessionUser:
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise InvalidToken(str(exc)) from exc

    if not payload.get("sub"):
        raise InvalidToken("Token has no subject")

    return SessionUser(
        id=payload["sub"],
        email=payload.get("email", ""),
        name=payload.get("name", ""),
        role=payload.get("role", "User"),
    )
