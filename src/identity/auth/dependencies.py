"""FastAPI dependencies that gate routes on the session cookie."""

from fastapi import HTTPException, Request, status

from identity.auth.tokens import InvalidToken, SessionUser, decode_session_token
from shared.settings import get_settings


def optional_user(request: Request) -> SessionUser | None:
    token = request.cookies.get(get_settings().auth_cookie_name)
    if not token:
        return None
    try:
        return decode_session_token(token)
    except InvalidToken:
        return None


def current_user(request: Request) -> SessionUser:
    user = optional_user(request)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    return user


def require_admin(request: Request) -> SessionUser:
    user = current_user(request)
    if not user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return user
