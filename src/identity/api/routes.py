"""FastAPI endpoints for the Identity domain - authentication and user administration."""

from fastapi import APIRouter, Depends, HTTPException, Response
from protean.utils.globals import current_domain

from identity.api.schemas import (
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    SessionResponse,
    UserResponse,
)
from identity.auth.dependencies import current_user, require_admin
from identity.auth.passwords import MIN_PASSWORD_LENGTH, hash_password, verify_password
from identity.auth.tokens import SessionUser, create_session_token
from identity.domain import logger
from identity.user.registration import DeleteUser, RegisterUser
from identity.user.user import User
from shared.settings import get_settings

auth_router = APIRouter(prefix="/auth", tags=["auth"])
user_router = APIRouter(prefix="/users", tags=["users"])


# --- Authentication ---


@auth_router.post("/register", status_code=201, response_model=RegisterResponse)
async def register(body: RegisterRequest) -> RegisterResponse:
    if len(body.password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(status_code=400, detail=f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    command = RegisterUser(
        name=body.name,
        email=body.email,
        password_hash=hash_password(body.password),
    )
    account_id = current_domain.process(command, asynchronous=False)
    user = current_domain.repository_for(User).get(account_id)
    return RegisterResponse(message="User registered successfully", user_id=user.user_id)


@auth_router.post("/login", response_model=SessionResponse)
async def login(body: LoginRequest, response: Response) -> SessionResponse:
    user = current_domain.repository_for(User).find_by_email(body.email)
    if user is None or not verify_password(body.password, user.password_hash):
        logger.info("login_failed", email=body.email)
        raise HTTPException(status_code=401, detail="Invalid credentials")

    settings = get_settings()
    token = create_session_token(str(user.id), user.email, user.name, user.role)
    response.set_cookie(
        key=settings.auth_cookie_name,
        value=token,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
        max_age=settings.jwt_expiry_days * 24 * 60 * 60,
        path="/",
    )
    logger.info("login_succeeded", account_id=str(user.id), role=user.role)
    return SessionResponse(message="Login successful", user=UserResponse.from_aggregate(user))


@auth_router.post("/logout", response_model=MessageResponse)
async def logout(response: Response) -> MessageResponse:
    settings = get_settings()
    response.delete_cookie(
        key=settings.auth_cookie_name,
        path="/",
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )
    return MessageResponse(message="Logged out")


@auth_router.get("/me", response_model=UserResponse)
async def me(user: SessionUser = Depends(current_user)) -> UserResponse:
    return UserResponse.from_aggregate(current_domain.repository_for(User).get(user.id))


@auth_router.get("/check", response_model=MessageResponse)
async def check_admin(user: SessionUser = Depends(require_admin)) -> MessageResponse:
    return MessageResponse(message=f"Authenticated as {user.email}")


# --- User administration ---


@user_router.get("", response_model=list[UserResponse], dependencies=[Depends(require_admin)])
async def list_users() -> list[UserResponse]:
    return [UserResponse.from_aggregate(u) for u in current_domain.repository_for(User).list_customers()]


@user_router.get("/{account_id}", response_model=UserResponse)
async def get_user(account_id: str, session: SessionUser = Depends(current_user)) -> UserResponse:
    if not session.is_admin and session.id != account_id:
        raise HTTPException(status_code=403, detail="Admin access required")
    return UserResponse.from_aggregate(current_domain.repository_for(User).get(account_id))


@user_router.delete("/{account_id}", response_model=MessageResponse, dependencies=[Depends(require_admin)])
async def delete_user(account_id: str) -> MessageResponse:
    current_domain.process(DeleteUser(account_id=account_id), asynchronous=False)
    return MessageResponse(message="User deleted successfully")
