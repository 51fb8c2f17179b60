"""Authentication endpoints for registration, login, token refresh and password reset."""

from typing import Any

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer, OAuth2PasswordRequestForm
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.config import get_settings
from components.core.errors import FormValidationError
from components.core.init_db import get_db
from components.core.security import (
    REFRESH_TOKEN,
    RESET_TOKEN,
    create_access_token,
    create_password_reset_token,
    create_refresh_token,
    password_fingerprint,
    verify_password,
    verify_token,
)
from components.core.validation import validate_email, validate_name, validate_password
from components.user.models import User
from components.user.repository import UserRepository
from components.user.schemas import (
    PasswordResetAccepted,
    PasswordResetConfirm,
    PasswordResetRequest,
    RefreshRequest,
    Tokens,
    User as UserSchema,
    UserCreate,
    UserWithToken,
)

logger = structlog.get_logger(__name__)
settings = get_settings()

router = APIRouter(prefix="/auth", tags=["authentication"])
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login")

CREDENTIALS_ERROR = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Could not validate credentials",
    headers={"WWW-Authenticate": "Bearer"},
)


async def get_current_user(
    db: AsyncSession = Depends(get_db),
    token: str = Depends(oauth2_scheme)
) -> User:
    """Get current user from JWT token."""
    payload = verify_token(token)
    if payload is None or payload.get("sub") is None:
        raise CREDENTIALS_ERROR

    user = await UserRepository(db).get_by_id(int(payload["sub"]))
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


async def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Only admins get past this dependency."""
    if not current_user.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return current_user


def issue_tokens(user: User) -> Tokens:
    claims = {"sub": str(user.id)}
    return Tokens(access_token=create_access_token(claims), refresh_token=create_refresh_token(claims))


def with_tokens(user: User) -> UserWithToken:
    return UserWithToken(
        **UserSchema.model_validate(user).model_dump(),
        **issue_tokens(user).model_dump(),
    )


@router.post("/register", response_model=UserWithToken)
async def create_user(
    user_in: UserCreate,
    db: AsyncSession = Depends(get_db)
) -> Any:
    """Create new user and return a token pair."""
    errors = {}
    if not validate_email(user_in.email.strip()):
        errors["email"] = "Please enter a valid email address"
    password_errors = validate_password(user_in.password)
    if password_errors:
        errors["password"] = password_errors[0]
    for field in ("first_name", "last_name"):
        value = getattr(user_in, field)
        if value is not None:
            error = validate_name(value, field)
            if error:
                errors[field] = error
    if errors:
        raise FormValidationError(errors)

    repo = UserRepository(db)
    if await repo.exists(user_in.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered",
        )

    user = await repo.create(user_in)
    logger.info("user_registered", user_id=user.id)
    return with_tokens(user)


@router.post("/login", response_model=UserWithToken)
async def login(
    db: AsyncSession = Depends(get_db),
    form_data: OAuth2PasswordRequestForm = Depends()
) -> Any:
    """Login with email as username and return a token pair."""
    user = await UserRepository(db).get_by_email(form_data.username)

    if not user or not verify_password(form_data.password, user.password):
        logger.info("login_failed")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    logger.info("user_logged_in", user_id=user.id)
    return with_tokens(user)


@router.post("/refresh", response_model=Tokens)
async def refresh(
    body: RefreshRequest,
    db: AsyncSession = Depends(get_db)
) -> Any:
    """Exchange a refresh token for a new token pair."""
    payload = verify_token(body.refresh_token, REFRESH_TOKEN)
    if payload is None or payload.get("sub") is None:
        raise CREDENTIALS_ERROR

    user = await UserRepository(db).get_by_id(int(payload["sub"]))
    if user is None:
        raise CREDENTIALS_ERROR
    return issue_tokens(user)


@router.post("/password-reset", response_model=PasswordResetAccepted, status_code=status.HTTP_202_ACCEPTED)
async def request_password_reset(
    body: PasswordResetRequest,
    db: AsyncSession = Depends(get_db)
) -> Any:
    """
    Start a password reset.

    The response is the same whether or not the email is registered. The
    reset token is only returned in debug mode; otherwise it would be mailed.
    """
    response = PasswordResetAccepted(message="If the email is registered, a reset link has been sent")
    user = await UserRepository(db).get_by_email(body.email)
    if user is None:
        return response

    token = create_password_reset_token(user.id, user.password)
    logger.info("password_reset_requested", user_id=user.id)
    if settings.DEBUG:
        response.reset_token = token
    return response


@router.post("/password-reset/confirm", response_model=PasswordResetAccepted)
async def confirm_password_reset(
    body: PasswordResetConfirm,
    db: AsyncSession = Depends(get_db)
) -> Any:
    """Set a new password with a reset token; each token works once."""
    invalid = HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail="Invalid or expired reset token",
    )
    payload = verify_token(body.token, RESET_TOKEN)
    if payload is None or payload.get("sub") is None:
        raise invalid

    repo = UserRepository(db)
    user = await repo.get_by_id(int(payload["sub"]))
    if user is None or payload.get("pwd") != password_fingerprint(user.password):
        raise invalid

    password_errors = validate_password(body.new_password)
    if password_errors:
        raise FormValidationError({"new_password": password_errors[0]})

    await repo.set_password(user, body.new_password)
    logger.info("password_reset_completed", user_id=user.id)
    return PasswordResetAccepted(message="Password has been reset")
