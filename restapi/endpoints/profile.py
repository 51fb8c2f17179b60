"""Profile endpoints for the API."""

from typing import Any

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.errors import FormValidationError
from components.core.init_db import get_db
from components.core.validation import get_password_strength, validate_name
from components.user import schemas
from components.user.models import User
from components.user.repository import UserRepository
from restapi.endpoints.auth import get_current_user

router = APIRouter(
    prefix="/profile",
    tags=["profile"],
    responses={404: {"description": "Not found"}},
)


@router.get("", response_model=schemas.Profile)
async def read_profile(current_user: User = Depends(get_current_user)) -> Any:
    """Get the current user's profile."""
    return current_user


@router.put("", response_model=schemas.Profile)
async def update_profile(
    changes: schemas.ProfileUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
) -> Any:
    """
    Update the current user's profile.

    Only the submitted fields change. Names allow letters, spaces, hyphens
    and apostrophes, 2 to 50 characters.
    """
    values = changes.model_dump(exclude_unset=True)
    errors = {}
    for field in ("first_name", "last_name"):
        if field in values:
            error = validate_name(values[field], field)
            if error:
                errors[field] = error
    if errors:
        raise FormValidationError(errors)

    return await UserRepository(db).update_profile(current_user, values)


@router.get("/password-strength", response_model=schemas.PasswordStrength)
async def password_strength(
    password: str = Query(..., description="Password to score"),
) -> Any:
    """Score a password for the strength meter."""
    result = get_password_strength(password)
    return schemas.PasswordStrength(strength=result.strength, score=result.score, feedback=result.feedback)
