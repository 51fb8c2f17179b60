"""Pydantic schemas for users, profiles and auth."""

from datetime import date
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, model_validator

from components.core.validation import explicit_nulls

Gender = Literal["male", "female", "prefer_not_to_say"]
MaritalStatus = Literal["Single", "Engaged", "Researching"]
ThemeMode = Literal["light", "dark", "system"]


class UserBase(BaseModel):
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class UserCreate(UserBase):
    """Schema for user registration."""
    password: str


class User(UserBase):
    """Schema for user response."""
    id: int
    full_name: Optional[str] = None
    registration_date: date
    role: str
    partner_id: Optional[int] = None

    class Config:
        from_attributes = True


class Tokens(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class UserWithToken(User, Tokens):
    """User response enriched with a fresh token pair."""
    pass


class RefreshRequest(BaseModel):
    refresh_token: str


class PasswordResetRequest(BaseModel):
    email: str


class PasswordResetConfirm(BaseModel):
    token: str
    new_password: str


class PasswordResetAccepted(BaseModel):
    message: str
    reset_token: Optional[str] = None


class Profile(User):
    """Full profile as shown on the profile page."""
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None
    marital_status: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    wedding_date: Optional[date] = None
    theme_mode: str = "system"


class ProfileUpdate(BaseModel):
    """Fields a user may change on their own profile; omitted fields are left as is."""
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None
    marital_status: Optional[MaritalStatus] = None
    country: Optional[str] = Field(None, max_length=100)
    city: Optional[str] = Field(None, max_length=100)
    wedding_date: Optional[date] = None
    theme_mode: Optional[ThemeMode] = None

    @model_validator(mode="after")
    def check_required_fields(self):
        nulls = explicit_nulls(self, ("theme_mode",))
        if nulls:
            raise ValueError(f"{', '.join(nulls)} cannot be null")
        return self


class PasswordStrength(BaseModel):
    strength: Literal["weak", "medium", "strong"]
    score: int
    feedback: List[str]
