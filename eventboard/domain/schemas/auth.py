"""Pydantic schemas for User and Auth."""

import re
from datetime import date, datetime, timezone
from typing import Any, ClassVar, Optional, Tuple

from pydantic import BaseModel, field_validator, model_validator

from eventboard.domain.models.user import Gender, Role
from eventboard.domain.schemas.common import UpdateRequest, invalid, is_blank, parse_date

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
NAME_PART_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 255
PASSWORD_MIN_LENGTH = 8

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class UserFields(BaseModel):
    """Rules shared by the registration and profile bodies."""

    @field_validator("name", mode="before", check_fields=False)
    @classmethod
    def validate_name(cls, value: Any) -> str:
        if is_blank(value):
            raise invalid("Name is required.")
        if not isinstance(value, str) or not NAME_MIN_LENGTH <= len(value.strip()) <= NAME_MAX_LENGTH:
            raise invalid(f"Name must be between {NAME_MIN_LENGTH} and {NAME_MAX_LENGTH} characters.")
        return value.strip()

    @field_validator("password", mode="before", check_fields=False)
    @classmethod
    def validate_password(cls, value: Any) -> str:
        if is_blank(value):
            raise invalid("Password is required.")
        if not isinstance(value, str) or len(value) < PASSWORD_MIN_LENGTH:
            raise invalid(f"Password must be at least {PASSWORD_MIN_LENGTH} characters long.")
        return value

    @field_validator("first_name", "last_name", "middle_name", mode="before", check_fields=False)
    @classmethod
    def validate_name_part(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        if not isinstance(value, str) or len(value.strip()) > NAME_PART_MAX_LENGTH:
            raise invalid(f"Must be a string of at most {NAME_PART_MAX_LENGTH} characters.")
        return value.strip() or None

    @field_validator("gender", mode="before", check_fields=False)
    @classmethod
    def validate_gender(cls, value: Any) -> Optional[Gender]:
        if value is None:
            return None
        try:
            return Gender(value)
        except (ValueError, TypeError):
            raise invalid("Invalid gender value. Must be one of: {}.".format(", ".join(g.value for g in Gender)))

    @field_validator("birth_date", mode="before", check_fields=False)
    @classmethod
    def validate_birth_date(cls, value: Any) -> Optional[date]:
        if value is None:
            return None
        parsed = parse_date(value)
        if parsed is None:
            raise invalid("Invalid birth date format.")
        if parsed >= datetime.now(timezone.utc).date():
            raise invalid("Birth date must be in the past.")
        return parsed


class RegisterRequest(UserFields):
    name: str
    email: str
    password: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    middle_name: Optional[str] = None
    gender: Optional[Gender] = None
    birth_date: Optional[date] = None

    @field_validator("email", mode="before")
    @classmethod
    def validate_email(cls, value: Any) -> str:
        if is_blank(value):
            raise invalid("Email is required.")
        if not isinstance(value, str) or len(value) > EMAIL_MAX_LENGTH or not EMAIL_RE.match(value.strip()):
            raise invalid("Invalid email format.")
        return value.strip().lower()


class LoginRequest(BaseModel):
    email: str
    password: str

    @model_validator(mode="before")
    @classmethod
    def require_credentials(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        email, password = data.get("email"), data.get("password")
        if is_blank(email) or is_blank(password) or not isinstance(email, str) or not isinstance(password, str):
            raise invalid("Email and password are required.", field="credentials")
        return {**data, "email": email.strip().lower()}


class ProfileUpdate(UserFields, UpdateRequest):
    protected_fields: ClassVar[Tuple[str, ...]] = ("id", "email", "role")
    protected_message: ClassVar[str] = "Cannot modify id, email or role via the profile."

    name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    middle_name: Optional[str] = None
    gender: Optional[Gender] = None
    birth_date: Optional[date] = None
    password: Optional[str] = None


class RoleUpdate(BaseModel):
    role: Role

    @field_validator("role", mode="before")
    @classmethod
    def validate_role(cls, value: Any) -> Role:
        try:
            return Role(value)
        except (ValueError, TypeError):
            raise invalid("Invalid role specified. Must be one of: {}.".format(", ".join(r.value for r in Role)))


class UserRead(BaseModel):
    id: int
    name: str
    email: str
    role: Role
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    middle_name: Optional[str] = None
    gender: Optional[Gender] = None
    birth_date: Optional[date] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class UserResponse(BaseModel):
    message: str
    user: UserRead


class TokenResponse(BaseModel):
    message: str = "Login successful!"
    token: str
    token_type: str = "bearer"
    expires_in: int
    user: UserRead


class CurrentUserResponse(BaseModel):
    user: UserRead


class UserListResponse(BaseModel):
    count: int
    data: list[UserRead]


class ProfileResponse(BaseModel):
    data: UserRead


class ProfileUpdateResponse(BaseModel):
    message: str
    data: UserRead
