"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
Email and password formats are checked by the domain against the configured
patterns, not here.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.domain.users import MAX_FIELD_LENGTH, PhoneInput, UserView


def _reject_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


class PhoneRequest(BaseModel):
    """Phone submitted with a registration."""

    number: str = Field(..., min_length=1, max_length=MAX_FIELD_LENGTH, description="Phone number")
    citycode: str = Field(..., min_length=1, max_length=MAX_FIELD_LENGTH, description="City code")
    contrycode: str = Field(
        ..., min_length=1, max_length=MAX_FIELD_LENGTH, description="Country code"
    )

    @field_validator("number", "citycode", "contrycode")
    @classmethod
    def not_blank(cls, v: str) -> str:
        return _reject_blank(v)

    def to_domain(self) -> PhoneInput:
        return PhoneInput(number=self.number, city_code=self.citycode, country_code=self.contrycode)


class RegisterRequest(BaseModel):
    """Request model for user registration."""

    name: str = Field(..., min_length=1, max_length=MAX_FIELD_LENGTH, description="Display name")
    email: str = Field(..., min_length=1, max_length=MAX_FIELD_LENGTH, description="Email address")
    password: str = Field(..., min_length=1, max_length=MAX_FIELD_LENGTH, description="Password")
    phones: list[PhoneRequest] = Field(..., description="Phones owned by the user, may be empty")

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        return _reject_blank(v).strip()

    # Kept as typed; only an all-whitespace value is refused.
    @field_validator("password")
    @classmethod
    def password_not_blank(cls, v: str) -> str:
        return _reject_blank(v)


class UserResponse(BaseModel):
    """Public view of a registered user."""

    id: UUID
    created: datetime | None
    modified: datetime | None
    last_login: datetime | None
    token: str
    isactive: bool

    @classmethod
    def from_view(cls, view: UserView) -> "UserResponse":
        return cls(
            id=view.id,
            created=view.created,
            modified=view.modified,
            last_login=view.last_login,
            token=view.token,
            isactive=view.is_active,
        )


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str
