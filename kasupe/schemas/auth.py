"""Pydantic v2 request/response schemas for admin and customer authentication."""

import uuid

from pydantic import ConfigDict, EmailStr, Field, field_validator

from kasupe.schemas.common import CamelModel, UTCDatetime

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class _EmailNormalizer(CamelModel):
    @field_validator("email", mode="after", check_fields=False)
    @classmethod
    def _lowercase_email(cls, value: str) -> str:
        return value.lower()


class LoginRequest(_EmailNormalizer):
    """Email/password login, shared by admins and customers."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class AdminCreateRequest(_EmailNormalizer):
    """Create an admin account (bootstrap seed or invite)."""

    email: EmailStr
    name: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=8, max_length=72)


class ChangePasswordRequest(CamelModel):
    old_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8, max_length=72)


class CustomerSignupRequest(_EmailNormalizer):
    """Public customer signup form."""

    full_name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: str | None = Field(None, max_length=50)
    password: str = Field(..., min_length=8, max_length=72)


class RefreshRequest(CamelModel):
    """Schema for token refresh."""

    refresh_token: str


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class TokenResponse(CamelModel):
    """JWT token pair returned on successful authentication."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class AdminResponse(CamelModel):
    """Admin profile information."""

    id: uuid.UUID
    email: str
    name: str
    role: str
    created_at: UTCDatetime

    model_config = ConfigDict(from_attributes=True)


class CustomerResponse(CamelModel):
    """Customer profile information."""

    id: uuid.UUID
    full_name: str
    email: str
    phone: str | None = None
    is_active: bool
    created_at: UTCDatetime

    model_config = ConfigDict(from_attributes=True)


class AdminAuthResponse(CamelModel):
    """Admin profile + tokens returned on login."""

    user: AdminResponse
    tokens: TokenResponse


class CustomerAuthResponse(CamelModel):
    """Customer profile + tokens returned on signup/login."""

    user: CustomerResponse
    tokens: TokenResponse


class AdminCreatedResponse(CamelModel):
    message: str
    admin: AdminResponse
