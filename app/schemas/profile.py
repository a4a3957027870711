# schemas/profile.py
from pydantic import BaseModel, EmailStr, Field, ConfigDict, field_validator
from typing import Optional
from datetime import datetime
from uuid import UUID


# =====================================================================
# 1. AUTH REQUESTS
# =====================================================================

class RegisterRequest(BaseModel):
    """Public sign-up request."""
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=128)
    display_name: Optional[str] = Field(None, max_length=100)

    @field_validator('password')
    @classmethod
    def validate_password_strength(cls, v: str) -> str:
        if not any(c.isalpha() for c in v):
            raise ValueError('Password must contain at least one letter')
        if not any(c.isdigit() for c in v):
            raise ValueError('Password must contain at least one digit')
        return v


class LoginRequest(BaseModel):
    """User login request."""
    email: EmailStr
    password: str = Field(..., min_length=1)


class RefreshTokenRequest(BaseModel):
    """Refresh token request."""
    refresh_token: str


# =====================================================================
# 2. PROFILE
# =====================================================================

class ProfileUpdate(BaseModel):
    """Profile settings update."""
    display_name: str = Field(..., max_length=100)

    @field_validator('display_name')
    @classmethod
    def validate_display_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('Please enter your display name')
        return v


class ProfileOut(BaseModel):
    """Public view of the signed-in user's profile."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: EmailStr
    display_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime


# =====================================================================
# 3. RESPONSES
# =====================================================================

class TokenResponse(BaseModel):
    """Authentication token response."""
    access_token: str
    token_type: str = "bearer"
    refresh_token: str
    user: ProfileOut


class SuccessResponse(BaseModel):
    """Generic success response."""
    success: bool = True
    message: str
