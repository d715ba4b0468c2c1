from pydantic import BaseModel, Field, field_validator
from typing import Any, Dict, Optional
from datetime import datetime


class SignupRequest(BaseModel):
    """Schema for creating an account."""
    email: str = Field(..., description="Account email address")
    password: str = Field(..., min_length=6, description="Plain text password")
    full_name: Optional[str] = Field(default=None, description="Display name")

    @field_validator("email")
    @classmethod
    def email_not_blank(cls, value: str) -> str:
        value = value.strip().lower()
        if not value:
            raise ValueError("Email is required")
        return value


class LoginRequest(BaseModel):
    """Schema for user login."""
    email: str = Field(..., description="Account email address")
    password: str = Field(..., description="Plain text password")


class UpdateProfileRequest(BaseModel):
    """Schema for updating the current user's profile."""
    email: Optional[str] = Field(default=None, description="New email address")
    full_name: Optional[str] = Field(default=None, description="New display name")
    metadata: Optional[Dict[str, Any]] = Field(default=None, description="Metadata merged into the stored metadata")


# Response Schemas
class UserResponse(BaseModel):
    """Schema for user responses (excludes sensitive information)."""
    id: str = Field(..., description="User ID")
    email: str = Field(..., description="User email address")
    full_name: Optional[str] = Field(default=None, description="Display name")
    user_metadata: Dict[str, Any] = Field(default_factory=dict, description="Free-form profile metadata")
    created_at: datetime = Field(..., description="Account creation timestamp")

    model_config = {"from_attributes": True}


class LoginResponse(BaseModel):
    """Schema for login response."""
    access_token: str = Field(..., description="Bearer access token")
    refresh_token: Optional[str] = Field(default=None, description="Refresh token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_at: datetime = Field(..., description="When the access token expires")
    user: UserResponse = Field(..., description="Authenticated user information")


class ProfileEnvelope(BaseModel):
    """Profile wrapped with a confirmation message."""
    message: str = Field(..., description="Result message")
    user: UserResponse = Field(..., description="Updated profile")


class MessageResponse(BaseModel):
    """Generic message response."""
    message: str = Field(..., description="Response message")


class DeleteProfileResponse(BaseModel):
    """Account deletion confirmation."""
    message: str = Field(..., description="Response message")
    deleted: bool = Field(..., description="Whether the account was removed")
