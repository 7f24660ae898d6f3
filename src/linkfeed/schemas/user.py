"""User and authentication Pydantic schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class SignupRequest(BaseModel):
    """Schema for account registration."""

    name: str = Field(..., description="Display name")
    email: EmailStr = Field(..., description="Login email, stored lowercased")
    password: str = Field(..., description="Plaintext password (6-72 bytes)")


class LoginRequest(BaseModel):
    """Schema for login submissions."""

    email: str = Field(..., description="Registered email")
    password: str = Field(..., description="Plaintext password")


class UserPublic(BaseModel):
    """User fields safe to expose; never includes the password hash."""

    id: str
    name: str
    email: str

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
    """Token and user returned after signup or login."""

    token: str = Field(..., description="JWT bearer token")
    user: UserPublic


class MeResponse(BaseModel):
    """Response for the authenticated-user endpoint."""

    user: UserPublic
