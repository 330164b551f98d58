"""Pydantic schemas for authentication endpoints."""

from pydantic import BaseModel, EmailStr, Field


class SignUpRequest(BaseModel):
    """Request model for account creation."""
    full_name: str = Field(..., min_length=1)
    email: EmailStr


class SignInRequest(BaseModel):
    """Request model for requesting a sign-in code."""
    email: EmailStr


class AccountResponse(BaseModel):
    """Response model carrying the account id a code was sent for."""
    account_id: str


class VerifyRequest(BaseModel):
    """Request model for exchanging a one-time code for a session."""
    account_id: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class VerifyResponse(BaseModel):
    """Response model for a verified session."""
    session_id: str
    session_token: str


class UserResponse(BaseModel):
    """Response model for the signed-in user."""
    user_id: str
    account_id: str
    full_name: str
    email: str
    avatar_url: str
