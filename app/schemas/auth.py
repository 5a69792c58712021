"""
Auth schemas - Pydantic models for authentication request/response validation.
"""

from pydantic import BaseModel, EmailStr, Field


class UserRegister(BaseModel):
    """
    Schema for POST /auth/register request body.

    Example request body:
    {
        "email": "ana@example.com",
        "password": "securePassword123",
        "display_name": "Ana"
    }
    """
    email: EmailStr

    # password: Plaintext from the client, hashed before storing
    password: str = Field(..., min_length=8)

    display_name: str | None = None


class UserLogin(BaseModel):
    """
    Schema for POST /auth/login request body.
    """
    email: EmailStr
    password: str


class Token(BaseModel):
    """
    Schema for POST /auth/login response.

    Clients send it back as: Authorization: Bearer <access_token>
    """
    access_token: str

    # token_type: Always "bearer" (OAuth 2.0 compatibility)
    token_type: str = "bearer"


class GoogleAuthURL(BaseModel):
    """
    Schema for GET /auth/google/login response.

    The client opens auth_url in a browser; Google redirects back to
    /auth/google/callback with the same state.
    """
    auth_url: str
    state: str


class GoogleConnectionStatus(BaseModel):
    """Schema for GET /auth/google/status response."""
    connected: bool
