"""Pydantic schemas for the console auth API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """Operator credentials.

    Example:
        ```json
        {"username": "operator", "password": "s3cret"}
        ```
    """

    username: str = Field(..., min_length=1, max_length=200, description="Operator username")
    password: str = Field(..., min_length=1, max_length=1024, description="Operator password")


class SuccessResponse(BaseModel):
    """Acknowledgement body used by login, logout and resend."""

    success: bool = True


class SessionResponse(BaseModel):
    """The session carried by the request cookie.

    Example:
        ```json
        {"authenticated": true, "username": "operator", "expiresAt": 1735693200000}
        ```
    """

    model_config = ConfigDict(populate_by_name=True)

    authenticated: bool
    username: str
    expires_at: int = Field(..., alias="expiresAt", description="Expiry as epoch milliseconds")
