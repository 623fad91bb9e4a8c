"""
Pydantic schemas for authentication request/response validation.
"""
from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    """Credentials posted to the login endpoint."""

    email: str
    password: str = Field(..., repr=False)


class LoginResponse(BaseModel):
    """Response returned by a successful login."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    token: str
    full_name: str = Field(..., alias="fullName")


class CheckEmailResponse(BaseModel):
    """Response of the e-mail availability check."""

    exists: bool
