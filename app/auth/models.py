# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from typing import Any

from pydantic import BaseModel, ConfigDict

from core.models.roles import Role


class AuthUser(BaseModel):
    """
    Authenticated identity extracted from a verified session token.

    This is the identity info available from the token itself,
    without querying the store.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    role: Role


class SignupRequest(BaseModel):
    """Body of POST /auth/signup. Identity fields are stored as sent."""
    user_id: Any
    full_name: Any
    phone: Any
    password: str
    # Validated by resolve_role(); unknown tags raise InvalidRoleError
    role: Any


class LoginRequest(BaseModel):
    """Body of POST /auth/login."""
    phone: Any
    password: str
    role: Any


class UserEnvelope(BaseModel):
    """Response wrapping a single identity row."""
    user: dict[str, Any]


class LoginResponse(BaseModel):
    """Response of a successful login."""
    token: str
    user: dict[str, Any]
