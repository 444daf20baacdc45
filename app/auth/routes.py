# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# API endpoints for account creation, login and the current identity.
#
# signup and login are the only endpoints that don't require a token.
# =============================================================================

import logging

from fastapi import APIRouter, Depends

from app.auth.dependencies import get_current_user
from app.auth.models import (
    AuthUser,
    LoginRequest,
    LoginResponse,
    SignupRequest,
    UserEnvelope,
)
from app.dependencies import UserServiceDep

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/signup", response_model=UserEnvelope)
def signup(body: SignupRequest, users: UserServiceDep) -> UserEnvelope:
    """
    Create an account in the table for its role.

    Returns:
        UserEnvelope: The created identity

    Raises:
        400: If the role is invalid or the store rejects the row
    """
    user = users.signup(
        user_id=body.user_id,
        full_name=body.full_name,
        phone=body.phone,
        password=body.password,
        role=body.role,
    )
    return UserEnvelope(user=user)


@router.post("/login", response_model=LoginResponse)
def login(body: LoginRequest, users: UserServiceDep) -> LoginResponse:
    """
    Exchange phone + password + role for a session token.

    Raises:
        400: If the role is invalid
        401: If the password is wrong
        404: If no account has this phone
    """
    token, user = users.login(body.phone, body.password, body.role)
    return LoginResponse(token=token, user=user)


@router.get("/me", response_model=UserEnvelope)
def get_current_user_info(
    users: UserServiceDep,
    user: AuthUser = Depends(get_current_user),
) -> UserEnvelope:
    """
    Get the current authenticated user's profile.

    Raises:
        401: If not authenticated
        404: If the account no longer exists
    """
    return UserEnvelope(user=users.get_profile(user.id, user.role))
