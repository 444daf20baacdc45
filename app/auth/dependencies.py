# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Request interceptors for protected endpoints, applied in order:
#
#   1. get_current_user - bearer token must verify, else 401
#   2. require_role(...) - verified role must match, else 403
#
# Each one either returns (the request continues) or raises (the request
# ends with that error). require_role depends on get_current_user, so an
# unauthenticated request always gets 401, never 403.
#
# Usage:
#   from app.auth import get_current_user, require_role, AuthUser
#
#   @router.post("/appointments", dependencies=[Depends(require_role(Role.PATIENT))])
#   async def create(...): ...
# =============================================================================

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.auth.models import AuthUser
from app.dependencies import ContextDep
from app.exceptions import ForbiddenError, UnauthenticatedError
from core.models.roles import Role
from lib.tokens import InvalidTokenError

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor; a missing header is reported by us as 401
security = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    context: ContextDep,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> AuthUser:
    """
    Extract and verify the identity from the Authorization header.

    This dependency:
    1. Extracts the Bearer token from the Authorization header
    2. Verifies its signature and expiry with the process secret
    3. Attaches the identity to request.state.user

    Raises:
        UnauthenticatedError: 401 if the token is missing, invalid or expired
    """
    if credentials is None or not credentials.credentials:
        raise UnauthenticatedError("Access denied")

    try:
        claims = context.tokens.verify(credentials.credentials)
    except InvalidTokenError as e:
        logger.warning(f"Token verification failed: {e.message}")
        raise UnauthenticatedError("Invalid or expired token")

    user = AuthUser(id=claims.subject_id, role=claims.role)
    request.state.user = user
    logger.debug(f"Authenticated {user.role.value}: {user.id}")
    return user


def require_role(role: Role):
    """
    Build a dependency that only lets `role` through.

    Usage:
        @router.post("/inventory", dependencies=[Depends(require_role(Role.PHARMACY))])
    """
    async def check_role(user: AuthUser = Depends(get_current_user)) -> AuthUser:
        if user.role != role:
            raise ForbiddenError(role.value)
        return user

    return check_role
