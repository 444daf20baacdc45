# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides JWT-based authentication and role gating.
#
# Usage:
#   from app.auth import get_current_user, require_role, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

from app.auth.dependencies import get_current_user, require_role
from app.auth.models import AuthUser

__all__ = [
    "get_current_user",
    "require_role",
    "AuthUser",
]
