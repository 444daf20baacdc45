# =============================================================================
# core/services/user_service.py - Identity Operations
# =============================================================================
# Signup, login and profile lookup against the four role-partitioned
# identity tables. Each operation issues exactly one store call.
# =============================================================================

import logging
from typing import Any

from app.exceptions import (
    InvalidCredentialsError,
    InvalidRoleError,
    UserNotFoundError,
)
from core.models.roles import Role
from lib.passwords import PasswordHasher
from lib.supabase_client import SupabaseStore
from lib.tokens import TokenIssuer
from lib.utils import without_keys

logger = logging.getLogger(__name__)

# Never returned to clients
SECRET_COLUMNS = ("password_hash",)


def resolve_role(value: Any) -> Role:
    """
    Map a role tag from a request body to a Role.

    Raises:
        InvalidRoleError: If the tag isn't one of the four roles
    """
    role = Role.parse(value)
    if role is None:
        raise InvalidRoleError(value)
    return role


def public_user(row: dict[str, Any]) -> dict[str, Any]:
    """Strip secret columns from an identity row."""
    return without_keys(row, *SECRET_COLUMNS)


class UserService:
    """
    Service for identity operations.

    Provides a clean interface between the auth routes and the store.
    """

    def __init__(
        self,
        store: SupabaseStore,
        passwords: PasswordHasher,
        tokens: TokenIssuer,
    ):
        self.store = store
        self.passwords = passwords
        self.tokens = tokens

    def signup(
        self,
        user_id: Any,
        full_name: Any,
        phone: Any,
        password: str,
        role: Any,
    ) -> dict[str, Any]:
        """
        Create an identity in its role's table.

        Args:
            user_id: Caller-chosen identifier, unique within the table
            full_name: Display name
            phone: Login key, unique within the table
            password: Plaintext password (only its hash is stored)
            role: Role tag

        Returns:
            The created identity row, without password_hash

        Raises:
            InvalidRoleError: If role isn't a known tag
            StoreError: If the insert fails (e.g. duplicate phone)
        """
        resolved = resolve_role(role)

        row = self.store.insert(
            resolved.table,
            {
                "user_id": user_id,
                "full_name": full_name,
                "phone": phone,
                "password_hash": self.passwords.hash(password),
            },
        )

        logger.info(f"Created {resolved.value} account: {row.get('user_id')}")
        return public_user(row)

    def login(self, phone: Any, password: str, role: Any) -> tuple[str, dict[str, Any]]:
        """
        Check a phone/password pair and issue a session token.

        Returns:
            Tuple of (token, identity row without password_hash)

        Raises:
            InvalidRoleError: If role isn't a known tag
            UserNotFoundError: If no identity has this phone
            InvalidCredentialsError: If the password doesn't match
            StoreError: If the lookup fails
        """
        resolved = resolve_role(role)

        user = self.store.select_one(resolved.table, "phone", phone)
        if user is None:
            raise UserNotFoundError()

        if not self.passwords.verify(password, user.get("password_hash")):
            logger.warning(f"Failed login for {resolved.value} account")
            raise InvalidCredentialsError()

        token = self.tokens.issue(user["user_id"], resolved)
        return token, public_user(user)

    def get_profile(self, subject_id: str, role: Role) -> dict[str, Any]:
        """
        Fetch the identity a verified token refers to.

        Raises:
            UserNotFoundError: If the identity no longer exists
            StoreError: If the lookup fails
        """
        user = self.store.select_one(role.table, "user_id", subject_id)
        if user is None:
            raise UserNotFoundError()
        return public_user(user)
