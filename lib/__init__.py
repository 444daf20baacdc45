# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Supabase table/storage wrapper
# - passwords.py: bcrypt password hashing
# - tokens.py: Session token issue/verify
# - utils.py: Shared error base and row helpers
# =============================================================================

from lib.supabase_client import StorageError, StoreError, SupabaseStore
from lib.passwords import PasswordHasher
from lib.tokens import InvalidTokenError, TokenClaims, TokenIssuer
from lib.utils import ApplicationError, without_keys

__all__ = [
    # Supabase
    "SupabaseStore",
    "StoreError",
    "StorageError",
    # Auth primitives
    "PasswordHasher",
    "TokenIssuer",
    "TokenClaims",
    "InvalidTokenError",
    # Utils
    "ApplicationError",
    "without_keys",
]
