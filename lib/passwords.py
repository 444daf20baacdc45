# =============================================================================
# lib/passwords.py - Password Hashing
# =============================================================================
# One-way bcrypt hashing of plaintext passwords.
#
# The cost factor only applies to new hashes. Verification reads the cost
# and salt from the stored hash, so hashes made with an older cost keep
# verifying after BCRYPT_ROUNDS changes.
# =============================================================================

import bcrypt

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def _encode(plaintext: str) -> bytes:
    return plaintext.encode("utf-8")[:BCRYPT_MAX_BYTES]


class PasswordHasher:
    """
    Salted, cost-parameterized password hashing.

    Example:
        hasher = PasswordHasher(rounds=10)
        stored = hasher.hash("s3cret")
        hasher.verify("s3cret", stored)  # True
    """

    def __init__(self, rounds: int = 10):
        self.rounds = rounds

    def hash(self, plaintext: str) -> str:
        """Hash a password with a fresh salt."""
        hashed = bcrypt.hashpw(_encode(plaintext), bcrypt.gensalt(rounds=self.rounds))
        return hashed.decode("utf-8")

    def verify(self, plaintext: str, hashed: str | None) -> bool:
        """
        Check a password against a stored hash.

        Returns False for a missing or malformed hash instead of raising.
        """
        if not hashed:
            return False
        try:
            return bcrypt.checkpw(_encode(plaintext), hashed.encode("utf-8"))
        except ValueError:
            return False
