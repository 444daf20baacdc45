# =============================================================================
# lib/tokens.py - Session Token Issuer/Verifier
# =============================================================================
# Creates and validates signed, time-limited JWTs carrying a subject id and
# a role tag. There is no server-side session state: a token is valid when
# its signature checks out against the process secret and it has not
# expired. There is no revocation list.
#
# Usage:
#   issuer = TokenIssuer(secret, ttl=timedelta(hours=24))
#   token = issuer.issue("P-001", Role.PATIENT)
#   claims = issuer.verify(token)   # TokenClaims(subject_id="P-001", ...)
# =============================================================================

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import jwt, JWTError, ExpiredSignatureError

from core.models.roles import Role
from lib.utils import ApplicationError

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "HS256"
DEFAULT_TTL = timedelta(hours=24)


class InvalidTokenError(ApplicationError):
    """Raised when a token has a bad signature, bad payload, or has expired."""

    def __init__(self, message: str):
        super().__init__(message, code="INVALID_TOKEN")


@dataclass(frozen=True)
class TokenClaims:
    """Identity asserted by a verified token."""
    subject_id: str
    role: Role
    expires_at: datetime


class TokenIssuer:
    """
    Issues and verifies session tokens with a single shared secret.

    The secret is read-only after construction, so one issuer can serve
    any number of concurrent requests.
    """

    def __init__(
        self,
        secret: str,
        ttl: timedelta = DEFAULT_TTL,
        algorithm: str = DEFAULT_ALGORITHM,
    ):
        self._secret = secret
        self.ttl = ttl
        self.algorithm = algorithm

    def issue(self, subject_id: str | int, role: Role) -> str:
        """
        Create a signed token for a subject.

        Args:
            subject_id: The identity's user_id (stored as a string claim)
            role: The identity's role tag

        Returns:
            Encoded JWT string
        """
        issued_at = int(datetime.now(timezone.utc).timestamp())
        payload = {
            "sub": str(subject_id),
            "role": role.value,
            "iat": issued_at,
            "exp": issued_at + int(self.ttl.total_seconds()),
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Verify a token and return its claims.

        Raises:
            InvalidTokenError: If the signature is invalid, the payload is
                malformed, or the token has expired
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require_exp": True, "require_sub": True},
            )
        except ExpiredSignatureError:
            raise InvalidTokenError("Token has expired")
        except JWTError as e:
            raise InvalidTokenError(f"Invalid token: {e}")

        role = Role.parse(payload.get("role"))
        if role is None:
            raise InvalidTokenError("Invalid token: unknown role")

        subject_id = payload.get("sub")
        if not subject_id:
            raise InvalidTokenError("Invalid token: missing subject")

        return TokenClaims(
            subject_id=subject_id,
            role=role,
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
