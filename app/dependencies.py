# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
#
# All process-wide state lives in one GatewayContext built by create_app()
# and stored on app.state.context. Nothing in it changes after startup.
# =============================================================================

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Request

from app.config import Settings
from core.services import PrescriptionService, RecordService, UserService
from lib.passwords import PasswordHasher
from lib.supabase_client import SupabaseStore
from lib.tokens import TokenIssuer


@dataclass(frozen=True)
class GatewayContext:
    """
    Everything a request handler needs, built once at process start.

    `store` is anything with the SupabaseStore interface
    (insert / select_all / select_one / upload).
    """
    settings: Settings
    store: SupabaseStore
    passwords: PasswordHasher
    tokens: TokenIssuer

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        store: SupabaseStore | None = None,
    ) -> "GatewayContext":
        """Build the context, creating a Supabase store unless one is given."""
        if store is None:
            store = SupabaseStore.from_credentials(
                settings.SUPABASE_URL,
                settings.SUPABASE_SERVICE_KEY,
            )
        return cls(
            settings=settings,
            store=store,
            passwords=PasswordHasher(rounds=settings.BCRYPT_ROUNDS),
            tokens=TokenIssuer(
                settings.JWT_SECRET,
                ttl=settings.token_ttl,
                algorithm=settings.JWT_ALGORITHM,
            ),
        )


def get_context(request: Request) -> GatewayContext:
    """Get the application context created at startup."""
    return request.app.state.context


ContextDep = Annotated[GatewayContext, Depends(get_context)]


# =============================================================================
# Service Dependencies
# =============================================================================

def get_user_service(context: ContextDep) -> UserService:
    return UserService(context.store, context.passwords, context.tokens)


def get_record_service(context: ContextDep) -> RecordService:
    return RecordService(context.store)


def get_prescription_service(context: ContextDep) -> PrescriptionService:
    return PrescriptionService(context.store, bucket=context.settings.PRESCRIPTIONS_BUCKET)


UserServiceDep = Annotated[UserService, Depends(get_user_service)]
RecordServiceDep = Annotated[RecordService, Depends(get_record_service)]
PrescriptionServiceDep = Annotated[PrescriptionService, Depends(get_prescription_service)]
