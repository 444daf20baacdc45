# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .user_service import UserService
from .record_service import RecordService
from .storage_service import PrescriptionService

__all__ = [
    "UserService",
    "RecordService",
    "PrescriptionService",
]
