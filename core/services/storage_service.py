# =============================================================================
# core/services/storage_service.py - Prescription Uploads
# =============================================================================
# Handles prescription files: upload the buffer to object storage under a
# generated key, then record its metadata in the prescriptions table.
#
# Ordering: the metadata insert only happens after a successful upload.
# If the insert then fails the object stays in storage; there is no
# compensating delete.
# =============================================================================

import logging
import uuid
from datetime import datetime, timezone
from typing import Any

from app.exceptions import UploadFailedError
from core.models.records import PrescriptionCreate
from core.models.roles import Table
from lib.supabase_client import StorageError, SupabaseStore

logger = logging.getLogger(__name__)

# Storage bucket name
DEFAULT_BUCKET = "prescriptions"


def build_storage_key(file_id: str, filename: str | None) -> str:
    """
    Derive the storage key for an upload.

    Keeps the original extension (text after the last ".") so the stored
    object still opens with the right viewer.

    Example:
        build_storage_key("3f2a...", "scan.pdf")  # "3f2a....pdf"
        build_storage_key("3f2a...", "scan")      # "3f2a..."
    """
    if filename and "." in filename:
        ext = filename.rsplit(".", 1)[-1]
        if ext:
            return f"{file_id}.{ext}"
    return file_id


class PrescriptionService:
    """
    Service for prescription file uploads.
    """

    def __init__(self, store: SupabaseStore, bucket: str = DEFAULT_BUCKET):
        self.store = store
        self.bucket = bucket

    def upload_prescription(
        self,
        content: bytes,
        filename: str | None,
        content_type: str | None,
        patient_id: str,
        doctor_id: str,
        notes: str | None = None,
    ) -> dict[str, Any]:
        """
        Store a prescription file and its metadata row.

        Args:
            content: The uploaded file, fully buffered in memory
            filename: Original filename (only its extension is kept)
            content_type: Declared MIME type of the upload
            patient_id: Patient user_id
            doctor_id: Doctor user_id
            notes: Optional free-text notes

        Returns:
            The created prescription_blob row

        Raises:
            UploadFailedError: If the storage upload fails (no row is written)
            StoreError: If the metadata insert fails
        """
        prescription_id = str(uuid.uuid4())
        key = build_storage_key(prescription_id, filename)
        mime_type = content_type or "application/octet-stream"

        try:
            self.store.upload(self.bucket, key, content, mime_type)
        except StorageError as e:
            raise UploadFailedError(e.message)

        record = PrescriptionCreate(
            prescription_id=prescription_id,
            patient_id=patient_id,
            doctor_id=doctor_id,
            file_name=key,
            mime_type=mime_type,
            file_size=len(content),
            notes=notes,
            issued_at=datetime.now(timezone.utc),
        )

        row = self.store.insert(Table.PRESCRIPTIONS, record.to_row())
        logger.info(f"Recorded prescription {prescription_id} ({len(content)} bytes)")
        return row
