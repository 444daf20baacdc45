# =============================================================================
# app/routers/prescriptions.py - Prescription Upload Endpoints
# =============================================================================
# Doctors upload a prescription file (multipart) with its patient/doctor
# ids; the file goes to object storage and its metadata to the store.
# =============================================================================

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, File, Form, UploadFile

from app.auth import require_role
from app.dependencies import PrescriptionServiceDep, RecordServiceDep
from app.exceptions import MissingFileError
from core.models.roles import Role, Table

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/prescriptions")
def list_prescriptions(records: RecordServiceDep) -> list[dict[str, Any]]:
    """List all prescription metadata rows."""
    return records.list_all(Table.PRESCRIPTIONS)


@router.post(
    "/prescriptions",
    dependencies=[Depends(require_role(Role.DOCTOR))],
)
def upload_prescription(
    prescriptions: PrescriptionServiceDep,
    patient_id: Annotated[str, Form(description="Patient user_id")],
    doctor_id: Annotated[str, Form(description="Doctor user_id")],
    notes: Annotated[str | None, Form(description="Optional notes")] = None,
    file: Annotated[UploadFile | None, File(description="Prescription file")] = None,
) -> dict[str, Any]:
    """
    Upload a prescription file (doctor only).

    This endpoint:
    1. Buffers the uploaded file in memory
    2. Uploads it to storage as <generated-id>.<ext>
    3. Records its metadata in the prescriptions table

    Returns the confirmation message and the metadata row.
    """
    if file is None:
        raise MissingFileError()

    content = file.file.read()
    logger.info(f"Processing prescription upload: {file.filename} ({len(content)} bytes)")

    prescription = prescriptions.upload_prescription(
        content=content,
        filename=file.filename,
        content_type=file.content_type,
        patient_id=patient_id,
        doctor_id=doctor_id,
        notes=notes,
    )

    return {
        "message": "Prescription uploaded successfully",
        "prescription": prescription,
    }
