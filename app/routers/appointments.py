# =============================================================================
# app/routers/appointments.py - Appointment Endpoints
# =============================================================================
# Patients book appointments; any authenticated role can list them.
# =============================================================================

from typing import Any

from fastapi import APIRouter, Depends

from app.auth import require_role
from app.dependencies import RecordServiceDep
from core.models.records import AppointmentCreate
from core.models.roles import Role, Table

router = APIRouter()


@router.post(
    "/appointments",
    dependencies=[Depends(require_role(Role.PATIENT))],
)
def create_appointment(
    appointment: AppointmentCreate,
    records: RecordServiceDep,
) -> dict[str, Any]:
    """
    Book an appointment (patient only).

    Returns the created row.
    """
    return records.create_appointment(appointment)


@router.get("/appointments")
def list_appointments(records: RecordServiceDep) -> list[dict[str, Any]]:
    """List all appointments."""
    return records.list_all(Table.APPOINTMENTS)
