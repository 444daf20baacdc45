# =============================================================================
# app/routers/directory.py - Identity Directory Endpoints
# =============================================================================
# Lists of every patient, doctor, ASHA worker and pharmacy account.
# Any authenticated role may read them.
# =============================================================================

from typing import Any

from fastapi import APIRouter

from app.dependencies import RecordServiceDep
from core.models.roles import Role

router = APIRouter()


@router.get("/patients")
def list_patients(records: RecordServiceDep) -> list[dict[str, Any]]:
    """List all patients."""
    return records.list_all(Role.PATIENT.table)


@router.get("/doctors")
def list_doctors(records: RecordServiceDep) -> list[dict[str, Any]]:
    """List all doctors."""
    return records.list_all(Role.DOCTOR.table)


@router.get("/asha")
def list_asha_workers(records: RecordServiceDep) -> list[dict[str, Any]]:
    """List all ASHA (community health) workers."""
    return records.list_all(Role.ASHA.table)


@router.get("/pharmacies")
def list_pharmacies(records: RecordServiceDep) -> list[dict[str, Any]]:
    """List all pharmacies."""
    return records.list_all(Role.PHARMACY.table)
