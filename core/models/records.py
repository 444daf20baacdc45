# =============================================================================
# core/models/records.py - Domain Record Schemas
# =============================================================================
# Request bodies for the records created through the API:
# - AppointmentCreate: booked by a patient
# - InventoryItemCreate: stocked by a pharmacy
# - PrescriptionCreate: metadata row written after a prescription upload
#
# Fields are passed through to the store exactly as submitted. Only presence
# is checked here; the store enforces types and everything else.
# =============================================================================

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class AppointmentCreate(BaseModel):
    """
    Schema for booking an appointment.

    Example:
        {
            "patient_id": "P-001",
            "doctor_id": "D-001",
            "asha_id": "A-001",
            "appointment_date": "2025-03-01T10:00:00",
            "status": "scheduled"
        }
    """
    patient_id: Any = Field(..., description="Patient user_id")
    doctor_id: Any = Field(..., description="Doctor user_id")
    asha_id: Any = Field(default=None, description="Assigned ASHA worker user_id")
    appointment_date: Any = Field(..., description="Appointment date/time (ISO 8601)")
    status: Any = Field(default=None, description="Appointment status")


class InventoryItemCreate(BaseModel):
    """
    Schema for adding a medicine to a pharmacy's inventory.

    Example:
        {
            "pharmacy_user_id": "PH-001",
            "medicine_name": "Paracetamol 500mg",
            "description": "Strip of 10 tablets",
            "stock": 120,
            "price": 25.5,
            "expiry_date": "2026-12-31"
        }
    """
    pharmacy_user_id: Any = Field(..., description="Pharmacy user_id")
    medicine_name: Any = Field(..., description="Medicine name")
    description: Any = Field(default=None, description="Free-text description")
    stock: Any = Field(..., description="Units in stock")
    price: Any = Field(..., description="Unit price")
    expiry_date: Any = Field(..., description="Expiry date (ISO 8601)")


class PrescriptionCreate(BaseModel):
    """
    Metadata row for an uploaded prescription file.

    prescription_id and file_name are always generated server-side.
    """
    prescription_id: str
    patient_id: str
    doctor_id: str
    file_name: str
    mime_type: str
    file_size: int
    notes: str | None = None
    issued_at: datetime

    def to_row(self) -> dict[str, Any]:
        """Serialize for the store (datetimes as ISO strings)."""
        return self.model_dump(mode="json")
