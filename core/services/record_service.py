# =============================================================================
# core/services/record_service.py - Record Listing and Creation
# =============================================================================
# Pass-through reads and writes for directory, appointment and inventory
# tables. One store call per operation; no derived state.
# =============================================================================

import logging
from typing import Any

from core.models.records import AppointmentCreate, InventoryItemCreate
from core.models.roles import Table
from lib.supabase_client import SupabaseStore

logger = logging.getLogger(__name__)


class RecordService:
    """Service for table-level record operations."""

    def __init__(self, store: SupabaseStore):
        self.store = store

    def list_all(self, table: str) -> list[dict[str, Any]]:
        """Return every row of a table."""
        rows = self.store.select_all(table)
        logger.debug(f"Listed {len(rows)} rows from {table}")
        return rows

    def create_appointment(self, appointment: AppointmentCreate) -> dict[str, Any]:
        """Insert an appointment exactly as submitted."""
        row = self.store.insert(Table.APPOINTMENTS, appointment.model_dump(exclude_unset=True))
        logger.info(f"Created appointment for patient {appointment.patient_id}")
        return row

    def create_inventory_item(self, item: InventoryItemCreate) -> dict[str, Any]:
        """Insert an inventory item exactly as submitted."""
        row = self.store.insert(Table.INVENTORY, item.model_dump(exclude_unset=True))
        logger.info(f"Added {item.medicine_name} to inventory of {item.pharmacy_user_id}")
        return row
