# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains the domain types shared by the API and services:
# - roles.py: Role tags and store table names
# - records.py: Appointment, inventory and prescription schemas
# =============================================================================

from .roles import ROLE_TABLES, Role, Table
from .records import AppointmentCreate, InventoryItemCreate, PrescriptionCreate

__all__ = [
    # Roles
    "ROLE_TABLES",
    "Role",
    "Table",
    # Records
    "AppointmentCreate",
    "InventoryItemCreate",
    "PrescriptionCreate",
]
