# =============================================================================
# core/models/roles.py - Role Tags and Table Names
# =============================================================================
# The four identity roles and the store tables behind them:
# - Role: closed set of role tags (patient, doctor, asha, pharmacy)
# - ROLE_TABLES: role -> identity table, defined for every role
# - Table: names of the non-identity tables
#
# A role tag decides which table an identity lives in and which
# endpoints it may write to.
# =============================================================================

from enum import Enum


class Role(str, Enum):
    """
    Identity role tag.

    - patient: Can book appointments
    - doctor: Can issue prescriptions
    - asha: Accredited Social Health Activist (community health worker)
    - pharmacy: Can add inventory
    """
    PATIENT = "patient"
    DOCTOR = "doctor"
    ASHA = "asha"
    PHARMACY = "pharmacy"

    @classmethod
    def parse(cls, value: object) -> "Role | None":
        """Return the Role for a tag string, or None if it isn't one."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None

    @property
    def table(self) -> str:
        """Identity table holding users with this role."""
        return ROLE_TABLES[self]


class Table:
    """Store table names."""
    PATIENTS = "patients"
    DOCTORS = "doctors"
    ASHA_WORKERS = "asha_workers"
    PHARMACIES = "pharmacies"
    APPOINTMENTS = "appointments"
    INVENTORY = "inventory"
    PRESCRIPTIONS = "prescription_blob"


ROLE_TABLES: dict[Role, str] = {
    Role.PATIENT: Table.PATIENTS,
    Role.DOCTOR: Table.DOCTORS,
    Role.ASHA: Table.ASHA_WORKERS,
    Role.PHARMACY: Table.PHARMACIES,
}
