# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by resource:
# - directory.py: Patient/doctor/ASHA/pharmacy listings
# - appointments.py: Appointment booking and listing
# - inventory.py: Pharmacy inventory
# - prescriptions.py: Prescription file upload and listing
#
# Each router is mounted in main.py under /api behind the auth dependency.
# =============================================================================

from . import directory
from . import appointments
from . import inventory
from . import prescriptions

__all__ = [
    "directory",
    "appointments",
    "inventory",
    "prescriptions",
]
