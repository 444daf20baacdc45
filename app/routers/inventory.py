# =============================================================================
# app/routers/inventory.py - Pharmacy Inventory Endpoints
# =============================================================================

from typing import Any

from fastapi import APIRouter, Depends

from app.auth import require_role
from app.dependencies import RecordServiceDep
from core.models.records import InventoryItemCreate
from core.models.roles import Role, Table

router = APIRouter()


@router.post(
    "/inventory",
    dependencies=[Depends(require_role(Role.PHARMACY))],
)
def create_inventory_item(
    item: InventoryItemCreate,
    records: RecordServiceDep,
) -> dict[str, Any]:
    """Add a medicine to inventory (pharmacy only)."""
    return records.create_inventory_item(item)


@router.get("/inventory")
def list_inventory(records: RecordServiceDep) -> list[dict[str, Any]]:
    return records.list_all(Table.INVENTORY)
