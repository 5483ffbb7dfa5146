"""
Blade Stock Backend — Inventory Route
=======================================

POST /api/inventory → set fixed/available counts for a (group_name, blade_type) pair
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bladestock.database import get_db_session
from bladestock.middleware.password_gate import require_stock_password
from bladestock.schemas.blade import ErrorResponse, InventoryItemResponse, InventoryUpdate
from bladestock.services.inventory_service import inventory_service

router = APIRouter(
    prefix="/api",
    tags=["Inventory"],
    dependencies=[Depends(require_stock_password)],
)


@router.post(
    "/inventory",
    response_model=InventoryItemResponse,
    responses={
        403: {"description": "Missing or incorrect password", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create or overwrite inventory counts",
)
async def update_inventory(
    payload: InventoryUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> InventoryItemResponse:
    return await inventory_service.upsert_item(db, payload)
