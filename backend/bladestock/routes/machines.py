"""
Blade Stock Backend — Machine Routes
======================================

POST /api/machine-blades      → blade currently fitted to a machine
POST /api/blade-assignments   → planned blade type and count for a machine
POST /api/machine-status      → status label of a machine

All three upsert on machine_id and require the stock password.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bladestock.database import get_db_session
from bladestock.middleware.password_gate import require_stock_password
from bladestock.schemas.blade import (
    BladeAssignmentResponse,
    BladeAssignmentUpdate,
    ErrorResponse,
    MachineBladeResponse,
    MachineBladeUpdate,
    MachineStatusResponse,
    MachineStatusUpdate,
)
from bladestock.services.machine_service import machine_service

router = APIRouter(
    prefix="/api",
    tags=["Machines"],
    dependencies=[Depends(require_stock_password)],
)

WRITE_RESPONSES = {
    403: {"description": "Missing or incorrect password", "model": ErrorResponse},
    500: {"description": "Server error", "model": ErrorResponse},
}


@router.post(
    "/machine-blades",
    response_model=MachineBladeResponse,
    responses=WRITE_RESPONSES,
    summary="Set the blade fitted to a machine",
)
async def update_machine_blade(
    payload: MachineBladeUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> MachineBladeResponse:
    return await machine_service.set_blade(db, payload)


@router.post(
    "/blade-assignments",
    response_model=BladeAssignmentResponse,
    responses=WRITE_RESPONSES,
    summary="Set a machine's blade assignment",
)
async def update_blade_assignment(
    payload: BladeAssignmentUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> BladeAssignmentResponse:
    return await machine_service.set_assignment(db, payload)


@router.post(
    "/machine-status",
    response_model=MachineStatusResponse,
    responses=WRITE_RESPONSES,
    summary="Set a machine's status",
)
async def update_machine_status(
    payload: MachineStatusUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> MachineStatusResponse:
    return await machine_service.set_status(db, payload)
