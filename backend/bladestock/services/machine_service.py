"""
Blade Stock Backend — Machine Service
=======================================

What:  Upserts for the three machine-keyed tables.

    set_blade()       → machine_blades      POST /api/machine-blades
    set_assignment()  → blade_assignments   POST /api/blade-assignments
    set_status()      → machine_status      POST /api/machine-status

Each write replaces whatever the machine had before. A missing machine_id is
rejected by the database (primary key) and surfaces as DatabaseError.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from bladestock.models.machine import BladeAssignment, MachineBlade, MachineStatus
from bladestock.schemas.blade import (
    BladeAssignmentResponse,
    BladeAssignmentUpdate,
    MachineBladeResponse,
    MachineBladeUpdate,
    MachineStatusResponse,
    MachineStatusUpdate,
)
from bladestock.services.storage import STORAGE_ERRORS, storage_error, upsert_returning

logger = logging.getLogger(__name__)

MACHINE_KEY = ("machine_id",)


class MachineService:
    async def set_blade(
        self, db: AsyncSession, payload: MachineBladeUpdate
    ) -> MachineBladeResponse:
        try:
            row = await upsert_returning(db, MachineBlade, payload.model_dump(), MACHINE_KEY)
        except STORAGE_ERRORS as e:
            raise storage_error("upsert machine blade", e, machine_id=payload.machine_id) from e

        logger.info("Machine %s fitted with blade %s", row.machine_id, row.blade_type)
        return MachineBladeResponse.model_validate(row)

    async def set_assignment(
        self, db: AsyncSession, payload: BladeAssignmentUpdate
    ) -> BladeAssignmentResponse:
        try:
            row = await upsert_returning(db, BladeAssignment, payload.model_dump(), MACHINE_KEY)
        except STORAGE_ERRORS as e:
            raise storage_error(
                "upsert blade assignment", e, machine_id=payload.machine_id
            ) from e

        logger.info(
            "Machine %s assigned %s x %s", row.machine_id, row.count, row.blade_type
        )
        return BladeAssignmentResponse.model_validate(row)

    async def set_status(
        self, db: AsyncSession, payload: MachineStatusUpdate
    ) -> MachineStatusResponse:
        try:
            row = await upsert_returning(db, MachineStatus, payload.model_dump(), MACHINE_KEY)
        except STORAGE_ERRORS as e:
            raise storage_error("upsert machine status", e, machine_id=payload.machine_id) from e

        logger.info("Machine %s status is now %r", row.machine_id, row.status)
        return MachineStatusResponse.model_validate(row)


machine_service = MachineService()
