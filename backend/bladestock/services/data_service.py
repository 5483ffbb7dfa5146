"""
Blade Stock Backend — Data Service (Aggregate Read & Reset)
=============================================================

What:  The two operations that span every table.

    get_all_data()  → GET  /api/data   five concurrent reads, reshaped for the frontend
    reset_all()     → POST /api/reset  clears logs and machine tables, zeroes inventory

Aggregate Read Flow:
    ┌───────────┐  ┌──────┐  ┌────────────────┐  ┌───────────────────┐  ┌────────────────┐
    │ inventory │  │ logs │  │ machine_blades │  │ blade_assignments │  │ machine_status │
    └─────┬─────┘  └──┬───┘  └───────┬────────┘  └─────────┬─────────┘  └───────┬────────┘
          └───────────┴──────────────┴───── gather ─────────┴────────────────────┘
                                            │
                                    transformers.*  →  DataResponse

    Each read runs on its own session: one AsyncSession cannot run
    statements concurrently. All five must succeed; any failure fails the
    whole read and nothing partial is returned.

Reset:
    Runs on the request's session, so every statement shares one transaction
    and a failure part-way rolls the whole reset back (see get_db_session).
"""

import asyncio
import logging
from typing import Dict, List, Sequence

from sqlalchemy import RowMapping, Select, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from bladestock.models.inventory import InventoryItem
from bladestock.models.log_entry import LogEntry
from bladestock.models.machine import BladeAssignment, MachineBlade, MachineStatus
from bladestock.schemas.blade import DataResponse, MessageResponse
from bladestock.services.storage import STORAGE_ERRORS, storage_error
from bladestock.transformers import (
    map_blade_assignments,
    map_machine_blades,
    map_machine_status,
    nest_inventory,
)

logger = logging.getLogger(__name__)

RESET_MESSAGE = "All data has been reset successfully"

# Tables emptied by reset; inventory is zeroed instead.
CLEARED_MODELS = (BladeAssignment, MachineBlade, MachineStatus, LogEntry)


def _aggregate_queries() -> Dict[str, Select]:
    inventory = InventoryItem.__table__
    logs = LogEntry.__table__
    return {
        "inventory": select(inventory).order_by(inventory.c.id),
        "logs": select(logs).order_by(logs.c.created_at.desc(), logs.c.id.desc()),
        "machine_blades": select(MachineBlade.__table__),
        "blade_assignments": select(BladeAssignment.__table__),
        "machine_status": select(MachineStatus.__table__),
    }


class DataService:
    async def _fetch_rows(
        self, factory: async_sessionmaker[AsyncSession], query: Select
    ) -> Sequence[RowMapping]:
        async with factory() as session:
            result = await session.execute(query)
            return result.mappings().all()

    async def get_all_data(
        self, factory: async_sessionmaker[AsyncSession]
    ) -> DataResponse:
        """
        Read all five tables concurrently and reshape them for the frontend.

        Raises:
            DatabaseError: any of the five reads failed
        """
        queries = _aggregate_queries()
        # return_exceptions: every session is closed before we answer, even on failure
        results = await asyncio.gather(
            *(self._fetch_rows(factory, query) for query in queries.values()),
            return_exceptions=True,
        )
        rows = dict(zip(queries, results))

        for table, outcome in rows.items():
            if isinstance(outcome, STORAGE_ERRORS):
                raise storage_error("aggregate read", outcome, table=table) from outcome
            if isinstance(outcome, BaseException):
                raise outcome

        logger.debug(
            "Aggregate read: %s",
            ", ".join(f"{table}={len(found)}" for table, found in rows.items()),
        )
        return DataResponse(
            inventory=nest_inventory(rows["inventory"]),
            logs=[dict(row) for row in rows["logs"]],
            machine_blades=map_machine_blades(rows["machine_blades"]),
            blade_assignments=map_blade_assignments(rows["blade_assignments"]),
            machine_status=map_machine_status(rows["machine_status"]),
        )

    async def reset_all(self, db: AsyncSession) -> MessageResponse:
        """
        Empty logs, machine_blades, blade_assignments and machine_status, and set
        fixed = available = 0 on every inventory row. Inventory rows are kept.

        Raises:
            DatabaseError: any statement failed
        """
        cleared: List[str] = []
        try:
            for model in CLEARED_MODELS:
                result = await db.execute(delete(model))
                cleared.append(f"{model.__tablename__}={result.rowcount}")
            zeroed = await db.execute(update(InventoryItem).values(fixed=0, available=0))
            await db.flush()
        except STORAGE_ERRORS as e:
            raise storage_error("reset", e, cleared=cleared) from e

        logger.warning(
            "Reset: deleted %s; zeroed %d inventory rows",
            ", ".join(cleared),
            zeroed.rowcount,
        )
        return MessageResponse(message=RESET_MESSAGE)


data_service = DataService()
