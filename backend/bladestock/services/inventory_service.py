"""
Blade Stock Backend — Inventory Service
=========================================

What:  Writes blade counts for a (group, blade type) pair.
Who:   POST /api/inventory
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from bladestock.models.inventory import InventoryItem
from bladestock.schemas.blade import InventoryItemResponse, InventoryUpdate
from bladestock.services.storage import STORAGE_ERRORS, storage_error, upsert_returning

logger = logging.getLogger(__name__)


class InventoryService:
    async def upsert_item(
        self, db: AsyncSession, payload: InventoryUpdate
    ) -> InventoryItemResponse:
        """
        Create or overwrite the counts stored for payload's (group_name, blade_type).

        Both counts are replaced on conflict, including with NULL when the
        client omitted them; readers of GET /api/data see NULL as 0.

        Raises:
            DatabaseError: the upsert failed, e.g. group_name or blade_type missing
        """
        values = payload.model_dump()
        try:
            item = await upsert_returning(
                db,
                InventoryItem,
                values,
                conflict_keys=("group_name", "blade_type"),
            )
        except STORAGE_ERRORS as e:
            raise storage_error(
                "upsert inventory",
                e,
                group_name=payload.group_name,
                blade_type=payload.blade_type,
            ) from e

        logger.info(
            "Inventory %s/%s set to fixed=%s available=%s",
            item.group_name,
            item.blade_type,
            item.fixed,
            item.available,
        )
        return InventoryItemResponse.model_validate(item)


inventory_service = InventoryService()
