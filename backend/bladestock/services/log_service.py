"""
Blade Stock Backend — Log Service
===================================

What:  Appends and deletes entries of the blade movement log.
Who:   POST /api/logs, DELETE /api/logs/{id}

Entries are immutable: there is no update path. The database assigns id and
created_at; both are returned to the caller.
"""

import logging
from typing import Union

from sqlalchemy.ext.asyncio import AsyncSession

from bladestock.exceptions import NotFoundError
from bladestock.models.log_entry import LogEntry
from bladestock.schemas.blade import LogCreate, LogEntryResponse
from bladestock.services.storage import STORAGE_ERRORS, storage_error

logger = logging.getLogger(__name__)


def _not_found(log_id: Union[int, str]) -> NotFoundError:
    return NotFoundError(
        resource="log entry",
        resource_id=str(log_id),
        message="Log entry not found",
    )


class LogService:
    async def create_entry(self, db: AsyncSession, payload: LogCreate) -> LogEntryResponse:
        """
        Insert a new log entry.

        Returns:
            The stored entry, including its server-assigned id and created_at.

        Raises:
            DatabaseError: insert failed (e.g. machine_name, blade_type or action missing)
        """
        entry = LogEntry(**payload.model_dump())
        try:
            db.add(entry)
            await db.flush()  # assigns id; commit happens in get_db_session
        except STORAGE_ERRORS as e:
            raise storage_error("insert log entry", e, machine_name=payload.machine_name) from e

        logger.info(
            "Log %s: %s %s x%s on %s by %s",
            entry.id,
            entry.action,
            entry.blade_type,
            entry.amount,
            entry.machine_name,
            entry.person_name,
        )
        return LogEntryResponse.model_validate(entry)

    async def delete_entry(self, db: AsyncSession, log_id: Union[int, str]) -> LogEntryResponse:
        """
        Delete exactly one log entry by id and return it.

        An id that is not a whole number matches no entry.

        Raises:
            NotFoundError: no entry has this id (nothing is deleted)
            DatabaseError: lookup or delete failed
        """
        try:
            entry_id = int(log_id)
        except ValueError:
            raise _not_found(log_id) from None

        try:
            entry = await db.get(LogEntry, entry_id)
            if entry is None:
                raise _not_found(log_id)
            deleted = LogEntryResponse.model_validate(entry)
            await db.delete(entry)
            await db.flush()
        except NotFoundError:
            raise
        except STORAGE_ERRORS as e:
            raise storage_error("delete log entry", e, log_id=log_id) from e

        logger.info("Log %s deleted", log_id)
        return deleted


log_service = LogService()
