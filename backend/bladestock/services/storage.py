"""
Blade Stock Backend — Storage Helpers
=======================================

What:  The small amount of SQL plumbing shared by every service:
       - upsert_returning(): INSERT ... ON CONFLICT DO UPDATE ... RETURNING
         on whichever dialect the session is bound to
       - storage_error(): logs a storage failure and converts it to the
         user-safe DatabaseError

Supported dialects: PostgreSQL (production) and SQLite (tests, local runs).
Both implement ON CONFLICT and RETURNING; SQLite needs 3.35 or newer.
"""

import logging
from typing import Any, Dict, Iterable, Type, TypeVar

from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bladestock.database import Base
from bladestock.exceptions import DatabaseError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)

# Driver-level connection failures (refused, reset) can surface as OSError
# before SQLAlchemy gets a chance to wrap them.
STORAGE_ERRORS = (SQLAlchemyError, OSError)

_DIALECT_INSERTS = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}


def dialect_insert(db: AsyncSession, model: Type[ModelT]):
    """Returns an INSERT construct with on_conflict_do_update() for the session's dialect."""
    bind = db.bind
    dialect_name = bind.dialect.name if bind is not None else "postgresql"
    insert = _DIALECT_INSERTS.get(dialect_name, postgresql_insert)
    return insert(model)


async def upsert_returning(
    db: AsyncSession,
    model: Type[ModelT],
    values: Dict[str, Any],
    conflict_keys: Iterable[str],
) -> ModelT:
    """
    Insert a row, or overwrite the non-key columns of the row that already
    holds the same conflict key, and return the stored ORM object.

    Every column present in `values` and not part of the conflict key is
    overwritten, so repeating the same call leaves the same final state.

    Example:
        item = await upsert_returning(
            db, InventoryItem,
            {"group_name": "A", "blade_type": "X", "fixed": 10, "available": 4},
            conflict_keys=("group_name", "blade_type"),
        )
    """
    conflict_keys = list(conflict_keys)
    stmt = dialect_insert(db, model).values(**values)
    stmt = stmt.on_conflict_do_update(
        index_elements=conflict_keys,
        set_={
            column: stmt.excluded[column]
            for column in values
            if column not in conflict_keys
        },
    )
    # populate_existing refreshes an instance already in the identity map
    result = await db.scalars(
        stmt.returning(model),
        execution_options={"populate_existing": True},
    )
    return result.one()


def storage_error(operation: str, exc: BaseException, **context: Any) -> DatabaseError:
    """
    Log a storage failure with full detail and build the DatabaseError to raise.

    Usage:
        except STORAGE_ERRORS as e:
            raise storage_error("upsert inventory", e, group_name=...) from e
    """
    logger.error(
        "Storage failure during %s: %s: %s",
        operation,
        type(exc).__name__,
        exc,
        exc_info=exc,
    )
    ctx = {"operation": operation, "original_error": type(exc).__name__}
    ctx.update(context)
    return DatabaseError(context=ctx)
