"""
Blade Stock Backend — Log Routes
==================================

POST   /api/logs       → append an entry (201)
DELETE /api/logs/{id}  → remove one entry; 404 when the id is unknown or not a number

Both require the stock password in the JSON body, DELETE included.
"""

from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from bladestock.database import get_db_session
from bladestock.middleware.password_gate import require_stock_password
from bladestock.schemas.blade import ErrorResponse, LogCreate, LogEntryResponse
from bladestock.services.log_service import log_service

router = APIRouter(
    prefix="/api",
    tags=["Logs"],
    dependencies=[Depends(require_stock_password)],
)


@router.post(
    "/logs",
    response_model=LogEntryResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        403: {"description": "Missing or incorrect password", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Record a blade movement",
)
async def add_log_entry(
    payload: LogCreate,
    db: AsyncSession = Depends(get_db_session),
) -> LogEntryResponse:
    return await log_service.create_entry(db, payload)


@router.delete(
    "/logs/{log_id}",
    response_model=LogEntryResponse,
    responses={
        403: {"description": "Missing or incorrect password", "model": ErrorResponse},
        404: {"description": "Log entry not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Delete a log entry",
)
async def delete_log_entry(
    log_id: str = Path(description="Identifier of the log entry"),
    db: AsyncSession = Depends(get_db_session),
) -> LogEntryResponse:
    return await log_service.delete_entry(db, log_id)
