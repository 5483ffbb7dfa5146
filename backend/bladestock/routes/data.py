"""
Blade Stock Backend — Aggregate Data & Reset Routes
=====================================================

GET  /api/data   → everything the frontend renders, in one response
POST /api/reset  → clear logs and machine tables, zero inventory (password required)
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from bladestock.database import get_db_session, get_session_factory
from bladestock.middleware.password_gate import require_stock_password
from bladestock.schemas.blade import DataResponse, ErrorResponse, MessageResponse
from bladestock.services.data_service import data_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Data"])


@router.get(
    "/data",
    response_model=DataResponse,
    responses={500: {"description": "A table could not be read", "model": ErrorResponse}},
    summary="Read inventory, logs and machine state",
    description=(
        "Returns inventory nested by group then blade type, the full log newest first, "
        "and the machine blade, assignment and status mappings keyed by machine id."
    ),
)
async def get_all_data(
    factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> DataResponse:
    # Takes the factory, not a session: the five reads run concurrently.
    return await data_service.get_all_data(factory)


@router.post(
    "/reset",
    response_model=MessageResponse,
    dependencies=[Depends(require_stock_password)],
    responses={
        403: {"description": "Missing or incorrect password", "model": ErrorResponse},
        500: {"description": "Reset failed and was rolled back", "model": ErrorResponse},
    },
    summary="Reset all stock data",
)
async def reset_all(db: AsyncSession = Depends(get_db_session)) -> MessageResponse:
    return await data_service.reset_all(db)
