"""
Blade Stock Backend — Pydantic Request/Response Schemas
=========================================================

What:  Pydantic models defining the API contract between frontend and backend.
How:   FastAPI validates request bodies against the *Update / *Create models,
       serializes responses through the *Response models, and builds the
       OpenAPI docs from both.

Request models:
    Every field is optional. Absent values travel to storage as NULL, and the
    database rejects a NULL key column. Numbers sent for text fields are
    stored as their text form (machine_id 1 is stored as "1"). The `password`
    field is not declared anywhere: the stock password gate reads it from the
    raw body, and these models ignore it, so it never reaches a service.

Response models:
    Row models mirror the ORM columns (from_attributes=True). DataResponse is
    the aggregate shape read by the frontend and uses camelCase keys.
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models: what the client sends
# ══════════════════════════════════════════════════════════════════════════

REQUEST_MODEL_CONFIG = ConfigDict(coerce_numbers_to_str=True)


class InventoryUpdate(BaseModel):
    """Body of POST /api/inventory. Upserts on (group_name, blade_type)."""
    model_config = REQUEST_MODEL_CONFIG

    group_name: Optional[str] = None
    blade_type: Optional[str] = None
    fixed: Optional[int] = None
    available: Optional[int] = None


class LogCreate(BaseModel):
    """Body of POST /api/logs. id and created_at are assigned by the server."""
    model_config = REQUEST_MODEL_CONFIG

    machine_name: Optional[str] = None
    blade_type: Optional[str] = None
    action: Optional[str] = None
    amount: Optional[int] = None
    person_name: Optional[str] = None
    group_name: Optional[str] = None


class MachineBladeUpdate(BaseModel):
    model_config = REQUEST_MODEL_CONFIG

    machine_id: Optional[str] = None
    blade_type: Optional[str] = None


class BladeAssignmentUpdate(BaseModel):
    model_config = REQUEST_MODEL_CONFIG

    machine_id: Optional[str] = None
    blade_type: Optional[str] = None
    count: Optional[int] = None


class MachineStatusUpdate(BaseModel):
    model_config = REQUEST_MODEL_CONFIG

    machine_id: Optional[str] = None
    status: Optional[str] = None


# ══════════════════════════════════════════════════════════════════════════
# Row Response Models: what a write returns
# ══════════════════════════════════════════════════════════════════════════


class InventoryItemResponse(BaseModel):
    id: int
    group_name: str
    blade_type: str
    fixed: Optional[int] = None
    available: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class LogEntryResponse(BaseModel):
    """A log row as stored. Also the item type of DataResponse.logs."""
    id: int = Field(description="Server-assigned identifier")
    machine_name: Optional[str] = None
    blade_type: Optional[str] = None
    action: Optional[str] = None
    amount: Optional[int] = None
    person_name: Optional[str] = None
    group_name: Optional[str] = None
    created_at: datetime = Field(description="Server-assigned creation timestamp")

    model_config = ConfigDict(from_attributes=True)


class MachineBladeResponse(BaseModel):
    machine_id: str
    blade_type: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class BladeAssignmentResponse(BaseModel):
    machine_id: str
    blade_type: Optional[str] = None
    count: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


class MachineStatusResponse(BaseModel):
    machine_id: str
    status: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


# ══════════════════════════════════════════════════════════════════════════
# Aggregate Response: GET /api/data
# ══════════════════════════════════════════════════════════════════════════


class InventoryCounts(BaseModel):
    fixed: int = 0
    available: int = 0


class AssignmentSummary(BaseModel):
    type: Optional[str] = None
    count: int = 0


class DataResponse(BaseModel):
    """
    Everything the frontend needs in one payload.

    Shape:
        {
            "inventory":        {"<group>": {"<blade_type>": {"fixed": 10, "available": 4}}},
            "logs":             [<LogEntryResponse>, ...]   (newest first),
            "machineBlades":    {"<machine_id>": "<blade_type>"},
            "bladeAssignments": {"<machine_id>": {"type": "<blade_type>", "count": 2}},
            "machineStatus":    {"<machine_id>": "<status>"}
        }
    """
    inventory: Dict[str, Dict[str, InventoryCounts]] = Field(default_factory=dict)
    logs: List[LogEntryResponse] = Field(default_factory=list)
    machine_blades: Dict[str, Optional[str]] = Field(default_factory=dict, alias="machineBlades")
    blade_assignments: Dict[str, AssignmentSummary] = Field(
        default_factory=dict, alias="bladeAssignments"
    )
    machine_status: Dict[str, Optional[str]] = Field(default_factory=dict, alias="machineStatus")

    model_config = ConfigDict(populate_by_name=True)


# ══════════════════════════════════════════════════════════════════════════
# Service Responses
# ══════════════════════════════════════════════════════════════════════════


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    """
    Standardized error body for all API errors.

    Example:
        {
            "error": "forbidden",
            "message": "Incorrect password",
            "request_id": "1f0c9a7e"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    status: str = Field(default="OK", description="Liveness indicator")


class ServiceInfoResponse(BaseModel):
    """Banner served at GET /."""
    message: str
    version: str
    endpoints: Dict[str, str]
