"""
ORM models for the five blade tables.

Importing this package registers every table on Base.metadata, which both
Alembic and the test fixtures rely on.
"""

from bladestock.models.inventory import InventoryItem
from bladestock.models.log_entry import LogEntry
from bladestock.models.machine import BladeAssignment, MachineBlade, MachineStatus

__all__ = [
    "InventoryItem",
    "LogEntry",
    "MachineBlade",
    "BladeAssignment",
    "MachineStatus",
]
