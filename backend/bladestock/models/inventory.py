"""
Blade Stock Backend — Inventory SQLAlchemy Model
==================================================

What:  ORM model for the `inventory` table: blade counts per group and blade type.
Who:   InventoryService (upsert), DataService (aggregate read, reset), Alembic.

Table Design:
    - id: surrogate integer key, never exposed as a natural key
    - (group_name, blade_type): unique pair, the upsert conflict target
    - fixed / available: nullable integer counts; readers treat NULL as 0
    Rows are never deleted by the API. Reset zeroes the counts and keeps the rows.
"""

from typing import Optional

from sqlalchemy import Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from bladestock.database import Base


class InventoryItem(Base):
    """Stock counts for one blade type within one machine group."""

    __tablename__ = "inventory"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    group_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Machine group the stock belongs to",
    )

    blade_type: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Blade type label, unique within a group",
    )

    # Blades permanently allotted to the group
    fixed: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, default=0)

    # Blades currently on the shelf
    available: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, default=0)

    __table_args__ = (
        UniqueConstraint("group_name", "blade_type", name="uq_inventory_group_blade"),
    )

    def __repr__(self) -> str:
        return (
            f"<InventoryItem(group='{self.group_name}', blade='{self.blade_type}', "
            f"fixed={self.fixed}, available={self.available})>"
        )
