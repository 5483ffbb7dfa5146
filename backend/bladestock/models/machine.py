"""
Blade Stock Backend — Machine-keyed SQLAlchemy Models
=======================================================

Three small tables, each keyed by machine_id and written only through
upserts that overwrite the previous value:

    machine_blades     machine_id → blade_type          (blade currently fitted)
    blade_assignments  machine_id → blade_type, count   (planned allocation)
    machine_status     machine_id → status              (free-text status label)

machine_id is the primary key, so uniqueness is enforced by the database.
"""

from typing import Optional

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from bladestock.database import Base


class MachineBlade(Base):
    __tablename__ = "machine_blades"

    machine_id: Mapped[str] = mapped_column(String(100), primary_key=True)
    blade_type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    def __repr__(self) -> str:
        return f"<MachineBlade(machine='{self.machine_id}', blade='{self.blade_type}')>"


class BladeAssignment(Base):
    __tablename__ = "blade_assignments"

    machine_id: Mapped[str] = mapped_column(String(100), primary_key=True)
    blade_type: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    count: Mapped[Optional[int]] = mapped_column(Integer, nullable=True, default=0)

    def __repr__(self) -> str:
        return (
            f"<BladeAssignment(machine='{self.machine_id}', blade='{self.blade_type}', "
            f"count={self.count})>"
        )


class MachineStatus(Base):
    __tablename__ = "machine_status"

    machine_id: Mapped[str] = mapped_column(String(100), primary_key=True)
    status: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    def __repr__(self) -> str:
        return f"<MachineStatus(machine='{self.machine_id}', status='{self.status}')>"
