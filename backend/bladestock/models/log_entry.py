"""
Blade Stock Backend — Log Entry SQLAlchemy Model
==================================================

What:  ORM model for the `logs` table: one row per recorded blade movement
       (install, removal, restock...).
Who:   LogService (append, delete), DataService (aggregate read, reset).

Lifecycle:
    1. Inserted by POST /api/logs; id and created_at are assigned on insert
    2. Never updated
    3. Deleted one at a time by DELETE /api/logs/{id}, or all at once by reset

Query Pattern:
    The aggregate read lists every entry newest first:
    SELECT ... ORDER BY created_at DESC, id DESC
    → served by idx_logs_created_at
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Index, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column

from bladestock.database import Base


class LogEntry(Base):
    """An immutable record of one blade movement on a machine."""

    __tablename__ = "logs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    machine_name: Mapped[str] = mapped_column(String(100), nullable=False)
    blade_type: Mapped[str] = mapped_column(String(100), nullable=False)

    # Free-form action label chosen by the frontend ("install", "remove", ...)
    action: Mapped[str] = mapped_column(String(50), nullable=False)

    amount: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    person_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    group_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    # Python-side default fills the attribute at flush time; the server default
    # covers rows inserted outside the ORM.
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this entry was recorded (UTC)",
    )

    __table_args__ = (
        Index("idx_logs_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return (
            f"<LogEntry(id={self.id}, machine='{self.machine_name}', "
            f"action='{self.action}', created_at='{self.created_at}')>"
        )
