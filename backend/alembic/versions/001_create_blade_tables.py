"""Create blade stock tables

Revision ID: 001
Revises: None
Create Date: 2026-10-17 00:00:00.000000+00:00

Creates inventory, logs, machine_blades, blade_assignments and machine_status.
See bladestock/models/ for the column documentation.

Rollback: downgrade() drops all five tables (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "inventory",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("group_name", sa.String(100), nullable=False,
                  comment="Machine group the stock belongs to"),
        sa.Column("blade_type", sa.String(100), nullable=False,
                  comment="Blade type label, unique within a group"),
        sa.Column("fixed", sa.Integer(), nullable=True),
        sa.Column("available", sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("group_name", "blade_type", name="uq_inventory_group_blade"),
    )

    op.create_table(
        "logs",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("machine_name", sa.String(100), nullable=False),
        sa.Column("blade_type", sa.String(100), nullable=False),
        sa.Column("action", sa.String(50), nullable=False),
        sa.Column("amount", sa.Integer(), nullable=True),
        sa.Column("person_name", sa.String(100), nullable=True),
        sa.Column("group_name", sa.String(100), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this entry was recorded (UTC)",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_logs_created_at", "logs", [sa.text("created_at DESC")])

    op.create_table(
        "machine_blades",
        sa.Column("machine_id", sa.String(100), nullable=False),
        sa.Column("blade_type", sa.String(100), nullable=True),
        sa.PrimaryKeyConstraint("machine_id"),
    )

    op.create_table(
        "blade_assignments",
        sa.Column("machine_id", sa.String(100), nullable=False),
        sa.Column("blade_type", sa.String(100), nullable=True),
        sa.Column("count", sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint("machine_id"),
    )

    op.create_table(
        "machine_status",
        sa.Column("machine_id", sa.String(100), nullable=False),
        sa.Column("status", sa.String(50), nullable=True),
        sa.PrimaryKeyConstraint("machine_id"),
    )


def downgrade() -> None:
    op.drop_table("machine_status")
    op.drop_table("blade_assignments")
    op.drop_table("machine_blades")
    op.drop_index("idx_logs_created_at", table_name="logs")
    op.drop_table("logs")
    op.drop_table("inventory")
