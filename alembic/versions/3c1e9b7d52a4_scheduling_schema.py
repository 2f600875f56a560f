"""Organizations, shifts, shift rotations and employee shift assignments

Revision ID: 3c1e9b7d52a4
Revises:
Create Date: 2026-10-17 10:30:12.418306
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3c1e9b7d52a4"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

UQ_ONE_DEFAULT = "uq_shifts_company_default"


def upgrade() -> None:
    op.create_table(
        "organizations",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("timezone", sa.String(length=64), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )

    # --- shifts ---
    op.create_table(
        "shifts",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("company_id", sa.Integer(), nullable=False),
        sa.Column("shift_name", sa.String(length=120), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("end_time", sa.Time(), nullable=False),
        sa.Column("working_days", sa.JSON(), nullable=False),
        sa.Column("is_default", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("start_time <> end_time", name="ck_shifts_nonzero"),
        sa.ForeignKeyConstraint(["company_id"], ["organizations.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_shifts_company_id"), "shifts", ["company_id"], unique=False)
    # at most one default shift per company
    op.create_index(
        UQ_ONE_DEFAULT,
        "shifts",
        ["company_id"],
        unique=True,
        sqlite_where=sa.text("is_default = 1"),
        postgresql_where=sa.text("is_default"),
    )

    # --- shift_rotations ---
    op.create_table(
        "shift_rotations",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("company_id", sa.Integer(), nullable=False),
        sa.Column("rotation_name", sa.String(length=120), nullable=False),
        sa.Column("rotation_frequency", sa.String(length=50), nullable=False),
        sa.Column("replace_existing_shift", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("shifts_in_sequence", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(["company_id"], ["organizations.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_shift_rotations_company_id"), "shift_rotations", ["company_id"], unique=False)

    # --- employee_shift_assignments ---
    op.create_table(
        "employee_shift_assignments",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("company_id", sa.Integer(), nullable=False),
        sa.Column("employee_id", sa.Integer(), nullable=False),
        sa.Column("shift_id", sa.Integer(), nullable=False),
        sa.Column("assigned_date", sa.Date(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["company_id"], ["organizations.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["shift_id"], ["shifts.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("employee_id", "assigned_date", name="uq_shift_assignment_employee_date"),
    )
    op.create_index(op.f("ix_employee_shift_assignments_company_id"), "employee_shift_assignments", ["company_id"], unique=False)
    op.create_index(op.f("ix_employee_shift_assignments_employee_id"), "employee_shift_assignments", ["employee_id"], unique=False)
    op.create_index(op.f("ix_employee_shift_assignments_shift_id"), "employee_shift_assignments", ["shift_id"], unique=False)
    op.create_index(
        "ix_shift_assignments_company_date", "employee_shift_assignments", ["company_id", "assigned_date"], unique=False
    )


def downgrade() -> None:
    op.drop_index("ix_shift_assignments_company_date", table_name="employee_shift_assignments")
    op.drop_index(op.f("ix_employee_shift_assignments_shift_id"), table_name="employee_shift_assignments")
    op.drop_index(op.f("ix_employee_shift_assignments_employee_id"), table_name="employee_shift_assignments")
    op.drop_index(op.f("ix_employee_shift_assignments_company_id"), table_name="employee_shift_assignments")
    op.drop_table("employee_shift_assignments")

    op.drop_index(op.f("ix_shift_rotations_company_id"), table_name="shift_rotations")
    op.drop_table("shift_rotations")

    op.drop_index(UQ_ONE_DEFAULT, table_name="shifts")
    op.drop_index(op.f("ix_shifts_company_id"), table_name="shifts")
    op.drop_table("shifts")

    op.drop_table("organizations")
