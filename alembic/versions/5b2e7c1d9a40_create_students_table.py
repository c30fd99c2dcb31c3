"""create students table

Revision ID: 5b2e7c1d9a40
Revises:
Create Date: 2026-10-19 10:12:41.503218

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5b2e7c1d9a40"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

GENDERS = ("male", "female", "other")
BLOOD_GROUPS = ("A+", "A-", "B+", "B-", "AB+", "AB-", "O+", "O-")
ACTIVE_STATUSES = ("active", "blocked")


def upgrade() -> None:
    op.create_table(
        "students",
        sa.Column("pk", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("id", sa.String(length=100), nullable=False),
        sa.Column("password", sa.String(length=255), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("middle_name", sa.String(length=100), nullable=True),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column(
            "gender",
            sa.Enum(*GENDERS, name="gender_enum", native_enum=False),
            nullable=False,
        ),
        sa.Column("date_of_birth", sa.String(length=20), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("contact_no", sa.String(length=15), nullable=False),
        sa.Column("emergency_contact_no", sa.String(length=15), nullable=False),
        sa.Column(
            "blood_group",
            sa.Enum(*BLOOD_GROUPS, name="blood_group_enum", native_enum=False),
            nullable=True,
        ),
        sa.Column("present_address", sa.String(length=255), nullable=False),
        sa.Column("permanent_address", sa.String(length=255), nullable=False),
        sa.Column("guardian_father_name", sa.String(length=20), nullable=False),
        sa.Column("guardian_father_occupation", sa.String(length=100), nullable=False),
        sa.Column("guardian_father_contact_no", sa.String(length=15), nullable=False),
        sa.Column("guardian_mother_name", sa.String(length=100), nullable=False),
        sa.Column("guardian_mother_occupation", sa.String(length=100), nullable=False),
        sa.Column("guardian_mother_contact_no", sa.String(length=15), nullable=False),
        sa.Column("local_guardian_name", sa.String(length=100), nullable=False),
        sa.Column("local_guardian_occupation", sa.String(length=100), nullable=False),
        sa.Column("local_guardian_contact_no", sa.String(length=15), nullable=False),
        sa.Column("local_guardian_address", sa.String(length=255), nullable=False),
        sa.Column("profile_img", sa.String(length=255), nullable=True),
        sa.Column(
            "is_active",
            sa.Enum(*ACTIVE_STATUSES, name="active_status_enum", native_enum=False),
            nullable=False,
            server_default="active",
        ),
        sa.Column(
            "is_deleted", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
    )
    # unique across live and soft-deleted rows alike
    op.create_index("ix_students_id", "students", ["id"], unique=True)
    op.create_index("ix_students_email", "students", ["email"], unique=True)
    op.create_index("ix_students_is_deleted", "students", ["is_deleted"])


def downgrade() -> None:
    op.drop_index("ix_students_is_deleted", table_name="students")
    op.drop_index("ix_students_email", table_name="students")
    op.drop_index("ix_students_id", table_name="students")
    op.drop_table("students")
