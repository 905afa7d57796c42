"""Initial recruitment schema

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-18

"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "person",
        sa.Column("person_id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("surname", sa.String(length=255), nullable=False),
        sa.Column("pnr", sa.String(length=12), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password", sa.String(length=255), nullable=False),
        sa.Column("role_id", sa.Integer(), nullable=False),
        sa.Column("username", sa.String(length=30), nullable=False),
        sa.UniqueConstraint("pnr", name="uq_person_pnr"),
        sa.UniqueConstraint("email", name="uq_person_email"),
        sa.UniqueConstraint("username", name="uq_person_username"),
    )
    op.create_table(
        "competence",
        sa.Column("competence_id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.UniqueConstraint("name", name="uq_competence_name"),
    )
    op.create_table(
        "competence_profile",
        sa.Column("competence_profile_id", sa.Integer(), primary_key=True),
        sa.Column("person_id", sa.Integer(), sa.ForeignKey("person.person_id"), nullable=False),
        sa.Column("competence_id", sa.Integer(), sa.ForeignKey("competence.competence_id"), nullable=False),
        sa.Column("years_of_experience", sa.Numeric(4, 2), nullable=False),
        sa.CheckConstraint(
            "years_of_experience >= 0 AND years_of_experience <= 50",
            name="ck_competence_profile_years_of_experience_range",
        ),
    )
    op.create_index("ix_competence_profile_person_id", "competence_profile", ["person_id"])
    op.create_table(
        "availability",
        sa.Column("availability_id", sa.Integer(), primary_key=True),
        sa.Column("person_id", sa.Integer(), sa.ForeignKey("person.person_id"), nullable=False),
        sa.Column("from_date", sa.Date(), nullable=False),
        sa.Column("to_date", sa.Date(), nullable=False),
        sa.CheckConstraint("from_date <= to_date", name="ck_availability_period_order"),
    )
    op.create_index("ix_availability_person_id", "availability", ["person_id"])
    op.create_table(
        "job_application",
        sa.Column("job_application_id", sa.Integer(), primary_key=True),
        sa.Column("person_id", sa.Integer(), sa.ForeignKey("person.person_id"), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="unhandled"),
    )
    op.create_index("ix_job_application_person_id", "job_application", ["person_id"])


def downgrade() -> None:
    op.drop_index("ix_job_application_person_id", table_name="job_application")
    op.drop_table("job_application")
    op.drop_index("ix_availability_person_id", table_name="availability")
    op.drop_table("availability")
    op.drop_index("ix_competence_profile_person_id", table_name="competence_profile")
    op.drop_table("competence_profile")
    op.drop_table("competence")
    op.drop_table("person")
