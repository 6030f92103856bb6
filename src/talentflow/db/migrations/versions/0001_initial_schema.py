"""Initial schema: users, jobs, job_skills, applications.

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19
"""

import sqlalchemy as sa
from alembic import op

revision = "0001_initial_schema"
down_revision = None
branch_labels = None
depends_on = None

_ROLE = sa.Enum(
    "ADMIN", "RECRUITER", "CANDIDATE",
    name="role", native_enum=False, length=32,
)
_EMPLOYMENT_TYPE = sa.Enum(
    "FULL_TIME", "PART_TIME", "CONTRACT", "INTERNSHIP", "FREELANCE",
    name="employment_type", native_enum=False, length=32,
)
_JOB_STATUS = sa.Enum(
    "OPEN", "CLOSED",
    name="job_status", native_enum=False, length=32,
)
_APPLICATION_STATUS = sa.Enum(
    "APPLIED", "UNDER_REVIEW", "SHORTLISTED", "INTERVIEW",
    "OFFERED", "HIRED", "REJECTED", "WITHDRAWN",
    name="application_status", native_enum=False, length=32,
)


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("full_name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("role", _ROLE, nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        "jobs",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column("employment_type", _EMPLOYMENT_TYPE, nullable=False),
        sa.Column("experience_level", sa.String(100), nullable=False),
        sa.Column("status", _JOB_STATUS, nullable=False),
        sa.Column("posted_by_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_jobs_posted_by", "jobs", ["posted_by_id"])
    op.create_index("ix_jobs_created_at", "jobs", ["created_at"])

    op.create_table(
        "job_skills",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "job_id", sa.Integer(),
            sa.ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("position", sa.Integer(), nullable=False),
        sa.Column("skill", sa.String(100), nullable=False),
    )
    op.create_index("ix_job_skills_job", "job_skills", ["job_id", "position"])
    op.create_index("ix_job_skills_skill", "job_skills", ["skill"])

    op.create_table(
        "applications",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("candidate_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column(
            "job_id", sa.Integer(),
            sa.ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("status", _APPLICATION_STATUS, nullable=False),
        sa.Column("resume_link", sa.String(1024), nullable=False),
        sa.Column("applied_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint(
            "candidate_id", "job_id", name="uq_applications_candidate_job"
        ),
    )
    op.create_index("ix_applications_job", "applications", ["job_id"])


def downgrade() -> None:
    op.drop_index("ix_applications_job", table_name="applications")
    op.drop_table("applications")
    op.drop_index("ix_job_skills_skill", table_name="job_skills")
    op.drop_index("ix_job_skills_job", table_name="job_skills")
    op.drop_table("job_skills")
    op.drop_index("ix_jobs_created_at", table_name="jobs")
    op.drop_index("ix_jobs_posted_by", table_name="jobs")
    op.drop_table("jobs")
    op.drop_table("users")
