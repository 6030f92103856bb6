"""SQLAlchemy ORM models — single source of truth for the database schema.

Learn: Declarative ORM mapping with SQLAlchemy 2.0 style (Mapped[] + mapped_column).
Each class = one table. Relationships, constraints, and indexes defined here.
Alembic migrations mirror these models.

Key concepts:
- Integer identity primary keys, assigned by the store
- Enums stored as strings (native_enum=False) so sqlite and Postgres agree
- Ownership is carried by plain foreign-key columns (posted_by_id,
  candidate_id, job_id). Authorization compares those ids; the
  relationships below exist only to render names in responses.
- The (candidate_id, job_id) unique constraint is what actually prevents
  duplicate applications under concurrent requests.
"""

from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from talentflow.enums import ApplicationStatus, EmploymentType, JobStatus, Role


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _enum(enum_cls, name: str) -> Enum:
    return Enum(
        enum_cls,
        name=name,
        native_enum=False,
        length=32,
        validate_strings=True,
    )


# ══════════════════════════════════════════════════════════════
# Accounts
# ══════════════════════════════════════════════════════════════


class User(Base):
    """An account. Exactly one role; never deleted.

    Learn: Emails are stored lower-cased so the unique index doubles as
    a case-insensitive lookup.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    full_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    role: Mapped[Role] = mapped_column(_enum(Role, "role"), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )


# ══════════════════════════════════════════════════════════════
# Jobs
# ══════════════════════════════════════════════════════════════


class Job(Base):
    """A job posting owned by the account that created it."""

    __tablename__ = "jobs"
    __table_args__ = (
        Index("ix_jobs_posted_by", "posted_by_id"),
        Index("ix_jobs_created_at", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    location: Mapped[str] = mapped_column(String(255), nullable=False)
    employment_type: Mapped[EmploymentType] = mapped_column(
        _enum(EmploymentType, "employment_type"), nullable=False
    )
    experience_level: Mapped[str] = mapped_column(String(100), nullable=False)
    status: Mapped[JobStatus] = mapped_column(
        _enum(JobStatus, "job_status"), nullable=False, default=JobStatus.OPEN
    )
    posted_by_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    # Relationships
    posted_by: Mapped["User"] = relationship(lazy="joined")
    skill_rows: Mapped[list["JobSkill"]] = relationship(
        order_by="JobSkill.position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def required_skills(self) -> list[str]:
        return [row.skill for row in self.skill_rows]

    @required_skills.setter
    def required_skills(self, skills: list[str]) -> None:
        self.skill_rows = [
            JobSkill(position=i, skill=skill) for i, skill in enumerate(skills)
        ]


class JobSkill(Base):
    """One required skill of a job, in the order the poster gave them."""

    __tablename__ = "job_skills"
    __table_args__ = (
        Index("ix_job_skills_job", "job_id", "position"),
        Index("ix_job_skills_skill", "skill"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    job_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    skill: Mapped[str] = mapped_column(String(100), nullable=False)


# ══════════════════════════════════════════════════════════════
# Applications
# ══════════════════════════════════════════════════════════════


class Application(Base):
    """A candidate's application to a job.

    Learn: status starts at APPLIED and may be overwritten with any
    ApplicationStatus member; applied_at is set once on insert.
    """

    __tablename__ = "applications"
    __table_args__ = (
        UniqueConstraint(
            "candidate_id", "job_id", name="uq_applications_candidate_job"
        ),
        Index("ix_applications_job", "job_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    candidate_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False
    )
    job_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False
    )
    status: Mapped[ApplicationStatus] = mapped_column(
        _enum(ApplicationStatus, "application_status"),
        nullable=False,
        default=ApplicationStatus.APPLIED,
    )
    resume_link: Mapped[str] = mapped_column(String(1024), nullable=False)
    applied_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    # Relationships (display only)
    candidate: Mapped["User"] = relationship(lazy="joined")
    job: Mapped["Job"] = relationship(lazy="joined")
