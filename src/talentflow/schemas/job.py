"""Pydantic schemas for jobs.

Learn: JobWrite is used for both create (POST) and update (PUT) — an
update replaces every descriptive field, it is not a partial patch.
Status, owner and createdAt are never taken from the client.
"""

from pydantic import Field, field_validator

from talentflow.db.models import Job
from talentflow.enums import EmploymentType, JobStatus
from talentflow.schemas.common import CamelModel, UtcDatetime


class JobWrite(CamelModel):
    title: str = Field(..., min_length=3, max_length=200)
    description: str = Field(..., min_length=10)
    location: str = Field(..., min_length=1, max_length=255)
    employment_type: EmploymentType
    required_skills: list[str] = Field(..., min_length=1)
    experience_level: str = Field(..., min_length=1, max_length=100)

    @field_validator("title", "location", "experience_level")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v

    @field_validator("required_skills")
    @classmethod
    def _clean_skills(cls, v: list[str]) -> list[str]:
        skills = [s.strip() for s in v if s and s.strip()]
        if not skills:
            raise ValueError("At least one skill is required")
        return skills


class JobRead(CamelModel):
    id: int
    title: str
    description: str
    location: str
    employment_type: EmploymentType
    required_skills: list[str]
    experience_level: str
    status: JobStatus
    posted_by: str
    posted_by_id: int
    created_at: UtcDatetime

    @classmethod
    def from_job(cls, job: Job) -> "JobRead":
        return cls(
            id=job.id,
            title=job.title,
            description=job.description,
            location=job.location,
            employment_type=job.employment_type,
            required_skills=job.required_skills,
            experience_level=job.experience_level,
            status=job.status,
            posted_by=job.posted_by.full_name,
            posted_by_id=job.posted_by_id,
            created_at=job.created_at,
        )
