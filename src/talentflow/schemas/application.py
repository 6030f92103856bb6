"""Pydantic schemas for job applications."""

from pydantic import Field, field_validator

from talentflow.db.models import Application
from talentflow.enums import ApplicationStatus
from talentflow.schemas.common import CamelModel, UtcDatetime


class ApplyRequest(CamelModel):
    resume_link: str = Field(..., min_length=1, max_length=1024)

    @field_validator("resume_link")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Resume link is required")
        return v


class StatusUpdate(CamelModel):
    """Any status may follow any other; there is no transition graph."""
    status: ApplicationStatus


class ApplicationRead(CamelModel):
    id: int
    candidate_id: int
    candidate_name: str
    candidate_email: str
    job_id: int
    job_title: str
    status: ApplicationStatus
    resume_link: str
    applied_at: UtcDatetime

    @classmethod
    def from_application(cls, application: Application) -> "ApplicationRead":
        return cls(
            id=application.id,
            candidate_id=application.candidate_id,
            candidate_name=application.candidate.full_name,
            candidate_email=application.candidate.email,
            job_id=application.job_id,
            job_title=application.job.title,
            status=application.status,
            resume_link=application.resume_link,
            applied_at=application.applied_at,
        )
