"""Job service — posting, editing, deleting and browsing jobs.

Learn: Every job is created OPEN and no operation here changes its
status. Edits replace the descriptive fields only; owner and createdAt
are fixed at creation. Authorization has two halves:
- create re-reads the acting account from the store, so an account that
  was deactivated or demoted after its token was issued is rejected
- update/delete compare the job's posted_by_id with the principal's
  account id (or accept an ADMIN)

Deleting a job removes its applications first, then the job and its
skill rows, inside one transaction.
"""

from dataclasses import dataclass
from typing import Optional

import structlog
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from talentflow.auth.context import SecurityContext
from talentflow.auth.policy import can_post_jobs, owns_or_admin
from talentflow.db.models import Application, Job, JobSkill, User
from talentflow.enums import JobStatus
from talentflow.errors import DomainValidationError, ForbiddenError, NotFoundError
from talentflow.schemas.job import JobWrite

logger = structlog.get_logger()


# ═══════════════════════════════════════════════════════════
# Paging
# ═══════════════════════════════════════════════════════════

SORTABLE_COLUMNS = {
    "createdAt": Job.created_at,
    "title": Job.title,
    "location": Job.location,
    "employmentType": Job.employment_type,
    "experienceLevel": Job.experience_level,
    "status": Job.status,
    "id": Job.id,
}


@dataclass(frozen=True)
class PageRequest:
    page: int = 0
    size: int = 10
    sort_by: str = "createdAt"
    sort_dir: str = "DESC"

    @property
    def ascending(self) -> bool:
        return self.sort_dir.upper() == "ASC"

    def order_by(self):
        column = SORTABLE_COLUMNS.get(self.sort_by)
        if column is None:
            raise DomainValidationError(
                f"Cannot sort by '{self.sort_by}'. "
                f"Allowed: {', '.join(SORTABLE_COLUMNS)}"
            )
        # id breaks ties so equal timestamps still page deterministically
        if self.ascending:
            return [column.asc(), Job.id.asc()]
        return [column.desc(), Job.id.desc()]


# ═══════════════════════════════════════════════════════════
# Service
# ═══════════════════════════════════════════════════════════


class JobService:
    """Business logic for job CRUD and search."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Create ──────────────────────────────────────────

    async def create_job(self, ctx: SecurityContext, data: JobWrite) -> Job:
        principal = ctx.current_principal()
        poster = await self.db.get(User, principal.account_id)
        if not poster:
            raise NotFoundError("User not found")
        if not poster.is_active:
            raise ForbiddenError("Account is disabled")
        if not can_post_jobs(poster.role):
            raise ForbiddenError("Only recruiters can post jobs")

        job = Job(
            title=data.title,
            description=data.description,
            location=data.location,
            employment_type=data.employment_type,
            experience_level=data.experience_level,
            status=JobStatus.OPEN,
            posted_by=poster,
        )
        job.required_skills = data.required_skills
        self.db.add(job)
        await self.db.commit()

        logger.info("jobs.created", job_id=job.id, title=job.title, posted_by=poster.email)
        return job

    # ─── Read ────────────────────────────────────────────

    async def get_job(self, job_id: int) -> Job:
        job = await self.db.get(Job, job_id)
        if not job:
            raise NotFoundError(f"Job not found with id: {job_id}")
        return job

    async def list_jobs(self, paging: PageRequest) -> tuple[list[Job], int]:
        return await self._page(paging, [])

    async def search_jobs(
        self,
        paging: PageRequest,
        *,
        skill: Optional[str] = None,
        location: Optional[str] = None,
        status: Optional[JobStatus] = None,
    ) -> tuple[list[Job], int]:
        """Filter jobs. Every given filter must match; none given = all jobs.

        - skill: exact member of required skills
        - location: case-insensitive substring
        - status: exact
        """
        filters = []
        if skill:
            filters.append(Job.skill_rows.any(JobSkill.skill == skill))
        if location:
            filters.append(func.lower(Job.location).contains(location.lower(), autoescape=True))
        if status is not None:
            filters.append(Job.status == status)
        return await self._page(paging, filters)

    async def _page(self, paging: PageRequest, filters: list) -> tuple[list[Job], int]:
        order = paging.order_by()

        count_q = select(func.count()).select_from(Job).where(*filters)
        total = (await self.db.execute(count_q)).scalar_one()

        q = (
            select(Job)
            .where(*filters)
            .order_by(*order)
            .offset(paging.page * paging.size)
            .limit(paging.size)
        )
        result = await self.db.execute(q)
        return list(result.scalars().all()), total

    # ─── Update ──────────────────────────────────────────

    async def update_job(self, ctx: SecurityContext, job_id: int, data: JobWrite) -> Job:
        principal = ctx.current_principal()
        job = await self.get_job(job_id)
        if not owns_or_admin(job.posted_by_id, principal.account_id, principal.role):
            raise ForbiddenError("You can only update your own jobs")

        job.title = data.title
        job.description = data.description
        job.location = data.location
        job.employment_type = data.employment_type
        job.experience_level = data.experience_level
        job.required_skills = data.required_skills
        await self.db.commit()

        logger.info("jobs.updated", job_id=job.id, actor_id=principal.account_id)
        return job

    # ─── Delete ──────────────────────────────────────────

    async def delete_job(self, ctx: SecurityContext, job_id: int) -> None:
        principal = ctx.current_principal()
        job = await self.get_job(job_id)
        if not owns_or_admin(job.posted_by_id, principal.account_id, principal.role):
            raise ForbiddenError("You can only delete your own jobs")

        result = await self.db.execute(
            delete(Application).where(Application.job_id == job.id)
        )
        await self.db.delete(job)
        await self.db.commit()

        logger.info(
            "jobs.deleted",
            job_id=job_id,
            actor_id=principal.account_id,
            applications_removed=result.rowcount,
        )
