"""Application service — candidates apply, job owners review.

Learn: The rules, in the order they are checked:

apply          candidate account exists, is active and is a CANDIDATE
               → job exists → job is OPEN → no earlier application
list mine      scoped by the query itself (candidate_id = principal)
list for job   job exists → principal owns the job or is ADMIN
update status  application exists → owner of its job or ADMIN

Ownership is always decided on ids read from the store: the job's owner
is fetched with an explicit query on application.job_id rather than by
walking an object graph.

The "already applied" check is only there for a friendly message. Two
concurrent requests can both pass it; the unique constraint on
(candidate_id, job_id) stops the second insert, and that IntegrityError
is reported the same way.
"""

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from talentflow.auth.context import SecurityContext
from talentflow.auth.policy import can_apply, owns_or_admin
from talentflow.db.models import Application, Job, User
from talentflow.enums import ApplicationStatus, JobStatus
from talentflow.errors import DomainValidationError, ForbiddenError, NotFoundError

logger = structlog.get_logger()

ALREADY_APPLIED = "You have already applied for this job"


class ApplicationService:
    """Business logic for the application lifecycle."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Apply ───────────────────────────────────────────

    async def apply(
        self, ctx: SecurityContext, job_id: int, resume_link: str
    ) -> Application:
        principal = ctx.current_principal()
        candidate = await self.db.get(User, principal.account_id)
        if not candidate:
            raise NotFoundError("User not found")
        if not candidate.is_active:
            raise ForbiddenError("Account is disabled")
        if not can_apply(candidate.role):
            raise ForbiddenError("Only candidates can apply for jobs")

        job = await self.db.get(Job, job_id)
        if not job:
            raise NotFoundError(f"Job not found with id: {job_id}")
        if job.status != JobStatus.OPEN:
            raise DomainValidationError("Cannot apply for a closed job")

        existing = await self.db.scalar(
            select(Application.id).where(
                Application.candidate_id == candidate.id,
                Application.job_id == job.id,
            )
        )
        if existing is not None:
            raise DomainValidationError(ALREADY_APPLIED)

        application = Application(
            candidate=candidate,
            job=job,
            status=ApplicationStatus.APPLIED,
            resume_link=resume_link,
        )
        self.db.add(application)
        try:
            await self.db.flush()
        except IntegrityError:
            await self.db.rollback()
            raise DomainValidationError(ALREADY_APPLIED)
        await self.db.commit()

        logger.info(
            "applications.created",
            application_id=application.id,
            job_id=job.id,
            candidate=candidate.email,
        )
        return application

    # ─── Read ────────────────────────────────────────────

    async def list_mine(self, ctx: SecurityContext) -> list[Application]:
        principal = ctx.current_principal()
        q = (
            select(Application)
            .where(Application.candidate_id == principal.account_id)
            .order_by(Application.applied_at.desc(), Application.id.desc())
        )
        result = await self.db.execute(q)
        return list(result.scalars().all())

    async def list_for_job(self, ctx: SecurityContext, job_id: int) -> list[Application]:
        principal = ctx.current_principal()
        owner_id = await self._job_owner_id(job_id)
        if not owns_or_admin(owner_id, principal.account_id, principal.role):
            raise ForbiddenError("You can only view applications for your own jobs")

        q = (
            select(Application)
            .where(Application.job_id == job_id)
            .order_by(Application.applied_at.asc(), Application.id.asc())
        )
        result = await self.db.execute(q)
        return list(result.scalars().all())

    # ─── Update ──────────────────────────────────────────

    async def update_status(
        self, ctx: SecurityContext, application_id: int, status: ApplicationStatus
    ) -> Application:
        principal = ctx.current_principal()
        application = await self.db.get(Application, application_id)
        if not application:
            raise NotFoundError(f"Application not found with id: {application_id}")

        owner_id = await self._job_owner_id(application.job_id)
        if not owns_or_admin(owner_id, principal.account_id, principal.role):
            raise ForbiddenError("You can only update applications for your own jobs")

        previous = application.status
        application.status = status
        await self.db.commit()

        logger.info(
            "applications.status_changed",
            application_id=application.id,
            previous=previous.value,
            status=status.value,
            actor_id=principal.account_id,
        )
        return application

    # ─── Helpers ─────────────────────────────────────────

    async def _job_owner_id(self, job_id: int) -> int:
        owner_id = await self.db.scalar(
            select(Job.posted_by_id).where(Job.id == job_id)
        )
        if owner_id is None:
            raise NotFoundError(f"Job not found with id: {job_id}")
        return owner_id
