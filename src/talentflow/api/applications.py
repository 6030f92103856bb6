"""Application API routes.

Learn: Candidates apply and list their own applications; the job's
owner (or an ADMIN) lists applications per job and sets their status.
Role checks happen in the route gate, ownership in ApplicationService.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from talentflow.auth.context import SecurityContext
from talentflow.auth.dependencies import get_security_context
from talentflow.db.engine import get_db
from talentflow.schemas.application import ApplicationRead, ApplyRequest, StatusUpdate
from talentflow.schemas.common import ApiResponse
from talentflow.services.application_service import ApplicationService

router = APIRouter(prefix="/applications")


def _app_svc(db: AsyncSession = Depends(get_db)) -> ApplicationService:
    return ApplicationService(db)


@router.post(
    "/apply/{job_id}", response_model=ApiResponse[ApplicationRead], status_code=201
)
async def apply_for_job(
    job_id: int,
    body: ApplyRequest,
    ctx: SecurityContext = Depends(get_security_context),
    svc: ApplicationService = Depends(_app_svc),
):
    """Apply for an OPEN job. One application per candidate per job."""
    application = await svc.apply(ctx, job_id, body.resume_link)
    return ApiResponse.ok(
        "Application submitted successfully",
        ApplicationRead.from_application(application),
    )


@router.get("/my", response_model=ApiResponse[list[ApplicationRead]])
async def my_applications(
    ctx: SecurityContext = Depends(get_security_context),
    svc: ApplicationService = Depends(_app_svc),
):
    """All applications submitted by the caller."""
    applications = await svc.list_mine(ctx)
    return ApiResponse.ok(
        "Applications retrieved successfully",
        [ApplicationRead.from_application(a) for a in applications],
    )


@router.get("/job/{job_id}", response_model=ApiResponse[list[ApplicationRead]])
async def applications_for_job(
    job_id: int,
    ctx: SecurityContext = Depends(get_security_context),
    svc: ApplicationService = Depends(_app_svc),
):
    """Applications received by one job. Job owner or ADMIN only."""
    applications = await svc.list_for_job(ctx, job_id)
    return ApiResponse.ok(
        "Applications retrieved successfully",
        [ApplicationRead.from_application(a) for a in applications],
    )


@router.put("/{application_id}/status", response_model=ApiResponse[ApplicationRead])
async def update_application_status(
    application_id: int,
    body: StatusUpdate,
    ctx: SecurityContext = Depends(get_security_context),
    svc: ApplicationService = Depends(_app_svc),
):
    """Overwrite an application's status. Job owner or ADMIN only."""
    application = await svc.update_status(ctx, application_id, body.status)
    return ApiResponse.ok(
        "Application status updated successfully",
        ApplicationRead.from_application(application),
    )
