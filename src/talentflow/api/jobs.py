"""Job API routes.

Learn: These routes are the HTTP interface to JobService. Reads are
public; writes need RECRUITER or ADMIN (route gate) and ownership
(service). Pagination uses page/size/sortBy/sortDir query parameters,
defaulting to newest first.

/jobs/search is declared before /jobs/{job_id} so "search" is never
parsed as an id.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from talentflow.auth.context import SecurityContext
from talentflow.auth.dependencies import get_security_context
from talentflow.config import settings
from talentflow.db.engine import get_db
from talentflow.enums import JobStatus
from talentflow.schemas.common import ApiResponse, Page
from talentflow.schemas.job import JobRead, JobWrite
from talentflow.services.job_service import JobService, PageRequest

router = APIRouter(prefix="/jobs")


def _job_svc(db: AsyncSession = Depends(get_db)) -> JobService:
    return JobService(db)


def _paging(
    page: int = Query(0, ge=0),
    size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    sort_by: str = Query("createdAt", alias="sortBy"),
    sort_dir: str = Query("DESC", alias="sortDir"),
) -> PageRequest:
    return PageRequest(page=page, size=size, sort_by=sort_by, sort_dir=sort_dir)


def _page_of(jobs, total: int, paging: PageRequest) -> Page[JobRead]:
    return Page[JobRead].build(
        content=[JobRead.from_job(j) for j in jobs],
        page=paging.page,
        size=paging.size,
        total=total,
    )


# ═══════════════════════════════════════════════════════════
# Reads (public)
# ═══════════════════════════════════════════════════════════


@router.get("", response_model=ApiResponse[Page[JobRead]])
async def list_jobs(
    paging: PageRequest = Depends(_paging),
    svc: JobService = Depends(_job_svc),
):
    """Paginated list of all jobs."""
    jobs, total = await svc.list_jobs(paging)
    return ApiResponse.ok("Jobs retrieved successfully", _page_of(jobs, total, paging))


@router.get("/search", response_model=ApiResponse[Page[JobRead]])
async def search_jobs(
    skill: Optional[str] = Query(None),
    location: Optional[str] = Query(None),
    status: Optional[JobStatus] = Query(None),
    paging: PageRequest = Depends(_paging),
    svc: JobService = Depends(_job_svc),
):
    """Search by skill, location and status with pagination."""
    jobs, total = await svc.search_jobs(
        paging, skill=skill, location=location, status=status
    )
    return ApiResponse.ok("Jobs retrieved successfully", _page_of(jobs, total, paging))


@router.get("/{job_id}", response_model=ApiResponse[JobRead])
async def get_job(job_id: int, svc: JobService = Depends(_job_svc)):
    """Get a single job by ID."""
    job = await svc.get_job(job_id)
    return ApiResponse.ok("Job retrieved successfully", JobRead.from_job(job))


# ═══════════════════════════════════════════════════════════
# Writes (RECRUITER / ADMIN)
# ═══════════════════════════════════════════════════════════


@router.post("", response_model=ApiResponse[JobRead], status_code=201)
async def create_job(
    body: JobWrite,
    ctx: SecurityContext = Depends(get_security_context),
    svc: JobService = Depends(_job_svc),
):
    """Create a job owned by the caller. Always starts OPEN."""
    job = await svc.create_job(ctx, body)
    return ApiResponse.ok("Job created successfully", JobRead.from_job(job))


@router.put("/{job_id}", response_model=ApiResponse[JobRead])
async def update_job(
    job_id: int,
    body: JobWrite,
    ctx: SecurityContext = Depends(get_security_context),
    svc: JobService = Depends(_job_svc),
):
    """Replace a job's descriptive fields. Owner or ADMIN only."""
    job = await svc.update_job(ctx, job_id, body)
    return ApiResponse.ok("Job updated successfully", JobRead.from_job(job))


@router.delete("/{job_id}", response_model=ApiResponse[None])
async def delete_job(
    job_id: int,
    ctx: SecurityContext = Depends(get_security_context),
    svc: JobService = Depends(_job_svc),
):
    """Delete a job and all of its applications. Owner or ADMIN only."""
    await svc.delete_job(ctx, job_id)
    return ApiResponse.ok("Job deleted successfully")
