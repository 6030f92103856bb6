"""API route aggregation.

All routers registered here get mounted in main.py under the API prefix.

Learn: Authorization is applied at the router level using FastAPI's
dependencies parameter: enforce_route_gate runs before every handler
and consults the static route table in auth/policy.py. Public routes
(register, login, job reads, health) pass through it untouched.
"""

from fastapi import APIRouter, Depends

from talentflow.api.applications import router as applications_router
from talentflow.api.auth import router as auth_router
from talentflow.api.health import router as health_router
from talentflow.api.jobs import router as jobs_router
from talentflow.auth.dependencies import enforce_route_gate
from talentflow.config import settings

api_router = APIRouter(
    prefix=settings.api_prefix,
    dependencies=[Depends(enforce_route_gate)],
)

api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])
api_router.include_router(jobs_router, tags=["jobs"])
api_router.include_router(applications_router, tags=["applications"])
