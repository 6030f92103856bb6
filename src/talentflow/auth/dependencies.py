"""FastAPI auth dependencies.

Learn: These are used as Depends() in route handlers.
- get_security_context: the per-request context the authentication
  middleware stored on request.state (anonymous if none)
- enforce_route_gate: attached to the API router, so it runs before
  every handler and raises domain errors the exception handlers map
  to 401/403
"""

from fastapi import Depends, Request

from talentflow.auth.context import ANONYMOUS, SecurityContext
from talentflow.auth.policy import check_route_access
from talentflow.config import settings


def get_security_context(request: Request) -> SecurityContext:
    """Return the request's security context (anonymous if unset)."""
    return getattr(request.state, "security_context", ANONYMOUS)


def enforce_route_gate(
    request: Request,
    ctx: SecurityContext = Depends(get_security_context),
) -> None:
    """Reject the request before the handler if the route gate says so."""
    path = request.url.path
    if settings.api_prefix and path.startswith(settings.api_prefix):
        path = path[len(settings.api_prefix):] or "/"
    check_route_access(request.method, path, ctx)
