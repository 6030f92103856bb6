"""Authentication middleware — bearer token → request-scoped principal.

Learn: Runs once per request, before routing. A missing header is not
an error; a bad token is logged and the request continues anonymously.
The middleware never returns an HTTP error itself: the route gate and
the services reject the request later, once they find no principal.
"""

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from talentflow.auth.context import ANONYMOUS, Principal, SecurityContext
from talentflow.auth.jwt import TokenError, verify_token

logger = structlog.get_logger()

_BEARER = "bearer "


def authenticate(authorization: str | None) -> SecurityContext:
    """Build a SecurityContext from an Authorization header value."""
    if not authorization or not authorization.lower().startswith(_BEARER):
        return ANONYMOUS

    token = authorization[len(_BEARER):].strip()
    if not token:
        return ANONYMOUS

    try:
        claims = verify_token(token)
    except TokenError as e:
        logger.warning(
            "auth.token_rejected", reason=type(e).__name__, detail=str(e)
        )
        return ANONYMOUS

    return SecurityContext(
        principal=Principal(
            account_id=claims.account_id,
            email=claims.email,
            role=claims.role,
        )
    )


class AuthenticationMiddleware(BaseHTTPMiddleware):
    """Attach request.state.security_context for downstream dependencies."""

    async def dispatch(self, request: Request, call_next) -> Response:
        ctx = authenticate(request.headers.get("Authorization"))
        request.state.security_context = ctx
        if ctx.is_authenticated:
            structlog.contextvars.bind_contextvars(
                account_id=ctx.principal.account_id
            )
        return await call_next(request)
