"""Exception handlers — the one place failures become HTTP responses.

Learn: Services raise domain errors (talentflow.errors); these handlers
map each class to a status code and the standard envelope. Unknown
exceptions are logged with their traceback and answered with a generic
500 that leaks nothing about internals.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from talentflow.errors import (
    DomainValidationError,
    ForbiddenError,
    NotFoundError,
    TalentFlowError,
    UnauthenticatedError,
)

logger = structlog.get_logger()

INTERNAL_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."

_STATUS_BY_ERROR: tuple[tuple[type[TalentFlowError], int], ...] = (
    (NotFoundError, 404),
    (ForbiddenError, 403),
    (UnauthenticatedError, 401),
    (DomainValidationError, 400),
)


def envelope(message: str, data=None, success: bool = False) -> dict:
    return {"success": success, "message": message, "data": data}


def status_for(exc: TalentFlowError) -> int:
    for error_cls, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_cls):
            return status_code
    return 500


async def domain_error_handler(request: Request, exc: TalentFlowError) -> JSONResponse:
    status_code = status_for(exc)
    logger.info(
        "errors.domain",
        error=type(exc).__name__,
        status=status_code,
        detail=exc.message,
        path=request.url.path,
    )
    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return JSONResponse(
        status_code=status_code, content=envelope(exc.message), headers=headers
    )


def _field_name(loc: tuple) -> str:
    # ("body", "resumeLink") -> "resumeLink"; ("query", "page") -> "page"
    parts = [str(p) for p in loc if p not in ("body", "query", "path", "header")]
    return ".".join(parts) or "request"


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors: dict[str, str] = {}
    for err in exc.errors():
        errors.setdefault(_field_name(tuple(err.get("loc", ()))), err.get("msg", "invalid"))
    logger.info("errors.validation", path=request.url.path, fields=list(errors))
    body = envelope("Validation failed")
    body["errors"] = errors
    return JSONResponse(status_code=400, content=body)


async def http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=envelope(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "errors.unhandled",
        error=type(exc).__name__,
        path=request.url.path,
        method=request.method,
    )
    return JSONResponse(status_code=500, content=envelope(INTERNAL_ERROR_MESSAGE))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TalentFlowError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
