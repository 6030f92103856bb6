"""structlog setup.

Learn: Every module grabs its logger with structlog.get_logger() and logs
dotted event names with keyword context. merge_contextvars pulls in the
request_id bound by RequestIdMiddleware, so all lines for one request
can be correlated.
"""

import logging

import structlog

from talentflow.config import settings

_LOG_CONFIGURED = False


def configure_logging() -> None:
    """Configure structlog once per process."""
    global _LOG_CONFIGURED
    if _LOG_CONFIGURED:
        return

    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    renderer = (
        structlog.processors.JSONRenderer()
        if settings.log_json
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )
    _LOG_CONFIGURED = True
