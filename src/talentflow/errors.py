"""Domain failures raised by services and the auth layer.

Learn: Nothing below the HTTP boundary knows about status codes.
Services raise these, and api/errors.py is the one place that maps
each class to a status and the response envelope.
"""


class TalentFlowError(Exception):
    """Base class for all expected failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(TalentFlowError):
    """An entity id did not resolve."""


class ForbiddenError(TalentFlowError):
    """Authenticated, but lacking the role or ownership the action needs."""


class UnauthenticatedError(TalentFlowError):
    """No usable principal on a route that requires one."""


class InvalidCredentialsError(UnauthenticatedError):
    """Login failed.

    The message never says whether the email or the password was wrong.
    """

    def __init__(self):
        super().__init__("Invalid email or password")


class DomainValidationError(TalentFlowError):
    """A business rule rejected the request (closed job, duplicate, ...)."""
