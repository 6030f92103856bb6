"""Request-scoped security context.

Learn: The authentication middleware builds one SecurityContext per
request and stores it on request.state. Route handlers receive it via
Depends(get_security_context) and pass it explicitly into every service
call. There is no global holder, so concurrent requests never see each
other's principal.
"""

from dataclasses import dataclass
from typing import Optional

from talentflow.enums import Role
from talentflow.errors import UnauthenticatedError


@dataclass(frozen=True)
class Principal:
    """The identity resolved from a verified bearer token."""

    account_id: int
    email: str
    role: Role

    @property
    def authority(self) -> str:
        return f"ROLE_{self.role.value}"


@dataclass(frozen=True)
class SecurityContext:
    principal: Optional[Principal] = None

    @property
    def is_authenticated(self) -> bool:
        return self.principal is not None

    def current_principal(self) -> Principal:
        """Return the principal, or raise UnauthenticatedError if there is none."""
        if self.principal is None:
            raise UnauthenticatedError("Authentication required")
        return self.principal


ANONYMOUS = SecurityContext()
