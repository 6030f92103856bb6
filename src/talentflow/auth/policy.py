"""Authorization policy — route gate and role predicates.

Learn: Two layers of authorization:

1. Route gate (coarse). ROUTE_RULES is a static, ordered table of
   (method, path pattern) → access rule, evaluated before any handler
   runs. First match wins. Paths are relative to the API prefix.
   Pattern syntax: `*` matches one path segment, a trailing `/**`
   matches the path itself or anything below it.

2. Ownership gate (fine). Services call the predicates below with ids
   they resolved from the store. Every predicate matches on Role
   exhaustively, so adding a role fails type checking until each rule
   decides what the new role may do.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, assert_never

from talentflow.auth.context import SecurityContext
from talentflow.enums import Role
from talentflow.errors import ForbiddenError, UnauthenticatedError


class Access(Enum):
    PUBLIC = "public"
    AUTHENTICATED = "authenticated"
    ROLES = "roles"


@dataclass(frozen=True)
class RouteRule:
    method: Optional[str]  # None = any method
    pattern: str
    access: Access
    roles: frozenset[Role] = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, "_regex", _compile(self.pattern))

    def matches(self, method: str, path: str) -> bool:
        if self.method is not None and self.method != method.upper():
            return False
        return self._regex.fullmatch(path) is not None


def _compile(pattern: str) -> "re.Pattern[str]":
    tail = ""
    if pattern.endswith("/**"):
        pattern = pattern[:-3]
        tail = "(/.*)?"
    parts = [
        "[^/]+" if segment == "*" else re.escape(segment)
        for segment in pattern.split("/")
    ]
    return re.compile("/".join(parts) + tail)


def public(method: Optional[str], pattern: str) -> RouteRule:
    return RouteRule(method, pattern, Access.PUBLIC)


def has_any_role(method: Optional[str], pattern: str, *roles: Role) -> RouteRule:
    return RouteRule(method, pattern, Access.ROLES, frozenset(roles))


# ─── Route table ─────────────────────────────────────────

ROUTE_RULES: tuple[RouteRule, ...] = (
    public(None, "/auth/register"),
    public(None, "/auth/login"),
    public("GET", "/health"),
    public("GET", "/jobs/**"),
    has_any_role("POST", "/jobs", Role.RECRUITER, Role.ADMIN),
    has_any_role("PUT", "/jobs/**", Role.RECRUITER, Role.ADMIN),
    has_any_role("DELETE", "/jobs/**", Role.RECRUITER, Role.ADMIN),
    has_any_role(None, "/applications/apply/**", Role.CANDIDATE),
    has_any_role(None, "/applications/my", Role.CANDIDATE),
    has_any_role(None, "/applications/job/**", Role.RECRUITER, Role.ADMIN),
    has_any_role(None, "/applications/*/status", Role.RECRUITER, Role.ADMIN),
)

DEFAULT_RULE = RouteRule(None, "/**", Access.AUTHENTICATED)


def resolve_rule(method: str, path: str) -> RouteRule:
    """Return the first rule matching the request, else the catch-all."""
    for rule in ROUTE_RULES:
        if rule.matches(method, path):
            return rule
    return DEFAULT_RULE


def check_route_access(method: str, path: str, ctx: SecurityContext) -> None:
    """Enforce the route gate.

    Raises UnauthenticatedError when a non-public route has no principal,
    ForbiddenError when the principal's role is not in the rule's set.
    """
    rule = resolve_rule(method, path)
    if rule.access is Access.PUBLIC:
        return
    if not ctx.is_authenticated:
        raise UnauthenticatedError("Authentication required")
    if rule.access is Access.ROLES and ctx.principal.role not in rule.roles:
        raise ForbiddenError("Access denied")


# ─── Role predicates ─────────────────────────────────────


def is_admin(role: Role) -> bool:
    match role:
        case Role.ADMIN:
            return True
        case Role.RECRUITER | Role.CANDIDATE:
            return False
        case _:
            assert_never(role)


def can_post_jobs(role: Role) -> bool:
    match role:
        case Role.RECRUITER | Role.ADMIN:
            return True
        case Role.CANDIDATE:
            return False
        case _:
            assert_never(role)


def can_apply(role: Role) -> bool:
    match role:
        case Role.CANDIDATE:
            return True
        case Role.RECRUITER | Role.ADMIN:
            return False
        case _:
            assert_never(role)


def owns_or_admin(owner_id: int, actor_id: int, actor_role: Role) -> bool:
    """Ownership gate: the actor owns the entity, or is an ADMIN."""
    return owner_id == actor_id or is_admin(actor_role)
