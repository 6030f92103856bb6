"""Account registration and login.

Learn: Emails are normalised to lower case before every lookup and
insert, so "A@X.com" and "a@x.com" are the same account. Login failures
for an unknown email and for a wrong password raise the same
InvalidCredentialsError so the response cannot be used to probe which
emails are registered.
"""

from dataclasses import dataclass

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from talentflow.auth.context import SecurityContext
from talentflow.auth.jwt import issue_token
from talentflow.auth.password import hash_password, verify_password
from talentflow.db.models import User
from talentflow.enums import Role
from talentflow.errors import (
    DomainValidationError,
    InvalidCredentialsError,
    NotFoundError,
    UnauthenticatedError,
)

logger = structlog.get_logger()


def normalize_email(email: str) -> str:
    return email.strip().lower()


@dataclass(frozen=True)
class AuthResult:
    user: User
    token: str


class AuthService:
    """Creates accounts and exchanges credentials for tokens."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_email(self, email: str) -> User | None:
        q = select(User).where(User.email == normalize_email(email))
        result = await self.db.execute(q)
        return result.scalars().first()

    async def create_account(
        self, *, email: str, full_name: str, password: str, role: Role
    ) -> User:
        """Insert a new active account. Fails if the email is taken."""
        if await self.find_by_email(email):
            raise DomainValidationError("Email already exists")

        user = User(
            email=normalize_email(email),
            full_name=full_name,
            password_hash=hash_password(password),
            role=role,
            is_active=True,
        )
        self.db.add(user)
        try:
            await self.db.flush()
        except IntegrityError:
            await self.db.rollback()
            raise DomainValidationError("Email already exists")
        await self.db.commit()
        return user

    async def register(
        self, *, email: str, full_name: str, password: str, role: Role
    ) -> AuthResult:
        user = await self.create_account(
            email=email, full_name=full_name, password=password, role=role
        )
        logger.info("auth.registered", email=user.email, role=user.role.value)
        return AuthResult(user=user, token=issue_token(user.id, user.email, user.role))

    async def login(self, *, email: str, password: str) -> AuthResult:
        user = await self.find_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            logger.info("auth.login_failed", email=normalize_email(email))
            raise InvalidCredentialsError()

        if not user.is_active:
            logger.info("auth.login_disabled", email=user.email)
            raise UnauthenticatedError("Account is disabled")

        logger.info("auth.login_succeeded", email=user.email)
        return AuthResult(user=user, token=issue_token(user.id, user.email, user.role))

    async def current_account(self, ctx: SecurityContext) -> User:
        """Resolve the request's principal to its stored account."""
        principal = ctx.current_principal()
        user = await self.db.get(User, principal.account_id)
        if not user:
            raise NotFoundError("User not found")
        return user
