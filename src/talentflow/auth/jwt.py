"""JWT token creation and verification.

Learn: JWT (JSON Web Token) provides stateless authentication.
The token carries the account id (sub), email and role, and is signed
with the process-wide HS256 secret. Verification never touches the
database: a valid token is authoritative until it expires. There is
no revocation list, so deactivating an account does not invalidate
tokens already handed out.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from talentflow.config import settings
from talentflow.enums import Role


class TokenError(Exception):
    """Raised when token verification fails."""


class MalformedTokenError(TokenError):
    """The token could not be parsed, or its claims are unusable."""


class SignatureInvalidError(TokenError):
    """The signature does not match the configured secret."""


class TokenExpiredError(TokenError):
    """The token's exp claim is in the past."""


@dataclass(frozen=True)
class TokenClaims:
    account_id: int
    email: str
    role: Role
    issued_at: datetime
    expires_at: datetime


def issue_token(
    account_id: int,
    email: str,
    role: Role,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Create a signed access token for an account."""
    now = datetime.now(timezone.utc)
    expires = now + (
        expires_delta
        if expires_delta is not None
        else timedelta(minutes=settings.access_token_expire_minutes)
    )
    payload = {
        "sub": str(account_id),
        "email": email,
        "role": role.value,
        "iat": now,
        "exp": expires,
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> TokenClaims:
    """Verify and decode a token.

    Returns the embedded claims on success.
    Raises MalformedTokenError, SignatureInvalidError or TokenExpiredError.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "role", "iat", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise TokenExpiredError("Token has expired")
    except jwt.InvalidSignatureError:
        raise SignatureInvalidError("Token signature is invalid")
    except jwt.InvalidTokenError as e:
        raise MalformedTokenError(f"Malformed token: {e}")

    try:
        return TokenClaims(
            account_id=int(payload["sub"]),
            email=payload.get("email", ""),
            role=Role(payload["role"]),
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )
    except (TypeError, ValueError) as e:
        raise MalformedTokenError(f"Malformed token claims: {e}")
