"""Password hashing utilities.

Learn: Uses bcrypt for secure password hashing. bcrypt automatically
handles salting and is resistant to rainbow table attacks.
Passwords are truncated to 72 bytes (bcrypt's limit).
"""

import bcrypt

from talentflow.config import settings


def hash_password(password: str) -> str:
    """Hash a password with bcrypt.

    Tests run with a lower work factor; production uses 12 rounds
    (~100ms per hash on modern hardware).
    """
    pw_bytes = password.encode("utf-8")[:72]
    rounds = 4 if settings.environment == "test" else 12
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its bcrypt hash."""
    try:
        pw_bytes = password.encode("utf-8")[:72]
        hash_bytes = password_hash.encode("utf-8")
        return bcrypt.checkpw(pw_bytes, hash_bytes)
    except (ValueError, TypeError):
        return False
