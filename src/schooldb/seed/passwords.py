"""bcrypt password hashing for seeded accounts."""

import bcrypt

# Work factor used by the application's login code
BCRYPT_ROUNDS = 10


def hash_password(password: str, rounds: int | None = None) -> str:
    """Hash a plain-text password with a fresh bcrypt salt."""
    salt = bcrypt.gensalt(rounds=rounds or BCRYPT_ROUNDS)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plain-text password against a bcrypt hash."""
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
