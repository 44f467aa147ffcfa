"""Password hashing helpers backed by bcrypt."""

import bcrypt

# Verified against when the account does not exist so that unknown-email
# logins cost the same bcrypt round as wrong-password logins.
_DUMMY_HASH = bcrypt.hashpw(b"fleet-inventory-timing-guard", bcrypt.gensalt()).decode()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check a password against its hash using bcrypt."""
    try:
        return bcrypt.checkpw(plain_password.encode(), hashed_password.encode())
    except (ValueError, TypeError):  # guard against malformed hashes
        return False


def get_password_hash(password: str) -> str:
    """Hash a password for storage using bcrypt."""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def burn_password_check(plain_password: str) -> None:
    """Spend one bcrypt verification without a real account."""
    verify_password(plain_password, _DUMMY_HASH)
