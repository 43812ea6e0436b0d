"""Password hashing with bcrypt."""

import bcrypt

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def is_password_too_long(password: str) -> bool:
    """Return True if the password exceeds the bcrypt input limit."""
    return len(password.encode("utf-8")) > MAX_PASSWORD_BYTES


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a password with a fresh salt.

    Args:
        password: Plain-text password
        rounds: bcrypt work factor

    Returns:
        The encoded hash, safe to store

    Raises:
        ValueError: If the password is longer than 72 bytes
    """
    if is_password_too_long(password):
        raise ValueError("Password exceeds bcrypt 72-byte limit")
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds))
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plain-text password against a stored hash."""
    if is_password_too_long(password):
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed hash
        return False
