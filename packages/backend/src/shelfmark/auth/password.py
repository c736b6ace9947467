"""Password hashing utilities.

bcrypt handles salting itself and produces hashes starting with "$2b$".
The cost factor comes from settings (10 rounds by default). Both
functions are CPU-bound; async callers run them via asyncio.to_thread.
"""

import bcrypt

# bcrypt ignores everything past 72 bytes
MAX_PASSWORD_BYTES = 72


def hash_password(password: str, rounds: int = 10) -> str:
    """Hash a password with bcrypt at the given cost factor."""
    pw_bytes = password.encode("utf-8")[:MAX_PASSWORD_BYTES]
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against its bcrypt hash.

    A corrupt or non-bcrypt hash never verifies.
    """
    try:
        pw_bytes = password.encode("utf-8")[:MAX_PASSWORD_BYTES]
        hash_bytes = password_hash.encode("utf-8")
        return bcrypt.checkpw(pw_bytes, hash_bytes)
    except (ValueError, TypeError):
        return False
