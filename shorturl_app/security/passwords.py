"""
Password hashing with bcrypt.

bcrypt only looks at the first 72 bytes of a password, and recent releases
raise instead of truncating, so the input is cut to 72 bytes here.
"""

import bcrypt

BCRYPT_MAX_BYTES = 72


def _to_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    """Return a salted bcrypt hash of ``password``"""
    return bcrypt.hashpw(_to_bytes(password), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check ``password`` against a hash produced by :func:`hash_password`"""
    try:
        return bcrypt.checkpw(_to_bytes(password), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed hash in storage
        return False


# Verified against when the username does not exist, so both login
# failures cost one bcrypt check.
DUMMY_PASSWORD_HASH = hash_password("not-a-real-password")
