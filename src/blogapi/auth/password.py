"""Password hashing utilities.

Learn: Uses bcrypt for secure password hashing. bcrypt generates a fresh
random salt per call and embeds it, together with the work factor, in the
"$2b$12$..." digest — so hashing the same password twice never gives the
same string, and verify() needs nothing but the digest.
The work factor (rounds=12) takes ~100ms per hash on modern hardware.
"""

import bcrypt

BCRYPT_ROUNDS = 12
BCRYPT_MAX_BYTES = 72


def hash_password(password: str) -> str:
    """Hash a password with bcrypt.

    Passwords are truncated to 72 bytes (bcrypt's limit) on both the hash
    and verify side, so long passwords still round-trip.
    """
    pw_bytes = password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored digest (constant-time).

    A malformed or empty digest is a failed match, not an error.
    """
    try:
        pw_bytes = password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        hash_bytes = password_hash.encode("utf-8")
        return bcrypt.checkpw(pw_bytes, hash_bytes)
    except (ValueError, TypeError, AttributeError):
        return False
